"""
Capability protocols for maze geometries.

Generators, post-processors, the solver and the renderer are written against
these protocols rather than against concrete grid classes:

- MazePosition: hashable, ordered coordinate key
- MazeCell: graph node holding links, weight and solution flag
- MazeGrid: owner of all cells plus the topology's neighbor function

Example:
    def carve(grid: MazeGrid, rng: random.Random) -> None:
        for pos in grid.all_positions():
            options = grid.neighbors(pos)
            ...

    if isinstance(grid, MazeGrid):
        ...

Both concrete topologies (RectangularGrid, PolarGrid) satisfy MazeGrid by
deriving from BaseMazeGrid, which supplies the default-implemented helpers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    import random
    from collections.abc import Iterator


@runtime_checkable
class MazePosition(Protocol):
    """
    Coordinate key for a cell.

    Positions compare by value and sort in grid traversal order.
    """

    def __hash__(self) -> int: ...

    def __eq__(self, other: object) -> bool: ...

    def __lt__(self, other: Any) -> bool: ...


@runtime_checkable
class MazeCell(Protocol):
    """
    Graph node owned by a grid.

    Links are kept by position value; a cell never holds another cell.
    """

    pos: Any
    weight: int
    in_solution: bool
    links: set

    def link(self, other: Any) -> None: ...

    def unlink(self, other: Any) -> None: ...

    def is_linked_pos(self, other: Any) -> bool: ...


@runtime_checkable
class MazeGrid(Protocol):
    """
    Owner of the complete position -> cell mapping.

    Required capability:
        neighbors(pos): structural adjacency, independent of link state

    Invariants:
        is_linked(a, b) == is_linked(b, a)
        links only connect mutual structural neighbors
    """

    topology: str

    def neighbors(self, pos: Any) -> list: ...

    def all_positions(self) -> list: ...

    def contains(self, pos: Any) -> bool: ...

    def cell(self, pos: Any) -> MazeCell: ...

    def link(self, first: Any, second: Any) -> None: ...

    def unlink(self, first: Any, second: Any) -> None: ...

    def is_linked(self, first: Any, second: Any) -> bool: ...

    def links(self, pos: Any) -> list: ...

    def num_links(self, pos: Any) -> int: ...

    def is_dead_end(self, pos: Any) -> bool: ...

    def random_position(self, rng: random.Random) -> Any: ...

    def __len__(self) -> int: ...

    def __iter__(self) -> Iterator[MazeCell]: ...
