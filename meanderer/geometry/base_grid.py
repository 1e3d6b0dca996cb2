"""
Shared grid machinery.

BaseMazeGrid owns an insertion-ordered position -> cell mapping and provides
every helper that does not depend on topology. Subclasses build the cells in
traversal order and implement ``neighbors``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from numbers import Integral
from typing import TYPE_CHECKING, Generic, TypeVar

from meanderer.geometry.cells import Cell
from meanderer.utils.exceptions import InvalidLink, InvalidPosition

if TYPE_CHECKING:
    import random
    from collections.abc import Iterator

P = TypeVar("P")


def is_positive_extent(value) -> bool:
    """True for integers >= 1 (bools excluded)."""
    return isinstance(value, Integral) and not isinstance(value, bool) and value >= 1


class BaseMazeGrid(ABC, Generic[P]):
    """
    Base class for maze grids.

    Attributes:
        topology: Name of the topology ("rectangular" or "polar")
        cells: Mapping from position to cell, in traversal order
    """

    topology: str = "abstract"

    def __init__(self):
        self.cells: dict[P, Cell[P]] = {}
        for pos in self._generate_positions():
            self.cells[pos] = Cell(pos)
        self._positions: list[P] = list(self.cells)

    @abstractmethod
    def _generate_positions(self) -> Iterator[P]:
        """Yield every position of the grid in traversal order."""

    @abstractmethod
    def neighbors(self, pos: P) -> list[P]:
        """
        Structural neighbors of a position, independent of link state.

        Args:
            pos: Position to query

        Returns:
            Neighbor positions in a fixed order (empty for unknown positions)
        """

    # Access

    def contains(self, pos: P) -> bool:
        return pos in self.cells

    def __contains__(self, pos: object) -> bool:
        return pos in self.cells

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell[P]]:
        return iter(self.cells.values())

    def get(self, pos: P) -> Cell[P] | None:
        """Get cell at position, None for positions outside the grid."""
        return self.cells.get(pos)

    def cell(self, pos: P) -> Cell[P]:
        """
        Get cell at position.

        Raises:
            InvalidPosition: If pos is not part of the grid
        """
        try:
            return self.cells[pos]
        except KeyError:
            raise InvalidPosition(pos, component=type(self).__name__) from None

    def all_positions(self) -> list[P]:
        """All positions in deterministic traversal order."""
        return list(self._positions)

    def random_position(self, rng: random.Random) -> P:
        return rng.choice(self._positions)

    @property
    def size(self) -> int:
        return len(self.cells)

    # Links

    def is_neighbor(self, first: P, second: P) -> bool:
        return second in self.neighbors(first)

    def link(self, first: P, second: P) -> None:
        """
        Create a passage between two structural neighbors (both directions).

        Raises:
            InvalidLink: If the positions are not structural neighbors
        """
        if not self.is_neighbor(first, second):
            raise InvalidLink(first, second, component=type(self).__name__)
        self.cells[first].link(second)
        self.cells[second].link(first)

    def unlink(self, first: P, second: P) -> None:
        """
        Remove the passage between two structural neighbors, if any.

        Raises:
            InvalidLink: If the positions are not structural neighbors
        """
        if not self.is_neighbor(first, second):
            raise InvalidLink(first, second, component=type(self).__name__)
        self.cells[first].unlink(second)
        self.cells[second].unlink(first)

    def is_linked(self, first: P, second: P) -> bool:
        cell = self.cells.get(first)
        return cell is not None and cell.is_linked_pos(second)

    def links(self, pos: P) -> list[P]:
        """Linked positions of pos, sorted in traversal order."""
        return sorted(self.cell(pos).links)

    def num_links(self, pos: P) -> int:
        cell = self.cells.get(pos)
        return cell.num_links if cell is not None else 0

    def has_links(self, pos: P) -> bool:
        return self.num_links(pos) > 0

    def is_dead_end(self, pos: P) -> bool:
        return self.num_links(pos) == 1

    def link_count(self) -> int:
        """Number of undirected links in the grid."""
        return sum(cell.num_links for cell in self.cells.values()) // 2

    def linked_pairs(self) -> set[tuple[P, P]]:
        """Every link as an ordered (smaller, larger) position pair."""
        pairs = set()
        for pos, cell in self.cells.items():
            for other in cell.links:
                pairs.add((pos, other) if pos < other else (other, pos))
        return pairs

    # Solver state, read by renderers

    def weight(self, pos: P) -> int:
        return self.cell(pos).weight

    def in_solution(self, pos: P) -> bool:
        return self.cell(pos).in_solution

    def max_weight(self) -> int:
        return max((cell.weight for cell in self.cells.values()), default=0)

    def reset_weights(self) -> None:
        for cell in self.cells.values():
            cell.weight = 0

    def clear_solution(self) -> None:
        for cell in self.cells.values():
            cell.in_solution = False

    def solution_path_positions(self) -> list[P]:
        return [pos for pos, cell in self.cells.items() if cell.in_solution]

    def dimensions(self) -> dict[str, int]:
        """Constructor dimensions, used for logging and repr."""
        return {}

    def __repr__(self) -> str:
        dims = ", ".join(f"{k}={v}" for k, v in self.dimensions().items())
        return f"{type(self).__name__}({dims})"
