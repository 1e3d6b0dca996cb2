"""
Maze cell: a graph node keyed by its position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

P = TypeVar("P")


@dataclass(eq=False)
class Cell(Generic[P]):
    """
    Represents a cell in a maze grid.

    Links are stored as positions, never as references to other cells, so
    the owning grid is the only container of cells.

    Attributes:
        pos: Position of this cell in its grid
        weight: Distance from the last solve source (0 until a solve pass)
        in_solution: Whether the cell lies on the most recently solved path
        links: Positions this cell has a passage to
    """

    pos: P
    weight: int = 0
    in_solution: bool = False
    links: set[P] = field(default_factory=set)

    def __hash__(self):
        """Make cell hashable based on position only."""
        return hash(self.pos)

    def __eq__(self, other):
        """Equality based on position only."""
        if not isinstance(other, Cell):
            return NotImplemented
        return self.pos == other.pos

    @property
    def label(self) -> str:
        return str(self.weight)

    def link(self, other: P) -> None:
        self.links.add(other)

    def unlink(self, other: P) -> None:
        self.links.discard(other)

    def is_linked_pos(self, other: P) -> bool:
        return other in self.links

    @property
    def num_links(self) -> int:
        return len(self.links)

    def update_weight(self, weight: int) -> None:
        self.weight = weight

    def mark_in_solution(self) -> None:
        self.in_solution = True
