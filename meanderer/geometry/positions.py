"""
Coordinate keys for the two grid topologies.

Both position types are frozen (hashable) and ordered. Their natural order is
the grid traversal order, so ``sorted(positions)`` is row-major for
rectangular grids and ring-then-index for polar grids.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    """
    Cell coordinate in a rectangular grid.

    Attributes:
        row: Row index, 0 is the northern edge
        col: Column index, 0 is the western edge
    """

    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass(frozen=True, order=True)
class PolarPosition:
    """
    Cell coordinate in a polar grid.

    Attributes:
        ring: Ring index, 0 is the single center cell
        index: Cell index within the ring, increasing clockwise
    """

    ring: int
    index: int

    def __str__(self) -> str:
        return f"<{self.ring}, {self.index}>"
