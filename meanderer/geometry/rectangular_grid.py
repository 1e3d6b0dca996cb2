"""
Rectangular (row/column) maze grid.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from meanderer.geometry.base_grid import BaseMazeGrid, is_positive_extent
from meanderer.geometry.positions import Position
from meanderer.utils.exceptions import InvalidDimensions

if TYPE_CHECKING:
    from collections.abc import Iterator


class RectangularGrid(BaseMazeGrid[Position]):
    """
    Grid of cells laid out in rows and columns, 4-connected.

    Row 0 is the northern edge and column 0 the western edge.
    """

    topology = "rectangular"

    def __init__(self, rows: int, cols: int):
        """
        Initialize grid.

        Args:
            rows: Number of rows
            cols: Number of columns

        Raises:
            InvalidDimensions: If rows or cols is not a positive integer
        """
        if not is_positive_extent(rows) or not is_positive_extent(cols):
            raise InvalidDimensions({"rows": rows, "cols": cols}, component="RectangularGrid")
        self.rows = rows
        self.cols = cols
        super().__init__()

    def _generate_positions(self) -> Iterator[Position]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield Position(r, c)

    def dimensions(self) -> dict[str, int]:
        return {"rows": self.rows, "cols": self.cols}

    def get_pos(self, row: int, col: int) -> Position | None:
        pos = Position(row, col)
        return pos if pos in self.cells else None

    def north(self, pos: Position) -> Position | None:
        return self.get_pos(pos.row - 1, pos.col)

    def south(self, pos: Position) -> Position | None:
        return self.get_pos(pos.row + 1, pos.col)

    def east(self, pos: Position) -> Position | None:
        return self.get_pos(pos.row, pos.col + 1)

    def west(self, pos: Position) -> Position | None:
        return self.get_pos(pos.row, pos.col - 1)

    def neighbors(self, pos: Position) -> list[Position]:
        if pos not in self.cells:
            return []
        candidates = (self.north(pos), self.south(pos), self.east(pos), self.west(pos))
        return [n for n in candidates if n is not None]

    def corners(self) -> list[Position]:
        """The extreme positions NW, NE, SW, SE (duplicates dropped on thin grids)."""
        last_row, last_col = self.rows - 1, self.cols - 1
        corners = [
            Position(0, 0),
            Position(0, last_col),
            Position(last_row, 0),
            Position(last_row, last_col),
        ]
        return list(dict.fromkeys(corners))

    def center(self) -> Position:
        return Position((self.rows - 1) // 2, (self.cols - 1) // 2)
