"""
Polar (circular) maze grid.

Ring 0 is a single center cell. Every outer ring keeps cells roughly square
by subdividing the cells of the ring inside it: ring ``r`` holds
``ratio * size(r - 1)`` cells where ``ratio`` is the rounded ratio between
the estimated cell width on ring ``r`` and the ring height.

    ring 0:  1 cell
    ring 1:  6 cells   (each ring-1 cell has ring 0 as inward neighbor)
    ring 2: 12 cells   (each ring-1 cell has 2 outward neighbors)
    ring 3: 24 cells
    ring 4: 24 cells   (ratio 1, one outward neighbor per cell)

Indices increase clockwise; the clockwise neighbor of the last cell of a ring
is index 0.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from meanderer.geometry.base_grid import BaseMazeGrid, is_positive_extent
from meanderer.geometry.positions import PolarPosition
from meanderer.utils.exceptions import InvalidDimensions, InvalidPosition

if TYPE_CHECKING:
    from collections.abc import Iterator


def compute_ring_sizes(rings: int) -> list[int]:
    """
    Number of cells on each ring of a polar grid.

    Args:
        rings: Number of rings including the center

    Returns:
        List of cell counts, one per ring
    """
    sizes = [1]
    for ring in range(1, rings):
        previous = sizes[-1]
        # cell width on this ring relative to a ring height of 1 (radius == ring)
        estimated_width = 2.0 * math.pi * ring / previous
        ratio = max(1, math.floor(estimated_width + 0.5))
        sizes.append(ratio * previous)
    return sizes


class PolarGrid(BaseMazeGrid[PolarPosition]):
    """Grid of concentric rings of cells around a single center cell."""

    topology = "polar"

    def __init__(self, rings: int):
        """
        Initialize grid.

        Args:
            rings: Number of rings, including the center cell's ring 0

        Raises:
            InvalidDimensions: If rings is not a positive integer
        """
        if not is_positive_extent(rings):
            raise InvalidDimensions({"rings": rings}, component="PolarGrid")
        self.rings = rings
        self.ring_sizes = compute_ring_sizes(rings)
        super().__init__()

    def _generate_positions(self) -> Iterator[PolarPosition]:
        for ring, size in enumerate(self.ring_sizes):
            for index in range(size):
                yield PolarPosition(ring, index)

    def dimensions(self) -> dict[str, int]:
        return {"rings": self.rings}

    def ring_size(self, ring: int) -> int:
        if not 0 <= ring < self.rings:
            raise InvalidPosition(PolarPosition(ring, 0), component="PolarGrid", role="ring")
        return self.ring_sizes[ring]

    def _ratio(self, ring: int) -> int:
        """How many cells of ``ring`` sit outside one cell of ``ring - 1``."""
        return self.ring_sizes[ring] // self.ring_sizes[ring - 1]

    def inward(self, pos: PolarPosition) -> PolarPosition | None:
        if pos not in self.cells or pos.ring == 0:
            return None
        return PolarPosition(pos.ring - 1, pos.index // self._ratio(pos.ring))

    def outward(self, pos: PolarPosition) -> list[PolarPosition]:
        if pos not in self.cells or pos.ring == self.rings - 1:
            return []
        ratio = self._ratio(pos.ring + 1)
        first = pos.index * ratio
        return [PolarPosition(pos.ring + 1, first + k) for k in range(ratio)]

    def clockwise(self, pos: PolarPosition) -> PolarPosition | None:
        if pos not in self.cells:
            return None
        size = self.ring_sizes[pos.ring]
        if size == 1:
            return None
        return PolarPosition(pos.ring, (pos.index + 1) % size)

    def counter_clockwise(self, pos: PolarPosition) -> PolarPosition | None:
        if pos not in self.cells:
            return None
        size = self.ring_sizes[pos.ring]
        if size == 1:
            return None
        return PolarPosition(pos.ring, (pos.index - 1) % size)

    def neighbors(self, pos: PolarPosition) -> list[PolarPosition]:
        if pos not in self.cells:
            return []
        candidates = [self.inward(pos), self.clockwise(pos), self.counter_clockwise(pos), *self.outward(pos)]
        # a two-cell ring has the same cw and ccw neighbor
        return list(dict.fromkeys(n for n in candidates if n is not None and n != pos))

    def rim_positions(self) -> list[PolarPosition]:
        """Positions on the outermost ring, in index order."""
        outer = self.rings - 1
        return [PolarPosition(outer, index) for index in range(self.ring_sizes[outer])]

    def center(self) -> PolarPosition:
        return PolarPosition(0, 0)
