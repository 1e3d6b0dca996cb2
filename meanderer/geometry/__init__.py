"""
Maze geometries: positions, cells and the two grid topologies.

Examples
--------
>>> from meanderer.geometry import RectangularGrid, Position
>>> grid = RectangularGrid(3, 4)
>>> grid.neighbors(Position(0, 0))
[Position(row=1, col=0), Position(row=0, col=1)]
"""

from .base_grid import BaseMazeGrid
from .cells import Cell
from .polar_grid import PolarGrid, compute_ring_sizes
from .positions import PolarPosition, Position
from .protocols import MazeCell, MazeGrid, MazePosition
from .rectangular_grid import RectangularGrid

__all__ = [
    # Positions and cells
    "Cell",
    "PolarPosition",
    "Position",
    # Protocols
    "MazeCell",
    "MazeGrid",
    "MazePosition",
    # Grids
    "BaseMazeGrid",
    "PolarGrid",
    "RectangularGrid",
    "compute_ring_sizes",
]
