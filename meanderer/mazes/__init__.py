"""
Maze generation and post-processing.

Examples
--------
>>> from meanderer.geometry import RectangularGrid
>>> from meanderer.mazes import MazeAlgorithm, PerfectMazeGenerator, braid
>>> grid = RectangularGrid(8, 8)
>>> _ = PerfectMazeGenerator(grid, MazeAlgorithm.WILSONS).generate(seed=3)
>>> grid.link_count()
63
"""

from .maze_config import MazeConfig, build_grid
from .maze_generator import (
    GROWING_TREE_STRATEGIES,
    MazeAlgorithm,
    PerfectMazeGenerator,
    aldous_broder,
    binary_tree,
    ellers,
    generate_maze,
    growing_tree,
    hunt_and_kill,
    iterative_backtracker,
    recursive_backtracker,
    sidewinder,
    simplified_prims,
    true_prims,
    verify_perfect_maze,
    wilsons,
)
from .maze_postprocessing import braid, count_dead_ends, dead_ends

__all__ = [
    # Configuration
    "MazeConfig",
    "build_grid",
    # Dispatch
    "GROWING_TREE_STRATEGIES",
    "MazeAlgorithm",
    "PerfectMazeGenerator",
    "generate_maze",
    "verify_perfect_maze",
    # Algorithms
    "aldous_broder",
    "binary_tree",
    "ellers",
    "growing_tree",
    "hunt_and_kill",
    "iterative_backtracker",
    "recursive_backtracker",
    "sidewinder",
    "simplified_prims",
    "true_prims",
    "wilsons",
    # Post-processing
    "braid",
    "count_dead_ends",
    "dead_ends",
]
