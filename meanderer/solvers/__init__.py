"""
Maze solvers.

Examples
--------
>>> from meanderer.mazes import generate_maze
>>> from meanderer.solvers import furthest_corners, solve
>>> grid = generate_maze(rows=10, cols=10, algorithm="wilsons", seed=1)
>>> start, goal = furthest_corners(grid)
>>> path = solve(grid, start, goal)
"""

from .maze_solver import DistanceMap, dijkstra, distances_from, furthest_corners, furthest_on_rim, solve

__all__ = [
    "DistanceMap",
    "dijkstra",
    "distances_from",
    "furthest_corners",
    "furthest_on_rim",
    "solve",
]
