"""
Maze Solving

Breadth-first distances over the passages of a maze, shortest-path
extraction and the "longest path" helpers used to pick start and goal.

Every passage has unit cost, so breadth-first order is shortest-path order.
Each position is settled the first time the frontier reaches it, which keeps
the solver correct on braided mazes that contain loops.

Functions:
- distances_from: Distance of every reachable position from a start
- dijkstra: distances_from plus writing each cell's weight
- solve: Shortest path, marked on the grid
- furthest_corners: Pair of rectangular corners furthest apart
- furthest_on_rim: Outermost-ring position furthest from a reference
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from meanderer.geometry.polar_grid import PolarGrid
from meanderer.geometry.rectangular_grid import RectangularGrid
from meanderer.utils.exceptions import InvalidPosition, Unreachable, UnsupportedTopology
from meanderer.utils.maze_logging import get_logger, log_solve_result

if TYPE_CHECKING:
    from collections.abc import Iterator

    from meanderer.geometry.base_grid import BaseMazeGrid

logger = get_logger(__name__)


class DistanceMap(Mapping):
    """
    Read-only mapping from reachable position to passage distance.

    Positions not connected to ``root`` are absent; looking one up raises
    Unreachable rather than KeyError.

    Attributes:
        root: Position the distances were measured from
    """

    def __init__(self, grid: BaseMazeGrid, root: Any, distances: dict):
        self._grid = grid
        self.root = root
        self._distances = distances

    def __getitem__(self, pos: Any) -> int:
        try:
            return self._distances[pos]
        except KeyError:
            raise Unreachable(pos, self.root, component="DistanceMap") from None

    def __contains__(self, pos: object) -> bool:
        return pos in self._distances

    def __iter__(self) -> Iterator:
        return iter(self._distances)

    def __len__(self) -> int:
        return len(self._distances)

    def get(self, pos: Any, default: Any = None) -> Any:
        return self._distances.get(pos, default)

    def distance(self, pos: Any) -> int:
        return self[pos]

    def max(self) -> tuple[Any, int]:
        """Furthest position and its distance, ties broken by traversal order."""
        furthest = max(self._distances.values())
        pos = min(p for p, d in self._distances.items() if d == furthest)
        return pos, furthest

    def path_to(self, target: Any) -> list:
        """
        Shortest path from root to target, inclusive at both ends.

        Walks back from the target through linked neighbors whose distance is
        one less, taking the first such neighbor in traversal order.

        Raises:
            Unreachable: If target is not connected to root
        """
        current = target
        remaining = self[target]
        path = [current]

        while remaining > 0:
            remaining -= 1
            current = next(n for n in self._grid.links(current) if self._distances.get(n) == remaining)
            path.append(current)

        path.reverse()
        return path

    def __repr__(self) -> str:
        return f"DistanceMap(root={self.root}, reachable={len(self)})"


def _require_position(grid: BaseMazeGrid, pos: Any, role: str) -> None:
    if pos not in grid:
        raise InvalidPosition(pos, component="maze_solver", role=role)


def distances_from(grid: BaseMazeGrid, start: Any) -> DistanceMap:
    """
    Breadth-first distances from start along passages.

    Args:
        grid: Maze to measure
        start: Source position

    Returns:
        DistanceMap rooted at start

    Raises:
        InvalidPosition: If start is not part of the grid
    """
    _require_position(grid, start, "start")

    distances = {start: 0}
    frontier = deque([start])

    while frontier:
        current = frontier.popleft()
        next_distance = distances[current] + 1
        for neighbor in grid.links(current):
            if neighbor not in distances:
                distances[neighbor] = next_distance
                frontier.append(neighbor)

    return DistanceMap(grid, start, distances)


def dijkstra(grid: BaseMazeGrid, start: Any) -> DistanceMap:
    """
    Compute distances from start and record them as cell weights.

    Unreachable cells get weight 0. With unit passage costs this is the
    breadth-first special case of Dijkstra's algorithm.
    """
    distance_map = distances_from(grid, start)
    for cell in grid:
        cell.update_weight(distance_map.get(cell.pos, 0))
    return distance_map


def solve(grid: BaseMazeGrid, start: Any, target: Any) -> list:
    """
    Find and mark the shortest path between two positions.

    Clears the previous solution, writes distances from start into the cell
    weights and flags every cell on the new path as in_solution. An
    unreachable target leaves the grid with fresh weights and no solution.

    Args:
        grid: Maze to solve
        start: First position of the path
        target: Last position of the path

    Returns:
        Positions from start to target; len(path) - 1 equals their distance

    Raises:
        InvalidPosition: If start or target is not part of the grid
        Unreachable: If target is not connected to start
    """
    _require_position(grid, start, "start")
    _require_position(grid, target, "target")

    grid.clear_solution()
    distance_map = dijkstra(grid, start)
    if target not in distance_map:
        raise Unreachable(target, start, component="solve")

    path = distance_map.path_to(target)
    for pos in path:
        grid.cell(pos).mark_in_solution()

    log_solve_result(logger, start, target, len(path) - 1, len(distance_map))
    return path


def furthest_corners(grid: RectangularGrid) -> tuple[Any, Any]:
    """
    Pair of corners with the longest passage distance between them.

    Corners are tried in NW, NE, SW, SE order and the first maximal pair
    wins, so the result is stable for a given maze. A single-cell grid
    returns its only cell twice.

    Raises:
        UnsupportedTopology: If grid is not rectangular
        Unreachable: If some corner is disconnected from another
    """
    if not isinstance(grid, RectangularGrid):
        raise UnsupportedTopology("furthest_corners", grid.topology, ("rectangular",), component="maze_solver")

    corners = grid.corners()
    best = (corners[0], corners[0])
    best_distance = -1

    for corner in corners:
        distance_map = distances_from(grid, corner)
        for other in corners:
            if other == corner:
                continue
            distance = distance_map.distance(other)
            if distance > best_distance:
                best = (corner, other)
                best_distance = distance

    logger.debug(f"Furthest corners {best[0]} -> {best[1]} at distance {max(best_distance, 0)}")
    return best


def furthest_on_rim(grid: PolarGrid, reference: Any) -> Any:
    """
    Outermost-ring position furthest from reference.

    Ties are broken by traversal order (lowest index on the rim).

    Raises:
        UnsupportedTopology: If grid is not polar
        InvalidPosition: If reference is not part of the grid
        Unreachable: If no rim position is connected to reference
    """
    if not isinstance(grid, PolarGrid):
        raise UnsupportedTopology("furthest_on_rim", grid.topology, ("polar",), component="maze_solver")

    distance_map = distances_from(grid, reference)
    rim = [pos for pos in grid.rim_positions() if pos in distance_map]
    if not rim:
        raise Unreachable(grid.rim_positions()[0], reference, component="furthest_on_rim")

    return max(rim, key=distance_map.distance)
