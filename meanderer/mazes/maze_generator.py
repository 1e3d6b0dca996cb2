"""
Perfect Maze Generation

Implements classic maze generation algorithms over any MazeGrid topology.

All algorithms produce perfect mazes with two critical properties:
1. Fully Connected: Path exists between any two cells
2. No Loops: Exactly one unique path between any pair of cells

Implemented Algorithms:
- Binary Tree: Single pass, strong diagonal bias (rectangular only)
- Sidewinder: Row runs closed northward, vertical bias (rectangular only)
- Aldous-Broder: Random walk, uniform spanning tree, slow to finish
- Wilson's: Loop-erased random walks, uniform spanning tree
- Hunt-and-Kill: Random walk with a traversal-order hunt phase
- Recursive / Iterative Backtracker (DFS): Long winding paths
- Growing Tree: Flexible framework over an active set
- Simplified / True Prim's: Frontier growth, many short dead ends
- Eller's: Row-by-row set merging, O(width) state (rectangular only)

Mathematical Foundation:
Perfect mazes are spanning trees on grid graphs, ensuring:
- Connectivity: |V| vertices connected by |V|-1 edges
- Acyclicity: No loops in the graph structure
- Uniqueness: Exactly one path between any two vertices

Every algorithm draws all randomness from the random.Random instance it is
given, so the same seed on the same grid always carves the same maze. No
algorithm recurses on the interpreter stack; depth-first carving keeps its
frames on an explicit list.

Reference: Jamis Buck, "Mazes for Programmers" (2015)
"""

from __future__ import annotations

import heapq
import logging
import random
from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Any

from meanderer.geometry.positions import Position
from meanderer.geometry.rectangular_grid import RectangularGrid
from meanderer.utils.exceptions import ConfigurationError, UnsupportedTopology, validate_parameter_value
from meanderer.utils.maze_logging import (
    LoggedOperation,
    get_logger,
    log_generation_complete,
    log_generation_start,
    log_validation_error,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Hashable

    from meanderer.geometry.base_grid import BaseMazeGrid
    from meanderer.mazes.maze_config import MazeConfig

logger = get_logger(__name__)


class MazeAlgorithm(Enum):
    """Available perfect maze generation algorithms."""

    BINARY_TREE = "binary_tree"
    SIDEWINDER = "sidewinder"
    ALDOUS_BRODER = "aldous_broder"
    WILSONS = "wilsons"
    HUNT_AND_KILL = "hunt_and_kill"
    RECURSIVE_BACKTRACKER = "recursive_backtracker"
    ITERATIVE_BACKTRACKER = "iterative_backtracker"
    GROWING_TREE = "growing_tree"
    SIMPLIFIED_PRIMS = "simplified_prims"
    TRUE_PRIMS = "true_prims"
    ELLERS = "ellers"

    @property
    def supported_topologies(self) -> tuple[str, ...]:
        if self in _RECTANGULAR_ONLY:
            return ("rectangular",)
        return ("rectangular", "polar")

    def supports(self, topology: str) -> bool:
        return topology in self.supported_topologies


_RECTANGULAR_ONLY = frozenset({MazeAlgorithm.BINARY_TREE, MazeAlgorithm.SIDEWINDER, MazeAlgorithm.ELLERS})

GROWING_TREE_STRATEGIES = ("newest", "oldest", "random", "mixed")


class _RandomPool:
    """
    Set of positions supporting O(1) membership, removal and random choice.

    Removal swaps the last element into the freed slot, so the order is
    scrambled but stays a pure function of the operations applied.
    """

    def __init__(self, items=()):
        self._items: list = []
        self._index: dict = {}
        for item in items:
            self.add(item)

    def add(self, item: Hashable) -> None:
        if item not in self._index:
            self._index[item] = len(self._items)
            self._items.append(item)

    def remove(self, item: Hashable) -> None:
        slot = self._index.pop(item)
        last = self._items.pop()
        if slot < len(self._items):
            self._items[slot] = last
            self._index[last] = slot

    def choice(self, rng: random.Random):
        return rng.choice(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._index

    def __len__(self) -> int:
        return len(self._items)


def _require_rectangular(grid: BaseMazeGrid, algorithm: MazeAlgorithm) -> RectangularGrid:
    if not isinstance(grid, RectangularGrid):
        raise UnsupportedTopology(
            algorithm.value, grid.topology, ("rectangular",), component="maze_generator"
        )
    return grid


def binary_tree(grid: RectangularGrid, rng: random.Random) -> None:
    """
    Binary Tree algorithm.

    Visits every cell once and links it to its north or east neighbor,
    chosen uniformly among the ones that exist. The north row becomes one
    long corridor and so does the east column.

    Characteristics:
    - Fastest possible: O(n), no extra state
    - Strong bias: every path drifts toward the north-east corner
    """
    _require_rectangular(grid, MazeAlgorithm.BINARY_TREE)

    for pos in grid.all_positions():
        choices = [n for n in (grid.north(pos), grid.east(pos)) if n is not None]
        if choices:
            grid.link(pos, rng.choice(choices))


def sidewinder(grid: RectangularGrid, rng: random.Random, close_probability: float = 0.5) -> None:
    """
    Sidewinder algorithm.

    Processes each row west to east while collecting a run of cells. At each
    cell the run is either extended east or closed: one random member of the
    run is linked north and a new run begins. The north row cannot close
    northward and becomes a single corridor; the eastern boundary always
    closes the run.

    Args:
        grid: Rectangular grid to carve
        rng: Random source
        close_probability: Chance of closing the run at an interior cell
    """
    _require_rectangular(grid, MazeAlgorithm.SIDEWINDER)
    validate_parameter_value(
        close_probability, "close_probability", (int, float), (0.0, 1.0), component="sidewinder"
    )

    for row in range(grid.rows):
        run: list[Position] = []

        for col in range(grid.cols):
            pos = Position(row, col)
            run.append(pos)

            at_eastern_boundary = grid.east(pos) is None
            at_northern_boundary = grid.north(pos) is None
            should_close = at_eastern_boundary or (not at_northern_boundary and rng.random() < close_probability)

            if should_close:
                member = rng.choice(run)
                north = grid.north(member)
                if north is not None:
                    grid.link(member, north)
                run.clear()
            else:
                grid.link(pos, grid.east(pos))


def aldous_broder(grid: BaseMazeGrid, rng: random.Random) -> None:
    """
    Aldous-Broder algorithm.

    Random walk over structural neighbors; the first time the walk enters a
    cell, the step that entered it becomes a passage.

    Characteristics:
    - Unbiased: every spanning tree equally likely
    - Slow to finish: the last unvisited cells take a long time to hit
    """
    positions = grid.all_positions()
    current = rng.choice(positions)
    visited = {current}
    remaining = len(positions) - 1

    while remaining > 0:
        neighbor = rng.choice(grid.neighbors(current))
        if neighbor not in visited:
            grid.link(current, neighbor)
            visited.add(neighbor)
            remaining -= 1
        current = neighbor


def wilsons(grid: BaseMazeGrid, rng: random.Random) -> None:
    """
    Wilson's algorithm using loop-erased random walks.

    Produces truly unbiased mazes where every possible maze
    for a given grid has equal probability of being generated.

    Algorithm:
    1. Mark one random cell as part of maze
    2. While unvisited cells remain:
       - Walk randomly from a random unvisited cell until hitting the maze,
         erasing any loop as soon as the walk crosses itself
       - Add the erased path to the maze
    3. Repeat until all cells visited

    The path and its position index live on the heap, so walk length is
    bounded by grid size, not call depth.
    """
    unvisited = _RandomPool(grid.all_positions())
    unvisited.remove(unvisited.choice(rng))

    while unvisited:
        current = unvisited.choice(rng)
        path = [current]
        on_path = {current: 0}

        while current in unvisited:
            current = rng.choice(grid.neighbors(current))

            if current in on_path:
                cut = on_path[current] + 1
                for erased in path[cut:]:
                    del on_path[erased]
                del path[cut:]
            else:
                on_path[current] = len(path)
                path.append(current)

        # path[-1] is the visited cell the walk ran into
        for here, there in zip(path, path[1:]):
            grid.link(here, there)
        for pos in path[:-1]:
            unvisited.remove(pos)


def hunt_and_kill(grid: BaseMazeGrid, rng: random.Random) -> None:
    """
    Hunt-and-Kill algorithm.

    Random walk that only steps onto unvisited cells. When stuck, hunt in
    traversal order for the first unvisited cell bordering the maze, link it
    to a random visited neighbor and continue walking from there.

    Characteristics:
    - Long corridors like the backtracker, without a stack
    - O(n^2) worst case because of the hunt scans
    """
    positions = grid.all_positions()
    current = rng.choice(positions)
    visited = {current}

    while current is not None:
        unvisited_neighbors = [n for n in grid.neighbors(current) if n not in visited]

        if unvisited_neighbors:
            neighbor = rng.choice(unvisited_neighbors)
            grid.link(current, neighbor)
            visited.add(neighbor)
            current = neighbor
            continue

        current = None
        for pos in positions:
            if pos in visited:
                continue
            visited_neighbors = [n for n in grid.neighbors(pos) if n in visited]
            if visited_neighbors:
                grid.link(pos, rng.choice(visited_neighbors))
                visited.add(pos)
                current = pos
                break


def _run_frames(root: Generator) -> None:
    """
    Drive generator-based recursion with an explicit stack.

    Each frame yields the child frame it wants to "call"; the child runs to
    completion before the parent resumes.
    """
    stack = [root]
    while stack:
        try:
            child = next(stack[-1])
        except StopIteration:
            stack.pop()
        else:
            stack.append(child)


def recursive_backtracker(grid: BaseMazeGrid, rng: random.Random) -> None:
    """
    Recursive Backtracking (Depth-First Search) algorithm.

    Written as a recursive carve: visit a cell, then keep recursing into a
    random unvisited neighbor until none is left. Each recursion level is a
    generator frame held by _run_frames, so maze size never hits the
    interpreter recursion limit.

    Produces exactly the same maze as iterative_backtracker for the same
    random state.

    Characteristics:
    - Fast: O(n) where n = number of cells
    - Biased toward long corridors
    - Few dead ends
    """
    visited: set = set()

    def carve(current):
        visited.add(current)
        while True:
            unvisited = [n for n in grid.neighbors(current) if n not in visited]
            if not unvisited:
                return
            neighbor = rng.choice(unvisited)
            grid.link(current, neighbor)
            yield carve(neighbor)

    _run_frames(carve(grid.random_position(rng)))


def iterative_backtracker(grid: BaseMazeGrid, rng: random.Random) -> None:
    """
    Recursive Backtracking (Depth-First Search) with an explicit stack.

    Algorithm:
    1. Start at random cell, mark as visited
    2. While unvisited neighbors exist:
       - Choose random unvisited neighbor
       - Link cells (create passage)
       - Move to neighbor, add to stack
    3. Backtrack when stuck (pop stack)

    Memory is one stack entry per cell on the current branch.
    """
    start = grid.random_position(rng)
    visited = {start}
    stack = [start]

    while stack:
        current = stack[-1]
        unvisited = [n for n in grid.neighbors(current) if n not in visited]

        if unvisited:
            neighbor = rng.choice(unvisited)
            grid.link(current, neighbor)
            visited.add(neighbor)
            stack.append(neighbor)
        else:
            stack.pop()


def growing_tree(grid: BaseMazeGrid, rng: random.Random, selection_strategy: str = "mixed") -> None:
    """
    Growing Tree algorithm - generalized framework for maze generation.

    A flexible algorithm that produces different maze characteristics
    based on how cells are selected from the active set.

    Algorithm:
    1. Start with one cell in active set
    2. While active set not empty:
       - Choose cell from active set (strategy-dependent)
       - If cell has unvisited neighbors:
           * Choose random neighbor
           * Link and add neighbor to active set
       - Else remove cell from active set

    Selection Strategies:
    - newest: Always choose most recent cell (like Recursive Backtracking)
    - oldest: Always choose oldest cell (long straight runs from the start)
    - random: Choose random cell (like Simplified Prim's)
    - mixed: 50% newest, 50% random
    """
    if selection_strategy not in GROWING_TREE_STRATEGIES:
        raise ConfigurationError("selection_strategy", selection_strategy, component="growing_tree")

    start = grid.random_position(rng)
    visited = {start}
    active = [start]

    while active:
        if selection_strategy == "newest":
            index = len(active) - 1
        elif selection_strategy == "oldest":
            index = 0
        elif selection_strategy == "random":
            index = rng.randrange(len(active))
        elif rng.random() < 0.5:
            index = len(active) - 1
        else:
            index = rng.randrange(len(active))

        current = active[index]
        unvisited = [n for n in grid.neighbors(current) if n not in visited]

        if unvisited:
            neighbor = rng.choice(unvisited)
            grid.link(current, neighbor)
            visited.add(neighbor)
            active.append(neighbor)
        else:
            del active[index]


def simplified_prims(grid: BaseMazeGrid, rng: random.Random) -> None:
    """
    Simplified Prim's algorithm.

    Grows the maze from a random active cell into a random unvisited
    neighbor; cells leave the active set once fully surrounded. Produces a
    radial texture with many short dead ends.
    """
    start = grid.random_position(rng)
    visited = {start}
    active = _RandomPool([start])

    while active:
        current = active.choice(rng)
        unvisited = [n for n in grid.neighbors(current) if n not in visited]

        if unvisited:
            neighbor = rng.choice(unvisited)
            grid.link(current, neighbor)
            visited.add(neighbor)
            active.add(neighbor)
        else:
            active.remove(current)


def true_prims(grid: BaseMazeGrid, rng: random.Random, max_cost: int = 100) -> None:
    """
    True Prim's algorithm.

    Every cell gets a random cost. The cheapest active cell is always grown
    into its cheapest unvisited neighbor, ties broken by traversal order.
    """
    positions = grid.all_positions()
    costs = {pos: rng.randrange(max_cost) for pos in positions}
    start = rng.choice(positions)
    visited = {start}
    active = [(costs[start], start)]

    while active:
        _, current = active[0]
        unvisited = [n for n in grid.neighbors(current) if n not in visited]

        if unvisited:
            neighbor = min(unvisited, key=lambda p: (costs[p], p))
            grid.link(current, neighbor)
            visited.add(neighbor)
            heapq.heappush(active, (costs[neighbor], neighbor))
        else:
            heapq.heappop(active)


def ellers(grid: RectangularGrid, rng: random.Random) -> None:
    """
    Eller's algorithm for efficient row-by-row maze generation.

    Algorithm:
    1. Process rows from top to bottom
    2. Assign each cell to a set (initially unique sets)
    3. Randomly join adjacent cells in same row (merge sets)
    4. Create vertical connections ensuring each set has >= 1 passage down
    5. Continue sets to next row; the last row joins every remaining set

    Characteristics:
    - Memory efficient: O(width) instead of O(width x height)
    - Balanced mixture of horizontal/vertical passages

    Reference: Eller (1982), "An Efficient Method for Generating Mazes"
    """
    _require_rectangular(grid, MazeAlgorithm.ELLERS)

    current_row_sets = list(range(grid.cols))
    next_set_id = grid.cols

    for row in range(grid.rows):
        last_row = row == grid.rows - 1

        for col in range(grid.cols - 1):
            should_join = last_row or rng.random() > 0.5
            if current_row_sets[col] != current_row_sets[col + 1] and should_join:
                grid.link(Position(row, col), Position(row, col + 1))

                old_set = current_row_sets[col + 1]
                new_set = current_row_sets[col]
                current_row_sets = [new_set if s == old_set else s for s in current_row_sets]

        if last_row:
            break

        sets_in_row: dict[int, list[int]] = {}
        for col in range(grid.cols):
            sets_in_row.setdefault(current_row_sets[col], []).append(col)

        next_row_sets = [-1] * grid.cols

        for set_id, cols_in_set in sets_in_row.items():
            num_connections = rng.randint(1, len(cols_in_set))
            for col in rng.sample(cols_in_set, num_connections):
                grid.link(Position(row, col), Position(row + 1, col))
                next_row_sets[col] = set_id

        for col in range(grid.cols):
            if next_row_sets[col] == -1:
                next_row_sets[col] = next_set_id
                next_set_id += 1

        current_row_sets = next_row_sets


_ALGORITHMS: dict[MazeAlgorithm, Callable[..., None]] = {
    MazeAlgorithm.BINARY_TREE: binary_tree,
    MazeAlgorithm.SIDEWINDER: sidewinder,
    MazeAlgorithm.ALDOUS_BRODER: aldous_broder,
    MazeAlgorithm.WILSONS: wilsons,
    MazeAlgorithm.HUNT_AND_KILL: hunt_and_kill,
    MazeAlgorithm.RECURSIVE_BACKTRACKER: recursive_backtracker,
    MazeAlgorithm.ITERATIVE_BACKTRACKER: iterative_backtracker,
    MazeAlgorithm.GROWING_TREE: growing_tree,
    MazeAlgorithm.SIMPLIFIED_PRIMS: simplified_prims,
    MazeAlgorithm.TRUE_PRIMS: true_prims,
    MazeAlgorithm.ELLERS: ellers,
}


class PerfectMazeGenerator:
    """
    Perfect maze generator using classic algorithms.

    Carves a spanning tree into an unlinked grid of either topology.

    Example:
        >>> grid = RectangularGrid(10, 10)
        >>> _ = PerfectMazeGenerator(grid, MazeAlgorithm.WILSONS).generate(seed=42)
        >>> verify_perfect_maze(grid)["is_perfect"]
        True
    """

    def __init__(
        self,
        grid: BaseMazeGrid,
        algorithm: MazeAlgorithm | str = MazeAlgorithm.RECURSIVE_BACKTRACKER,
        close_probability: float = 0.5,
        growing_tree_strategy: str = "mixed",
    ):
        """
        Initialize maze generator.

        Args:
            grid: Grid to carve, must not contain links yet
            algorithm: Algorithm to use for generation
            close_probability: Run-closing chance for Sidewinder
            growing_tree_strategy: Active-set selection for Growing Tree

        Raises:
            ValueError: If the algorithm name is unknown
            UnsupportedTopology: If the algorithm cannot run on this grid
        """
        self.grid = grid
        self.algorithm = MazeAlgorithm(algorithm)
        self.close_probability = close_probability
        self.growing_tree_strategy = growing_tree_strategy

        if not self.algorithm.supports(grid.topology):
            raise UnsupportedTopology(
                self.algorithm.value,
                grid.topology,
                self.algorithm.supported_topologies,
                component="PerfectMazeGenerator",
            )

    def _options(self) -> dict[str, Any]:
        if self.algorithm == MazeAlgorithm.SIDEWINDER:
            return {"close_probability": self.close_probability}
        if self.algorithm == MazeAlgorithm.GROWING_TREE:
            return {"selection_strategy": self.growing_tree_strategy}
        return {}

    def generate(self, seed: int | None = None, rng: random.Random | None = None) -> BaseMazeGrid:
        """
        Generate a perfect maze.

        Args:
            seed: Random seed for reproducibility
            rng: Random source to draw from (takes the place of seed)

        Returns:
            The carved grid

        Raises:
            ConfigurationError: If both seed and rng are given, or the grid already has links
        """
        if seed is not None and rng is not None:
            raise ConfigurationError("seed", seed, component="PerfectMazeGenerator")
        existing_links = self.grid.link_count()
        if existing_links > 0:
            log_validation_error(
                logger, "PerfectMazeGenerator", f"grid already has {existing_links} links", "Carve a fresh grid"
            )
            raise ConfigurationError("grid", f"{existing_links} existing links", component="PerfectMazeGenerator")

        if rng is None:
            rng = random.Random(seed)

        log_generation_start(logger, self.algorithm.value, {**self.grid.dimensions(), "cells": len(self.grid)})
        with LoggedOperation(logger, f"{self.algorithm.value} carve", logging.DEBUG) as operation:
            _ALGORITHMS[self.algorithm](self.grid, rng, **self._options())

        log_generation_complete(
            logger, self.algorithm.value, len(self.grid), self.grid.link_count(), operation.duration or 0.0
        )
        return self.grid


def verify_perfect_maze(grid: BaseMazeGrid) -> dict:
    """
    Verify that a maze is perfect (fully connected, no loops).

    A perfect maze must satisfy:
    1. Connectivity: All cells reachable from any cell
    2. Acyclicity: Exactly (n-1) passages for n cells

    Args:
        grid: Maze grid to verify

    Returns:
        Dictionary with verification results including:
        - is_perfect: Overall validity
        - is_connected: Connectivity check
        - is_no_loops: Acyclicity check
        - is_symmetric: Every link is recorded on both cells
        - visited_cells: Number of reachable cells
        - total_cells: Total number of cells
        - passage_count: Number of passages
        - expected_passages: Expected passages for perfect maze
    """
    positions = grid.all_positions()
    start = positions[0]
    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in grid.links(current):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)

    is_symmetric = all(grid.is_linked(other, cell.pos) for cell in grid for other in cell.links)

    total_cells = len(positions)
    is_connected = len(visited) == total_cells
    passage_count = grid.link_count()
    expected_passages = total_cells - 1
    is_no_loops = passage_count == expected_passages

    return {
        "is_perfect": is_connected and is_no_loops and is_symmetric,
        "is_connected": is_connected,
        "is_no_loops": is_no_loops,
        "is_symmetric": is_symmetric,
        "visited_cells": len(visited),
        "total_cells": total_cells,
        "passage_count": passage_count,
        "expected_passages": expected_passages,
    }


def generate_maze(config: MazeConfig | None = None, **kwargs: Any) -> BaseMazeGrid:
    """
    High-level function to build, carve and optionally braid a maze.

    Args:
        config: Maze configuration; built from kwargs when omitted
        **kwargs: MazeConfig fields (topology, rows, cols, algorithm, seed, ...)

    Returns:
        The generated grid

    Raises:
        ValidationError: If the configuration or a keyword override is invalid
        RuntimeError: If an unbraided maze fails verification

    Example:
        >>> grid = generate_maze(rows=20, cols=20, algorithm="wilsons", seed=42)
        >>> grid.link_count()
        399
    """
    from meanderer.mazes.maze_config import MazeConfig, build_grid
    from meanderer.mazes.maze_postprocessing import braid

    if config is None:
        config = MazeConfig(**kwargs)
    elif kwargs:
        config = MazeConfig.model_validate({**config.model_dump(), **kwargs})

    rng = random.Random(config.seed)
    grid = build_grid(config)

    PerfectMazeGenerator(
        grid,
        config.algorithm,
        close_probability=config.sidewinder_close_probability,
        growing_tree_strategy=config.growing_tree_strategy,
    ).generate(rng=rng)

    verification = verify_perfect_maze(grid)
    if not verification["is_perfect"]:
        raise RuntimeError(f"Generated maze is not perfect: {verification}")

    if config.braid_probability > 0:
        braid(grid, config.braid_probability, rng)

    return grid
