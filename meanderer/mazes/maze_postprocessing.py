"""
Maze Post-Processing Utilities

Refinement operations applied to a generated perfect maze.

Features:
- Dead end detection (positions with exactly one passage)
- Braiding: adding passages at dead ends to introduce loops

Braiding breaks perfection on purpose: a braided maze has more than n - 1
passages and several routes between some positions. The solver handles such
graphs with ordinary shortest-path semantics.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from meanderer.utils.exceptions import validate_parameter_value
from meanderer.utils.maze_logging import get_logger

if TYPE_CHECKING:
    import random

    from meanderer.geometry.base_grid import BaseMazeGrid

logger = get_logger(__name__)


def dead_ends(grid: BaseMazeGrid) -> list:
    """
    Positions with exactly one passage, in traversal order.

    A single-cell grid has no dead ends: its only cell has no structural
    neighbors and therefore no passages.
    """
    return [pos for pos in grid.all_positions() if grid.is_dead_end(pos)]


def count_dead_ends(grid: BaseMazeGrid) -> int:
    return len(dead_ends(grid))


def braid(grid: BaseMazeGrid, probability: float, rng: random.Random) -> int:
    """
    Remove dead ends by linking them to an extra neighbor.

    Dead ends are collected once up front. Each one that is still a dead end
    when reached is braided with the given probability: a random unlinked
    structural neighbor is chosen, preferring neighbors that are dead ends
    themselves (so one new passage removes two dead ends), and linked.

    Args:
        grid: Maze to braid in place
        probability: Chance of braiding each dead end, in [0, 1]
        rng: Random source

    Returns:
        Number of passages added

    Raises:
        ConfigurationError: If probability is outside [0, 1]

    Example:
        >>> added = braid(grid, 1.0, random.Random(7))
        >>> count_dead_ends(grid)
        0
    """
    validate_parameter_value(probability, "braid_probability", (int, float), (0.0, 1.0), component="braid")

    candidates = dead_ends(grid)
    added = 0

    for pos in candidates:
        if not grid.is_dead_end(pos):
            continue
        if rng.random() >= probability:
            continue

        unlinked = [n for n in grid.neighbors(pos) if not grid.is_linked(pos, n)]
        if not unlinked:
            continue

        preferred = [n for n in unlinked if grid.is_dead_end(n)]
        neighbor = rng.choice(preferred or unlinked)
        grid.link(pos, neighbor)
        added += 1

    logger.debug(f"Braided {added} of {len(candidates)} dead ends (p={probability})")
    return added
