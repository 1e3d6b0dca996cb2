"""
Pytest configuration and shared fixtures for the meanderer test suite.

This module provides common fixtures, markers and helpers used across the
unit tests.
"""

import random

import pytest

from meanderer.geometry import PolarGrid, RectangularGrid
from meanderer.mazes import MazeAlgorithm, PerfectMazeGenerator

# =============================================================================
# Test Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "statistical: Tests that sample many seeds")
    config.addinivalue_line("markers", "slow: Slow tests (may take >10 seconds)")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test paths."""
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)

        if "large" in item.name or "slow" in item.name or "bias" in item.name:
            item.add_marker(pytest.mark.slow)


# =============================================================================
# Grid Fixtures
# =============================================================================


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(12345)


@pytest.fixture
def small_grid():
    """Unlinked 4x5 rectangular grid."""
    return RectangularGrid(4, 5)


@pytest.fixture
def small_polar_grid():
    """Unlinked polar grid with 4 rings (1 + 6 + 12 + 24 cells)."""
    return PolarGrid(4)


@pytest.fixture
def perfect_maze():
    """8x8 perfect maze carved with Wilson's algorithm."""
    grid = RectangularGrid(8, 8)
    PerfectMazeGenerator(grid, MazeAlgorithm.WILSONS).generate(seed=7)
    return grid


@pytest.fixture
def perfect_polar_maze():
    """5-ring perfect polar maze carved with the recursive backtracker."""
    grid = PolarGrid(5)
    PerfectMazeGenerator(grid, MazeAlgorithm.RECURSIVE_BACKTRACKER).generate(seed=7)
    return grid


@pytest.fixture
def corridor_grid():
    """1x4 grid linked into a single east-west corridor."""
    grid = RectangularGrid(1, 4)
    positions = grid.all_positions()
    for here, there in zip(positions, positions[1:]):
        grid.link(here, there)
    return grid
