"""
Unit tests for perfect maze generation.

Tests every algorithm on both topologies for correctness, reproducibility
and perfect maze properties (connectivity, acyclicity), plus the dispatch
and high-level helpers.
"""

import random

import pytest
from pydantic import ValidationError

from meanderer.geometry import PolarGrid, Position, RectangularGrid
from meanderer.mazes import (
    MazeAlgorithm,
    MazeConfig,
    PerfectMazeGenerator,
    binary_tree,
    generate_maze,
    growing_tree,
    iterative_backtracker,
    recursive_backtracker,
    sidewinder,
    verify_perfect_maze,
    wilsons,
)
from meanderer.utils.exceptions import ConfigurationError, UnsupportedTopology

ALL_ALGORITHMS = list(MazeAlgorithm)
POLAR_ALGORITHMS = [algorithm for algorithm in MazeAlgorithm if algorithm.supports("polar")]
RECTANGULAR_ONLY = [algorithm for algorithm in MazeAlgorithm if not algorithm.supports("polar")]


class FirstChoiceRandom(random.Random):
    """Random source whose choice() always returns the first candidate."""

    def choice(self, seq):
        return seq[0]


class NorthLeaningRandom(random.Random):
    """Random source whose choice() returns the smallest candidate half the time."""

    def choice(self, seq):
        if self.random() < 0.5:
            return min(seq)
        return super().choice(seq)


def carve(grid, algorithm, seed=42):
    PerfectMazeGenerator(grid, algorithm).generate(seed=seed)
    return grid


def is_full_corridor(grid, row):
    return all(grid.is_linked(Position(row, col), Position(row, col + 1)) for col in range(grid.cols - 1))


class TestPerfectMazeGenerator:
    """Test perfect maze generation algorithms."""

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    @pytest.mark.parametrize(("rows", "cols"), [(1, 1), (1, 7), (6, 1), (2, 2), (5, 5), (10, 15)])
    def test_rectangular_maze_is_perfect(self, algorithm, rows, cols):
        """Test that generated mazes are perfect (connected, no loops)."""
        grid = carve(RectangularGrid(rows, cols), algorithm)

        verification = verify_perfect_maze(grid)

        assert verification["is_perfect"], f"Maze is not perfect: {verification}"
        assert verification["passage_count"] == rows * cols - 1

    @pytest.mark.parametrize("algorithm", POLAR_ALGORITHMS)
    @pytest.mark.parametrize("rings", [1, 2, 5])
    def test_polar_maze_is_perfect(self, algorithm, rings):
        grid = carve(PolarGrid(rings), algorithm)

        verification = verify_perfect_maze(grid)

        assert verification["is_perfect"], f"Maze is not perfect: {verification}"
        assert verification["visited_cells"] == len(grid)

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_maze_reproducibility(self, algorithm):
        """Test that same seed produces same maze."""
        first = carve(RectangularGrid(9, 9), algorithm, seed=123)
        second = carve(RectangularGrid(9, 9), algorithm, seed=123)

        assert first.linked_pairs() == second.linked_pairs()

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_links_are_symmetric(self, algorithm):
        grid = carve(RectangularGrid(6, 7), algorithm)

        for cell in grid:
            for other in cell.links:
                assert grid.is_linked(other, cell.pos)
                assert other in grid.neighbors(cell.pos)

    @pytest.mark.parametrize("algorithm", RECTANGULAR_ONLY)
    def test_rectangular_only_algorithms_reject_polar(self, algorithm):
        with pytest.raises(UnsupportedTopology) as exc_info:
            PerfectMazeGenerator(PolarGrid(3), algorithm)

        assert exc_info.value.error_code == "UNSUPPORTED_TOPOLOGY"

    def test_algorithm_from_string(self):
        generator = PerfectMazeGenerator(RectangularGrid(3, 3), "hunt_and_kill")
        assert generator.algorithm == MazeAlgorithm.HUNT_AND_KILL

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError):
            PerfectMazeGenerator(RectangularGrid(3, 3), "invalid_algorithm")

    def test_generate_with_injected_rng(self):
        first = PerfectMazeGenerator(RectangularGrid(6, 6), MazeAlgorithm.WILSONS).generate(rng=random.Random(5))
        second = PerfectMazeGenerator(RectangularGrid(6, 6), MazeAlgorithm.WILSONS).generate(seed=5)

        assert first.linked_pairs() == second.linked_pairs()

    def test_seed_and_rng_together_rejected(self):
        generator = PerfectMazeGenerator(RectangularGrid(3, 3))
        with pytest.raises(ConfigurationError):
            generator.generate(seed=1, rng=random.Random(1))

    def test_already_carved_grid_rejected(self):
        grid = carve(RectangularGrid(3, 3), MazeAlgorithm.ALDOUS_BRODER)
        with pytest.raises(ConfigurationError):
            PerfectMazeGenerator(grid, MazeAlgorithm.ALDOUS_BRODER).generate(seed=1)

    def test_large_maze_does_not_hit_recursion_limit(self):
        """Depth-first carving of a long corridor-heavy maze stays off the call stack."""
        grid = carve(RectangularGrid(1, 3000), MazeAlgorithm.RECURSIVE_BACKTRACKER)
        assert verify_perfect_maze(grid)["is_perfect"]


class TestBacktrackers:
    """Test that both backtracker forms carve the same maze."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 99])
    def test_rectangular_equivalence(self, seed):
        recursive_grid = RectangularGrid(12, 9)
        iterative_grid = RectangularGrid(12, 9)

        recursive_backtracker(recursive_grid, random.Random(seed))
        iterative_backtracker(iterative_grid, random.Random(seed))

        assert recursive_grid.linked_pairs() == iterative_grid.linked_pairs()

    def test_polar_equivalence(self):
        recursive_grid = PolarGrid(6)
        iterative_grid = PolarGrid(6)

        recursive_backtracker(recursive_grid, random.Random(8))
        iterative_backtracker(iterative_grid, random.Random(8))

        assert recursive_grid.linked_pairs() == iterative_grid.linked_pairs()


class TestBinaryTree:
    """Test Binary Tree structure and bias."""

    def test_fixed_choice_output(self):
        grid = RectangularGrid(4, 4)
        binary_tree(grid, FirstChoiceRandom())

        for pos in grid.all_positions():
            if pos.row > 0:
                assert grid.is_linked(pos, Position(pos.row - 1, pos.col))
            elif pos.col < grid.cols - 1:
                assert grid.is_linked(pos, Position(pos.row, pos.col + 1))
        assert grid.link_count() == 15

    def test_same_seed_same_links(self):
        first = RectangularGrid(4, 4)
        second = RectangularGrid(4, 4)
        binary_tree(first, random.Random(2024))
        binary_tree(second, random.Random(2024))

        assert first.linked_pairs() == second.linked_pairs()

    def test_north_row_and_east_column_are_corridors(self):
        grid = carve(RectangularGrid(6, 6), MazeAlgorithm.BINARY_TREE, seed=3)

        assert is_full_corridor(grid, 0)
        assert all(grid.is_linked(Position(row, 5), Position(row - 1, 5)) for row in range(1, 6))


class TestSidewinder:
    """Test Sidewinder run handling."""

    def test_north_row_is_corridor(self):
        grid = carve(RectangularGrid(5, 8), MazeAlgorithm.SIDEWINDER, seed=11)
        assert is_full_corridor(grid, 0)

    def test_always_close_links_every_cell_north(self):
        grid = RectangularGrid(4, 4)
        sidewinder(grid, random.Random(0), close_probability=1.0)

        for pos in grid.all_positions():
            if pos.row > 0:
                assert grid.is_linked(pos, Position(pos.row - 1, pos.col))
        assert verify_perfect_maze(grid)["is_perfect"]

    def test_never_close_makes_full_rows(self):
        grid = RectangularGrid(4, 4)
        sidewinder(grid, random.Random(0), close_probability=0.0)

        assert all(is_full_corridor(grid, row) for row in range(4))
        assert verify_perfect_maze(grid)["is_perfect"]

    def test_invalid_close_probability(self):
        with pytest.raises(ConfigurationError):
            sidewinder(RectangularGrid(3, 3), random.Random(0), close_probability=1.5)


class TestGrowingTree:
    """Test Growing Tree selection strategies."""

    @pytest.mark.parametrize("strategy", ["newest", "oldest", "random", "mixed"])
    def test_strategies_are_perfect(self, strategy):
        grid = RectangularGrid(8, 8)
        growing_tree(grid, random.Random(4), selection_strategy=strategy)
        assert verify_perfect_maze(grid)["is_perfect"]

    def test_newest_matches_backtracker(self):
        growing = RectangularGrid(7, 7)
        backtracked = RectangularGrid(7, 7)

        growing_tree(growing, random.Random(21), selection_strategy="newest")
        iterative_backtracker(backtracked, random.Random(21))

        assert growing.linked_pairs() == backtracked.linked_pairs()

    def test_unknown_strategy(self):
        with pytest.raises(ConfigurationError):
            growing_tree(RectangularGrid(3, 3), random.Random(0), selection_strategy="widest")


class TestAlgorithmBias:
    """Statistical texture checks across seeds on a 5x5 grid."""

    SAMPLES = 200

    def vertical_share(self, carve_fn, rng_factory):
        vertical = total = 0
        for seed in range(self.SAMPLES):
            grid = RectangularGrid(5, 5)
            carve_fn(grid, rng_factory(seed))
            for first, second in grid.linked_pairs():
                vertical += first.col == second.col
                total += 1
        return vertical / total

    def corridor_frequencies(self, algorithm):
        top = bottom = 0
        for seed in range(self.SAMPLES):
            grid = carve(RectangularGrid(5, 5), algorithm, seed=seed)
            top += is_full_corridor(grid, 0)
            bottom += is_full_corridor(grid, 4)
        return top / self.SAMPLES, bottom / self.SAMPLES

    @pytest.mark.statistical
    @pytest.mark.parametrize("algorithm", [MazeAlgorithm.WILSONS, MazeAlgorithm.ALDOUS_BRODER])
    def test_uniform_algorithms_show_no_bias(self, algorithm):
        share = self.vertical_share(
            lambda grid, rng: PerfectMazeGenerator(grid, algorithm).generate(rng=rng), random.Random
        )
        assert abs(share - 0.5) < 0.04

    @pytest.mark.statistical
    def test_north_leaning_walk_is_detected(self):
        share = self.vertical_share(wilsons, NorthLeaningRandom)
        assert share > 0.58

    @pytest.mark.statistical
    def test_binary_tree_shows_bias(self):
        top, bottom = self.corridor_frequencies(MazeAlgorithm.BINARY_TREE)
        assert top == 1.0
        assert bottom < 0.5


class TestGenerateMazeFunction:
    """Test high-level generate_maze() function."""

    def test_from_keywords(self):
        grid = generate_maze(rows=10, cols=12, algorithm="wilsons", seed=42)

        assert isinstance(grid, RectangularGrid)
        assert grid.link_count() == 119

    def test_from_config(self):
        config = MazeConfig(topology="polar", rows=5, algorithm=MazeAlgorithm.HUNT_AND_KILL, seed=3)
        grid = generate_maze(config)

        assert isinstance(grid, PolarGrid)
        assert verify_perfect_maze(grid)["is_perfect"]

    def test_reproducibility(self):
        first = generate_maze(rows=10, cols=10, algorithm="true_prims", seed=42, braid_probability=0.5)
        second = generate_maze(rows=10, cols=10, algorithm="true_prims", seed=42, braid_probability=0.5)

        assert first.linked_pairs() == second.linked_pairs()

    def test_braided_maze_has_loops(self):
        grid = generate_maze(rows=10, cols=10, algorithm="recursive_backtracker", seed=42, braid_probability=1.0)

        verification = verify_perfect_maze(grid)
        assert verification["is_connected"]
        assert not verification["is_no_loops"]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"braid_probability": "half"},
            {"braid_probability": 1.5},
            {"seed": "not-an-int"},
            {"rows": 0},
            {"topology": "polar", "algorithm": "binary_tree"},
        ],
    )
    def test_keyword_overrides_are_validated(self, overrides):
        with pytest.raises(ValidationError):
            generate_maze(MazeConfig(seed=1), **overrides)

    def test_keyword_overrides_applied(self):
        config = MazeConfig(rows=3, cols=3, seed=1)
        grid = generate_maze(config, cols=5, algorithm="wilsons")

        assert (grid.rows, grid.cols) == (3, 5)
        assert grid.link_count() == 14
        assert config.cols == 3

    def test_algorithms_produce_different_mazes(self):
        """Test that different algorithms produce different mazes (with same seed)."""
        backtracked = generate_maze(rows=20, cols=20, algorithm="recursive_backtracker", seed=42)
        wilsons = generate_maze(rows=20, cols=20, algorithm="wilsons", seed=42)

        assert backtracked.linked_pairs() != wilsons.linked_pairs()


class TestVerifyPerfectMaze:
    """Test maze verification."""

    def test_unlinked_grid_is_not_perfect(self, small_grid):
        verification = verify_perfect_maze(small_grid)

        assert not verification["is_perfect"]
        assert not verification["is_connected"]
        assert verification["visited_cells"] == 1

    def test_loop_is_detected(self):
        grid = RectangularGrid(2, 2)
        grid.link(Position(0, 0), Position(0, 1))
        grid.link(Position(0, 1), Position(1, 1))
        grid.link(Position(1, 1), Position(1, 0))
        grid.link(Position(1, 0), Position(0, 0))

        verification = verify_perfect_maze(grid)

        assert verification["is_connected"]
        assert not verification["is_no_loops"]
        assert verification["passage_count"] == 4
        assert verification["expected_passages"] == 3
