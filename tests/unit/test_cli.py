"""
Unit tests for the command line interface.
"""

import pytest
from click.testing import CliRunner

from meanderer.cli import main
from meanderer.mazes import MazeAlgorithm
from meanderer.utils.maze_logging import configure_logging


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """Rebuild handlers after each test so none keep CliRunner's closed streams."""
    yield
    configure_logging(level="WARNING")


class TestGenerateCommand:
    """Test `meanderer generate`."""

    def test_ascii_output(self, runner):
        result = runner.invoke(main, ["generate", "--rows", "3", "--cols", "4", "--seed", "1", "--ascii"])

        assert result.exit_code == 0, result.output
        assert "Passages: 11" in result.output
        assert "+---+---+---+---+" in result.output

    def test_reproducible(self, runner):
        args = ["generate", "-r", "5", "-c", "5", "-a", "wilsons", "-s", "9", "--ascii"]

        first = runner.invoke(main, args)
        second = runner.invoke(main, args)

        assert first.output == second.output

    def test_solve(self, runner):
        result = runner.invoke(main, ["generate", "-r", "6", "-c", "6", "-s", "2", "--solve"])

        assert result.exit_code == 0, result.output
        assert "Solved" in result.output

    def test_polar_solve_to_png(self, runner, tmp_path):
        output = tmp_path / "circle.png"
        result = runner.invoke(
            main, ["generate", "-t", "polar", "-r", "4", "-a", "hunt_and_kill", "-s", "3", "--solve", "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        assert output.exists()

    def test_braided_png(self, runner, tmp_path):
        output = tmp_path / "braided.png"
        result = runner.invoke(main, ["generate", "--braid", "1.0", "-s", "4", "--solve", "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "dead ends: 0" in result.output
        assert output.exists()

    def test_invalid_configuration_exits_with_error(self, runner):
        result = runner.invoke(main, ["generate", "-t", "polar", "-a", "binary_tree"])

        assert result.exit_code == 1
        assert "invalid configuration" in result.output

    def test_ascii_on_polar_exits_with_error(self, runner):
        result = runner.invoke(main, ["generate", "-t", "polar", "-r", "3", "-a", "wilsons", "--ascii"])

        assert result.exit_code == 1
        assert "UNSUPPORTED_TOPOLOGY" in result.output

    def test_unknown_algorithm_rejected_by_click(self, runner):
        result = runner.invoke(main, ["generate", "-a", "labyrinth"])
        assert result.exit_code == 2


class TestAlgorithmsCommand:
    """Test `meanderer algorithms`."""

    def test_lists_every_algorithm(self, runner):
        result = runner.invoke(main, ["algorithms"])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == len(MazeAlgorithm)
        assert any(line.startswith("binary_tree") and line.endswith("rectangular") for line in lines)
        assert any(line.startswith("wilsons") and line.endswith("rectangular, polar") for line in lines)


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "meanderer" in result.output
