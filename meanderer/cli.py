"""
Command-line interface for meanderer.

Provides commands to generate, braid, solve and render mazes, and to list
the available carving algorithms.
"""

import sys

import click
from pydantic import ValidationError

from meanderer import __version__
from meanderer.mazes import MazeAlgorithm, MazeConfig, count_dead_ends, generate_maze
from meanderer.utils.exceptions import MazeError
from meanderer.utils.maze_logging import configure_logging, get_logger, log_validation_error

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="meanderer")
def main():
    """
    meanderer: Maze generation and solving

    Carves perfect mazes on rectangular and polar grids, optionally braids
    them into loopy mazes, solves them and renders the result.
    """


@main.command()
@click.option(
    "--topology", "-t", type=click.Choice(["rectangular", "polar"]), default="rectangular", help="Grid topology"
)
@click.option("--rows", "-r", type=int, default=10, help="Number of rows (rings for polar grids)")
@click.option("--cols", "-c", type=int, default=10, help="Number of columns (ignored for polar grids)")
@click.option(
    "--algorithm",
    "-a",
    type=click.Choice([algorithm.value for algorithm in MazeAlgorithm]),
    default=MazeAlgorithm.RECURSIVE_BACKTRACKER.value,
    help="Carving algorithm",
)
@click.option("--seed", "-s", type=int, default=None, help="Random seed for a reproducible maze")
@click.option("--braid", "-b", "braid_probability", type=float, default=0.0, help="Dead end removal probability")
@click.option("--solve/--no-solve", default=False, help="Solve between the two furthest points")
@click.option("--ascii", "show_ascii", is_flag=True, help="Print the maze as text (rectangular only)")
@click.option("--output", "-o", type=click.Path(), default=None, help="Output PNG file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def generate(topology, rows, cols, algorithm, seed, braid_probability, solve, show_ascii, output, verbose):
    """
    Generate a maze.

    Examples:
        meanderer generate --rows 20 --cols 20 --algorithm wilsons --ascii
        meanderer generate -t polar -r 12 -a hunt_and_kill --solve -o circle.png
        meanderer generate --braid 0.5 --seed 7 --solve -o braided.png
    """
    if verbose:
        configure_logging(level="INFO")

    try:
        config = MazeConfig(
            topology=topology,
            rows=rows,
            cols=cols,
            algorithm=algorithm,
            braid_probability=braid_probability,
            seed=seed,
        )
        grid = generate_maze(config)

        click.echo(f"Generated {grid!r} with {config.algorithm.value}")
        click.echo(f"Passages: {grid.link_count()}, dead ends: {count_dead_ends(grid)}")

        path = None
        if solve:
            path = _solve_longest(grid)
            click.echo(f"Solved {path[0]} -> {path[-1]} in {len(path) - 1} steps")

        if show_ascii:
            from meanderer.visualization import render_ascii

            click.echo(render_ascii(grid), nl=False)

        if output:
            import matplotlib

            matplotlib.use("Agg")

            from meanderer.visualization import RenderStyle, default_color_fn, save_png

            style = RenderStyle(color_fn=default_color_fn if solve else None, draw_solution=path is not None)
            saved = save_png(grid, style, output)
            click.echo(f"Saved image to: {saved}")

    except ValidationError as e:
        log_validation_error(logger, "MazeConfig", str(e))
        click.echo(f"Error: invalid configuration\n{e}", err=True)
        sys.exit(1)
    except (MazeError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _solve_longest(grid):
    """Solve between the furthest corners, or from the center to the furthest rim cell."""
    from meanderer.geometry import PolarGrid
    from meanderer.solvers import furthest_corners, furthest_on_rim, solve

    if isinstance(grid, PolarGrid):
        start = grid.center()
        target = furthest_on_rim(grid, start)
    else:
        start, target = furthest_corners(grid)
    return solve(grid, start, target)


@main.command()
def algorithms():
    """
    List carving algorithms and the topologies they support.

    Examples:
        meanderer algorithms
    """
    width = max(len(algorithm.value) for algorithm in MazeAlgorithm)
    for algorithm in MazeAlgorithm:
        click.echo(f"{algorithm.value:<{width}}  {', '.join(algorithm.supported_topologies)}")


if __name__ == "__main__":
    main()
