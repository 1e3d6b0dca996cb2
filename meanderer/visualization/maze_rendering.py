"""
Maze rendering.

Read-only consumers of a generated (and optionally solved) grid:

- render_ascii: Text form of a rectangular maze
- render_rectangular: RGB raster of a rectangular maze as a numpy array
- render_polar: matplotlib figure of a polar maze
- save_png: Write either topology to a PNG file

Layout of the rectangular raster, for ``cols`` columns:

    width = cols * cell_size + (cols + 1) * wall_thickness

Every cell is a ``cell_size`` square surrounded by wall bands of
``wall_thickness`` pixels. A band between two linked cells is painted with
the cell fill instead of the wall color.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Arc, Wedge
from pydantic import BaseModel, ConfigDict, Field

from meanderer.geometry.polar_grid import PolarGrid
from meanderer.geometry.positions import Position
from meanderer.geometry.rectangular_grid import RectangularGrid
from meanderer.utils.exceptions import UnsupportedTopology
from meanderer.utils.maze_logging import get_logger

if TYPE_CHECKING:
    from matplotlib.figure import Figure
    from numpy.typing import NDArray

    from meanderer.geometry.base_grid import BaseMazeGrid

logger = get_logger(__name__)

Channel = Annotated[int, Field(ge=0, le=255)]
RGB = tuple[Channel, Channel, Channel]


def default_color_fn(weight: int, max_weight: int) -> tuple[int, int, int]:
    """
    Green distance ramp: near white at the source, dark green at the furthest cell.

    Args:
        weight: Distance of the cell from the last solve source
        max_weight: Largest distance in the grid

    Returns:
        RGB color
    """
    intensity = 1.0 if max_weight <= 0 else (max_weight - weight) / max_weight
    dark = round(255 * intensity)
    bright = round(128 + 127 * intensity)
    return (dark, bright, dark)


class RenderStyle(BaseModel):
    """
    Immutable rendering style.

    Attributes
    ----------
    cell_size : int
        Side of a cell in pixels (default: 30)
    wall_thickness : int
        Width of wall bands in pixels (default: 5)
    background_color : RGB
        Fill of cells without a color function (default: white)
    wall_color : RGB
        Wall color (default: black)
    color_fn : Callable[[int, int], RGB] | None
        Maps (weight, max_weight) to a cell fill; None paints the background
    draw_solution : bool
        Paint cells of the last solved path with solution_color (default: False)
    solution_color : RGB
        Fill of solution cells (default: red)
    """

    model_config = ConfigDict(frozen=True)

    cell_size: int = Field(default=30, ge=1)
    wall_thickness: int = Field(default=5, ge=0)
    background_color: RGB = (255, 255, 255)
    wall_color: RGB = (0, 0, 0)
    color_fn: Callable[[int, int], tuple[int, int, int]] | None = None
    draw_solution: bool = False
    solution_color: RGB = (220, 40, 40)

    def fill_for(self, grid: BaseMazeGrid, pos, max_weight: int) -> tuple[int, int, int]:
        """Fill color of one cell under this style."""
        if self.draw_solution and grid.in_solution(pos):
            return self.solution_color
        if self.color_fn is not None:
            return tuple(self.color_fn(grid.weight(pos), max_weight))
        return self.background_color


def _require(grid: BaseMazeGrid, grid_type: type, operation: str):
    if not isinstance(grid, grid_type):
        raise UnsupportedTopology(operation, grid.topology, (grid_type.topology,), component="maze_rendering")


def render_ascii(grid: RectangularGrid, display_labels: bool = False) -> str:
    """
    Text rendering of a rectangular maze.

    Example (2x2, no labels):

        +---+---+
        |       |
        +---+   +
        |       |
        +---+---+

    Args:
        grid: Rectangular maze
        display_labels: Show each cell's weight centred in its body

    Returns:
        Multi-line string, one trailing newline
    """
    _require(grid, RectangularGrid, "render_ascii")

    lines = ["+" + "---+" * grid.cols]
    for row in range(grid.rows):
        top = "|"
        bottom = "+"
        for col in range(grid.cols):
            pos = Position(row, col)
            body = f"{grid.cell(pos).label:^3}" if display_labels else "   "
            east = grid.east(pos)
            south = grid.south(pos)
            top += body + (" " if east is not None and grid.is_linked(pos, east) else "|")
            bottom += ("   " if south is not None and grid.is_linked(pos, south) else "---") + "+"
        lines.append(top)
        lines.append(bottom)

    return "\n".join(lines) + "\n"


def render_rectangular(grid: RectangularGrid, style: RenderStyle | None = None) -> NDArray:
    """
    Rasterize a rectangular maze.

    Args:
        grid: Rectangular maze
        style: Rendering style (default RenderStyle())

    Returns:
        uint8 array of shape (height, width, 3)
    """
    _require(grid, RectangularGrid, "render_rectangular")
    style = style or RenderStyle()

    cell, wall = style.cell_size, style.wall_thickness
    step = cell + wall
    width = grid.cols * cell + (grid.cols + 1) * wall
    height = grid.rows * cell + (grid.rows + 1) * wall

    image = np.empty((height, width, 3), dtype=np.uint8)
    image[:, :] = style.background_color
    wall_color = np.array(style.wall_color, dtype=np.uint8)

    # north and west outer walls
    image[:wall, :] = wall_color
    image[:, :wall] = wall_color

    max_weight = grid.max_weight()

    for pos in grid.all_positions():
        x0 = wall + pos.col * step
        y0 = wall + pos.row * step
        fill = style.fill_for(grid, pos, max_weight)
        image[y0 : y0 + cell, x0 : x0 + cell] = fill

        east = grid.east(pos)
        if east is not None and grid.is_linked(pos, east):
            image[y0 : y0 + cell, x0 + cell : x0 + step] = fill
        else:
            image[y0 - wall : y0 + cell + wall, x0 + cell : x0 + step] = wall_color

        south = grid.south(pos)
        if south is not None and grid.is_linked(pos, south):
            image[y0 + cell : y0 + step, x0 : x0 + cell] = fill
        else:
            image[y0 + cell : y0 + step, x0 - wall : x0 + cell + wall] = wall_color

    # corner posts; braiding can open every wall around one
    for row in range(grid.rows + 1):
        for col in range(grid.cols + 1):
            image[row * step : row * step + wall, col * step : col * step + wall] = wall_color

    return image


def _unit(color) -> tuple[float, float, float]:
    return tuple(channel / 255.0 for channel in color)


def render_polar(grid: PolarGrid, style: RenderStyle | None = None) -> Figure:
    """
    Draw a polar maze with matplotlib.

    Ring ``r`` spans radii ``[r, r + 1] * cell_size``. Index 0 starts at
    twelve o'clock and indices increase clockwise. Cells are filled wedges;
    walls are arcs (toward the inner ring) and radial segments (toward the
    clockwise neighbor), plus the outer rim.

    Args:
        grid: Polar maze
        style: Rendering style (default RenderStyle())

    Returns:
        matplotlib Figure; the caller owns it and should close it
    """
    _require(grid, PolarGrid, "render_polar")
    style = style or RenderStyle()

    cell = style.cell_size
    outer_radius = grid.rings * cell
    linewidth = max(style.wall_thickness, 1) * 0.5
    wall_color = _unit(style.wall_color)
    max_weight = grid.max_weight()

    fig, ax = plt.subplots(figsize=(8, 8))
    fig.patch.set_facecolor(_unit(style.background_color))

    for pos in grid.all_positions():
        size = grid.ring_size(pos.ring)
        theta_start = 90.0 - 360.0 * (pos.index + 1) / size
        theta_end = 90.0 - 360.0 * pos.index / size
        inner = pos.ring * cell
        outer = inner + cell

        ax.add_patch(
            Wedge(
                (0, 0),
                outer,
                theta_start,
                theta_end,
                width=cell,
                facecolor=_unit(style.fill_for(grid, pos, max_weight)),
                edgecolor="none",
            )
        )

        inward = grid.inward(pos)
        if inward is not None and not grid.is_linked(pos, inward):
            ax.add_patch(
                Arc((0, 0), 2 * inner, 2 * inner, theta1=theta_start, theta2=theta_end, color=wall_color, lw=linewidth)
            )

        clockwise = grid.clockwise(pos)
        if clockwise is not None and not grid.is_linked(pos, clockwise):
            angle = math.radians(theta_start)
            ax.plot(
                [inner * math.cos(angle), outer * math.cos(angle)],
                [inner * math.sin(angle), outer * math.sin(angle)],
                color=wall_color,
                lw=linewidth,
                solid_capstyle="round",
            )

    ax.add_patch(Arc((0, 0), 2 * outer_radius, 2 * outer_radius, theta1=0, theta2=360, color=wall_color, lw=linewidth))

    margin = cell * 0.5
    ax.set_xlim(-outer_radius - margin, outer_radius + margin)
    ax.set_ylim(-outer_radius - margin, outer_radius + margin)
    ax.set_aspect("equal")
    ax.axis("off")

    return fig


def save_png(grid: BaseMazeGrid, style: RenderStyle | None = None, path: str | Path = "maze.png") -> Path:
    """
    Render a maze of either topology and write it as PNG.

    Returns:
        Path of the written file

    Raises:
        UnsupportedTopology: If the grid is neither rectangular nor polar
    """
    style = style or RenderStyle()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(grid, RectangularGrid):
        plt.imsave(path, render_rectangular(grid, style))
    elif isinstance(grid, PolarGrid):
        fig = render_polar(grid, style)
        try:
            fig.savefig(path, dpi=150, bbox_inches="tight", facecolor=fig.get_facecolor())
        finally:
            plt.close(fig)
    else:
        raise UnsupportedTopology("save_png", grid.topology, ("rectangular", "polar"), component="maze_rendering")

    logger.info(f"Saved {grid.topology} maze to {path}")
    return path
