"""
Maze visualization: ASCII text, numpy rasters and matplotlib polar figures.
"""

from .maze_rendering import (
    RenderStyle,
    default_color_fn,
    render_ascii,
    render_polar,
    render_rectangular,
    save_png,
)

__all__ = [
    "RenderStyle",
    "default_color_fn",
    "render_ascii",
    "render_polar",
    "render_rectangular",
    "save_png",
]
