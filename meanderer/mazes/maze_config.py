"""
Maze configuration.

MazeConfig collects everything needed to reproduce a maze: topology and
size, the carving algorithm and its options, the braid probability and the
seed.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from meanderer.geometry.polar_grid import PolarGrid
from meanderer.geometry.rectangular_grid import RectangularGrid
from meanderer.mazes.maze_generator import MazeAlgorithm


class MazeConfig(BaseModel):
    """
    Configuration for a generated maze.

    Attributes
    ----------
    topology : Literal["rectangular", "polar"]
        Grid topology (default: rectangular)
    rows : int
        Number of rows, or number of rings for polar grids (default: 10)
    cols : int
        Number of columns, ignored for polar grids (default: 10)
    algorithm : MazeAlgorithm
        Carving algorithm (default: recursive_backtracker)
    braid_probability : float
        Chance of removing each dead end after carving (default: 0.0)
    seed : int | None
        Random seed; None draws a fresh maze each time (default: None)
    sidewinder_close_probability : float
        Run-closing chance for Sidewinder (default: 0.5)
    growing_tree_strategy : Literal["newest", "oldest", "random", "mixed"]
        Active-set selection for Growing Tree (default: mixed)
    """

    model_config = ConfigDict(validate_assignment=True)

    topology: Literal["rectangular", "polar"] = "rectangular"
    rows: int = Field(default=10, ge=1)
    cols: int = Field(default=10, ge=1)
    algorithm: MazeAlgorithm = MazeAlgorithm.RECURSIVE_BACKTRACKER
    braid_probability: float = Field(default=0.0, ge=0.0, le=1.0)
    seed: int | None = None
    sidewinder_close_probability: float = Field(default=0.5, ge=0.0, le=1.0)
    growing_tree_strategy: Literal["newest", "oldest", "random", "mixed"] = "mixed"

    @model_validator(mode="after")
    def validate_algorithm_topology(self) -> MazeConfig:
        """Validate the algorithm can run on the chosen topology."""
        if not self.algorithm.supports(self.topology):
            raise ValueError(
                f"algorithm '{self.algorithm.value}' requires one of {self.algorithm.supported_topologies}, "
                f"got topology '{self.topology}'"
            )
        return self


def build_grid(config: MazeConfig) -> RectangularGrid | PolarGrid:
    """Construct the unlinked grid described by a configuration."""
    if config.topology == "polar":
        return PolarGrid(config.rows)
    return RectangularGrid(config.rows, config.cols)
