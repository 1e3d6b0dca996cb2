from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("meanderer")  # Matches the name in pyproject.toml
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0-dev"

from .geometry import PolarGrid, PolarPosition, Position, RectangularGrid  # noqa: E402
from .mazes import (  # noqa: E402
    MazeAlgorithm,
    MazeConfig,
    PerfectMazeGenerator,
    braid,
    count_dead_ends,
    dead_ends,
    generate_maze,
    verify_perfect_maze,
)
from .solvers import DistanceMap, dijkstra, distances_from, furthest_corners, furthest_on_rim, solve  # noqa: E402
from .utils import (  # noqa: E402
    ConfigurationError,
    InvalidDimensions,
    InvalidLink,
    InvalidPosition,
    MazeError,
    Unreachable,
    UnsupportedTopology,
    configure_logging,
    get_logger,
)

__all__ = [
    "__version__",
    # Geometry
    "PolarGrid",
    "PolarPosition",
    "Position",
    "RectangularGrid",
    # Generation
    "MazeAlgorithm",
    "MazeConfig",
    "PerfectMazeGenerator",
    "braid",
    "count_dead_ends",
    "dead_ends",
    "generate_maze",
    "verify_perfect_maze",
    # Solving
    "DistanceMap",
    "dijkstra",
    "distances_from",
    "furthest_corners",
    "furthest_on_rim",
    "solve",
    # Errors
    "ConfigurationError",
    "InvalidDimensions",
    "InvalidLink",
    "InvalidPosition",
    "MazeError",
    "Unreachable",
    "UnsupportedTopology",
    # Logging
    "configure_logging",
    "get_logger",
]
