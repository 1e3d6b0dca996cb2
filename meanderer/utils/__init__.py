"""Shared utilities: error hierarchy and logging."""

from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    InvalidDimensions,
    InvalidLink,
    InvalidPosition,
    MazeError,
    Unreachable,
    UnsupportedTopology,
    validate_parameter_value,
)
from .maze_logging import LoggedOperation, configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "InvalidDimensions",
    "InvalidLink",
    "InvalidPosition",
    "LoggedOperation",
    "MazeError",
    "Unreachable",
    "UnsupportedTopology",
    "configure_logging",
    "get_logger",
    "validate_parameter_value",
]
