"""
Logging utilities for meanderer.

Usage:
    >>> from meanderer.utils.maze_logging import get_logger, configure_logging
    >>> logger = get_logger(__name__)
    >>> configure_logging(level="DEBUG")
    >>> logger.info("Carving maze...")
"""

from __future__ import annotations

from .logger import (
    # Classes
    LoggedOperation,
    MazeFormatter,
    MazeLogger,
    # Environment-specific configurations
    configure_development_logging,
    # Primary API
    configure_logging,
    configure_production_logging,
    get_logger,
    # Structured logging helpers
    log_generation_complete,
    log_generation_start,
    log_solve_result,
    log_validation_error,
)

__all__ = [
    # Core logging
    "configure_logging",
    "get_logger",
    # Environment configurations
    "configure_development_logging",
    "configure_production_logging",
    # Structured logging helpers
    "log_generation_complete",
    "log_generation_start",
    "log_solve_result",
    "log_validation_error",
    # Classes
    "LoggedOperation",
    "MazeFormatter",
    "MazeLogger",
]
