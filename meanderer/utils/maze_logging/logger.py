#!/usr/bin/env python3
"""
Logging Infrastructure for meanderer

Provides structured logging with configurable levels, formatting, and optional
color support for debugging maze generation and solving runs.
"""

from __future__ import annotations

import logging
import sys
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Any, ClassVar

try:
    import colorlog

    COLORLOG_AVAILABLE = True
except ImportError:
    COLORLOG_AVAILABLE = False


class MazeFormatter(logging.Formatter):
    """Formatter for meanderer log records."""

    def __init__(self, use_colors: bool = False, include_location: bool = False):
        self.use_colors = use_colors and COLORLOG_AVAILABLE
        self.include_location = include_location

        if self.use_colors:
            self.colored_formatter = colorlog.ColoredFormatter(
                "%(log_color)s%(asctime)s - %(name)-20s - %(levelname)-8s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                log_colors={
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "red,bg_white",
                },
            )

        format_str = "%(asctime)s - %(name)-20s - %(levelname)-8s - %(message)s"
        if self.include_location:
            format_str += " [%(filename)s:%(lineno)d]"

        super().__init__(format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record):
        if self.use_colors:
            return self.colored_formatter.format(record)
        else:
            return super().format(record)


class MazeLogger:
    """
    Central logging manager for meanderer with configuration management.

    Logger creation uses double-check locking so concurrent get_logger()
    calls never attach duplicate handlers. A single instance holds the
    global configuration.
    """

    _instance = None
    _lock: ClassVar[threading.Lock] = threading.Lock()
    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _log_level = logging.WARNING
    _log_to_file = False
    _log_file_path: Path | None = None
    _use_colors = True
    _include_location = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def configure(
        cls,
        level: str | int = "WARNING",
        log_to_file: bool = False,
        log_file_path: str | Path | None = None,
        use_colors: bool = True,
        include_location: bool = False,
        suppress_external: bool = True,
    ):
        """
        Configure global logging settings for meanderer.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_to_file: Whether to log to file
            log_file_path: Path to log file (optional)
            use_colors: Use colored terminal output if available
            include_location: Include file location in log messages
            suppress_external: Suppress verbose logging from external libraries
        """
        with cls._lock:
            if isinstance(level, str):
                cls._log_level = getattr(logging, level.upper())
            else:
                cls._log_level = level

            cls._log_to_file = log_to_file
            cls._use_colors = use_colors and COLORLOG_AVAILABLE
            cls._include_location = include_location

            if log_to_file:
                if log_file_path is None:
                    log_dir = Path.cwd() / "logs"
                    log_dir.mkdir(exist_ok=True)
                    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
                    cls._log_file_path = log_dir / f"meanderer_{timestamp}.log"
                else:
                    cls._log_file_path = Path(log_file_path)
                    cls._log_file_path.parent.mkdir(parents=True, exist_ok=True)
            else:
                cls._log_file_path = None

            if suppress_external:
                logging.getLogger("matplotlib").setLevel(logging.WARNING)
                logging.getLogger("PIL").setLevel(logging.WARNING)

            for logger in cls._loggers.values():
                cls._setup_logger(logger)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get or create a logger for the specified module/component.

        Args:
            name: Logger name (typically __name__ from calling module)

        Returns:
            Configured logger instance
        """
        if name in cls._loggers:
            return cls._loggers[name]

        with cls._lock:
            if name not in cls._loggers:
                logger = logging.getLogger(name)

                # logger may already have been configured through logging.getLogger()
                if not logger.handlers:
                    cls._setup_logger(logger)

                cls._loggers[name] = logger

        return cls._loggers[name]

    @classmethod
    def _setup_logger(cls, logger: logging.Logger):
        """Configure individual logger with current settings."""
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(cls._log_level)

        formatter = MazeFormatter(use_colors=cls._use_colors, include_location=cls._include_location)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(cls._log_level)
        logger.addHandler(console_handler)

        if cls._log_to_file and cls._log_file_path:
            file_handler = logging.FileHandler(cls._log_file_path)
            # File logs always use standard formatting (no colors)
            file_formatter = MazeFormatter(use_colors=False, include_location=cls._include_location)
            file_handler.setFormatter(file_formatter)
            file_handler.setLevel(cls._log_level)
            logger.addHandler(file_handler)

        logger.propagate = False


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger for the current module.

    Args:
        name: Logger name (if None, uses calling module name)

    Returns:
        Configured logger instance
    """
    if name is None:
        import inspect

        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get("__name__", "meanderer")
        else:
            name = "meanderer"

    return MazeLogger.get_logger(name)


def configure_logging(**kwargs):
    """
    Configure global logging settings.

    Keyword Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to file
        log_file_path: Path to log file
        use_colors: Use colored terminal output
        include_location: Include file location in messages
        suppress_external: Suppress external library logging
    """
    MazeLogger.configure(**kwargs)


def configure_development_logging(include_location: bool = True):
    """
    Configure logging for development and debugging.

    Args:
        include_location: Include file:line information
    """
    configure_logging(
        level="DEBUG",
        use_colors=True,
        include_location=include_location,
        suppress_external=False,
    )

    logger = get_logger("meanderer.development")
    logger.info("Development logging enabled - DEBUG level with full details")


def configure_production_logging(log_file: str | Path | None = None):
    """
    Configure logging for production use: warnings and errors only.

    Args:
        log_file: Custom log file path (optional)
    """
    configure_logging(
        level="WARNING",
        log_to_file=log_file is not None,
        log_file_path=log_file,
        use_colors=False,
        include_location=False,
        suppress_external=True,
    )


def log_generation_start(logger: logging.Logger, algorithm: str, grid_info: dict[str, Any]):
    """Log the start of a maze generation run."""
    info_str = ", ".join(f"{k}: {v}" for k, v in grid_info.items())
    logger.info(f"Generating maze with {algorithm} ({info_str})")


def log_generation_complete(
    logger: logging.Logger,
    algorithm: str,
    num_cells: int,
    num_links: int,
    execution_time: float,
):
    """Log completion of a maze generation run with summary."""
    status = "PERFECT" if num_links == num_cells - 1 else "NOT_A_TREE"
    logger.info(f"{algorithm} completed - Status: {status}")
    logger.debug(f"Final results: {num_cells} cells, {num_links} links, time: {execution_time:.3f}s")


def log_solve_result(logger: logging.Logger, start: Any, target: Any, path_length: int, visited: int):
    """Log a solved path."""
    logger.info(f"Solved {start} -> {target}: {path_length} steps")
    logger.debug(f"Distance map covered {visited} positions")


def log_validation_error(logger: logging.Logger, component: str, error_msg: str, suggestion: str | None = None):
    """Log validation errors with suggestions."""
    logger.error(f"Validation error in {component}: {error_msg}")
    if suggestion:
        logger.info(f"Suggestion: {suggestion}")


class LoggedOperation:
    """Context manager for logging timed operations."""

    def __init__(self, logger: logging.Logger, operation_name: str, log_level: int = logging.INFO):
        self.logger = logger
        self.operation_name = operation_name
        self.log_level = log_level
        self.start_time: float | None = None
        self.duration: float | None = None

    def __enter__(self):
        self.logger.log(self.log_level, f"Starting {self.operation_name}")
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - (self.start_time or 0.0)

        if exc_type is None:
            self.logger.log(self.log_level, f"Completed {self.operation_name} in {self.duration:.3f}s")
        else:
            self.logger.error(f"Failed {self.operation_name} after {self.duration:.3f}s: {exc_val}")

        return False
