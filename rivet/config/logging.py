"""Centralized logging configuration and control.

This module provides centralized logging configuration for all components:
1. rivet_logger - For request assembly, client and retry operations
2. trace_logger - For very detailed dependency traversal output

Importing this module leaves loguru's sinks untouched, records go to
whatever the host application configured (loguru's stderr sink by default).
`setup_handlers` adds the dedicated console and file handlers on request.
Other modules should import and use these loggers rather than
creating their own handlers.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from rivet.config.rivetconfig import RivetConfig


# Global configuration
_config: RivetConfig | None = None
_debug_enabled = False

# Log file names
DEFAULT_LOG_FILE = "rivet.log"
DEFAULT_TRACE_LOG_FILE = "rivet_trace.log"


class InterceptHandler(logging.Handler):
    """Intercepts standard logging and redirects to loguru.

    gql and httpx log through the standard library; installing this handler
    routes their records into the rivet handlers. Example:

    ```python
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    ```
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(rivet=True, name=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


# Standard level values (loguru's default scale)
_LEVEL_VALUES = {
    "TRACE": 5,  # Detailed information for diagnostics
    "DEBUG": 10,  # Debug information
    "INFO": 20,  # Normal information
    "SUCCESS": 25,  # Successful operation
    "WARNING": 30,  # Warning messages
    "ERROR": 40,  # Error messages
    "CRITICAL": 50,  # Critical errors
}

# Pre-configured loggers with extra fields
rivet_logger = logger.bind(rivet=True, name="rivet")
trace_logger = logger.bind(trace=True)

# Handler IDs for cleanup
_handler_ids: list[int] = []


def setup_handlers(log_dir: Path | None = None) -> None:
    """Set up all logging handlers.

    This function configures all loggers with appropriate handlers:
    1. rivet console handler - colourised stdout output
    2. rivet file handler - rotating, compressed log file
    3. trace file handler - only active when debug is enabled

    Args:
        log_dir: Directory for log files (default: ./logs)
    """
    # Remove any existing handlers
    for handler_id in _handler_ids:
        try:
            logger.remove(handler_id)
        except ValueError:
            pass  # Handler already removed
    _handler_ids.clear()

    log_dir = log_dir or Path.cwd() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    # 1. Console Handler
    _handler_ids.append(
        logger.add(
            sys.stdout,
            format="<level>{level.name:>8}</level> | <white>{time:HH:mm:ss.SS}</white> | {message}",
            level=get_log_level("rivet_console", "INFO"),
            filter=lambda record: record["extra"].get("rivet", False),
            colorize=True,
            enqueue=True,
        )
    )

    # 2. File Handler
    _handler_ids.append(
        logger.add(
            log_dir / DEFAULT_LOG_FILE,
            format="[{time:YYYY-MM-DD HH:mm:ss}] {level.name} - {extra[name]} - {message}",
            level=get_log_level("rivet_file", "INFO"),
            filter=lambda record: record["extra"].get("rivet", False),
            rotation="100 MB",
            retention=10,
            compression="gz",
            encoding="utf-8",
            enqueue=True,
        )
    )

    # 3. Trace File Handler (for very detailed logging)
    _handler_ids.append(
        logger.add(
            log_dir / DEFAULT_TRACE_LOG_FILE,
            format="[{time:YYYY-MM-DD HH:mm:ss.SSSSSS}] {level.name} - {message}",
            level=get_log_level("trace", "TRACE"),
            filter=lambda record: record["extra"].get("trace", False),
            rotation="100 MB",
            retention=5,
            compression="gz",
            enqueue=True,
        )
    )


def init_logging_config(config: RivetConfig) -> None:
    """Initialize logging configuration."""
    global _config
    _config = config
    set_debug_enabled(config.debug)

    setup_handlers()


def set_debug_enabled(enabled: bool) -> None:
    """Set the global debug flag."""
    global _debug_enabled
    _debug_enabled = enabled


def get_log_level(logger_name: str, default: str = "INFO") -> int:
    """Get log level for a logger.

    Args:
        logger_name: Name of the logger (e.g., "rivet_console", "rivet_file")
        default: Default level if config not set or logger not found

    Returns:
        Log level as integer (e.g., 10 for DEBUG, 20 for INFO)
        For the trace logger:
            - 5 (TRACE) if debug mode is enabled
            - 50 (CRITICAL) otherwise (effectively disabled)
        For other loggers:
            - 10 (DEBUG) if debug mode is enabled
            - Level from config or default, but never below DEBUG
    """
    if logger_name == "trace":
        return _LEVEL_VALUES["TRACE"] if _debug_enabled else _LEVEL_VALUES["CRITICAL"]

    # Force DEBUG level if debug mode is enabled (for non-trace loggers)
    if _debug_enabled:
        return _LEVEL_VALUES["DEBUG"]

    if _config is None:
        level_name = default
    else:
        level_name = _config.log_levels.get(logger_name, default)

    # Convert level name to integer and ensure minimum DEBUG level
    level = _LEVEL_VALUES[level_name.upper()]
    return max(level, _LEVEL_VALUES["DEBUG"])


def intercept_standard_logging(level: int = logging.WARNING) -> None:
    """Route gql/httpx standard library logging into loguru."""
    logging.basicConfig(handlers=[InterceptHandler()], level=level, force=True)
