"""Rivet logging utilities.

This module provides specialized loggers for Rivet operations:
- client_logger - For transport/client operations
- pipeline_logger - For query assembly
- retry_logger - For retried requests

Note: All logger configuration is centralized in rivet/config/logging.py.
This module only provides specialized loggers and utilities.
"""

import sys
from pprint import pformat

from .config import rivet_logger

# Create specialized loggers
client_logger = rivet_logger.bind(name="client")
pipeline_logger = rivet_logger.bind(name="pipeline")
retry_logger = rivet_logger.bind(name="retry")

_NAMED_LOGGERS = {
    "client": client_logger,
    "pipeline": pipeline_logger,
    "retry": retry_logger,
}


def debug_print(obj, logger_name: str | None = None):
    """Debug printing with proper formatting.

    Args:
        obj: Object to format and log
        logger_name: Optional logger name to use (e.g., "pipeline", "client")
                    If None, uses root rivet logger
    """
    try:
        formatted = pformat(obj, indent=2)
        if logger_name:
            named = _NAMED_LOGGERS.get(logger_name)
            if named is None:
                named = rivet_logger.bind(name=logger_name)
            named.debug(formatted)
        else:
            rivet_logger.debug(formatted)
    except Exception as e:
        print(f"Failed to log debug message: {e}", file=sys.stderr)
