"""Configuration File Manipulation"""

from .rivetconfig import DEFAULT_TIMEOUT, RivetConfig  # isort:skip
from .logging import (
    get_log_level,
    init_logging_config,
    intercept_standard_logging,
    rivet_logger,
    set_debug_enabled,
    setup_handlers,
    trace_logger,
)
from .config import load_config, validate_config  # isort:skip


__all__ = [
    "DEFAULT_TIMEOUT",
    "RivetConfig",
    "get_log_level",
    "init_logging_config",
    "intercept_standard_logging",
    "load_config",
    "rivet_logger",
    "set_debug_enabled",
    "setup_handlers",
    "trace_logger",
    "validate_config",
]
