"""Configuration File Manipulation"""

import configparser
from configparser import ConfigParser
from pathlib import Path
from urllib.parse import urlparse

from rivet.config.logging import rivet_logger as logger
from rivet.config.rivetconfig import RivetConfig
from rivet.errors import ConfigError


RIVET_SECTION = "Rivet"
HEADERS_SECTION = "Headers"
LOGGING_SECTION = "Logging"


def validate_config(config: RivetConfig) -> None:
    """Checks a configuration before a client is built from it.

    :param RivetConfig config: The configuration to check.

    :raises ConfigError: When the endpoint is not an http(s) URL,
        the timeout is not positive or the retry count is negative.
    """
    parsed = urlparse(config.endpoint or "")
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigError(
            f"Invalid endpoint '{config.endpoint}': expected an http(s) URL"
        )

    if config.timeout is not None and config.timeout <= 0:
        raise ConfigError(f"Timeout must be positive, got {config.timeout}")

    if not isinstance(config.retry_count, int) or config.retry_count < 0:
        raise ConfigError(
            f"Retry count must be a non-negative integer, got {config.retry_count!r}"
        )


def _handle_rivet_section(parser: ConfigParser, config_path: Path) -> RivetConfig:
    """Handle Rivet section configuration."""
    if not parser.has_section(RIVET_SECTION):
        raise ConfigError(f"Section [{RIVET_SECTION}] missing from '{config_path}'")

    return RivetConfig(
        endpoint=parser.get(RIVET_SECTION, "endpoint"),
        timeout=parser.getfloat(RIVET_SECTION, "timeout", fallback=30.0),
        retry_count=parser.getint(RIVET_SECTION, "retry_count", fallback=0),
        verify_ssl=parser.getboolean(RIVET_SECTION, "verify_ssl", fallback=True),
        debug=parser.getboolean(RIVET_SECTION, "debug", fallback=False),
        config_path=config_path,
    )


def _handle_headers_section(config: RivetConfig) -> None:
    """Handle Headers section configuration."""
    if not config._parser.has_section(HEADERS_SECTION):
        return

    for name, value in config._parser.items(HEADERS_SECTION):
        config.headers[name] = value.strip()


def _handle_logging_section(config: RivetConfig) -> None:
    """Handle Logging section configuration."""
    if config._parser.has_section(LOGGING_SECTION):
        for name in ("rivet_console", "rivet_file"):
            config.log_levels[name] = config._parser.get(
                LOGGING_SECTION, name, fallback="INFO"
            ).upper()

    # Validate log levels
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    for name, level in config.log_levels.items():
        if level not in valid_levels:
            logger.warning(
                f"Invalid log level '{level}' for logger '{name}', using 'INFO'"
            )
            config.log_levels[name] = "INFO"


def _handle_config_error(e: Exception, config_path: Path) -> None:
    """Handle configuration errors with appropriate messages."""
    error_string = str(e)

    if isinstance(e, configparser.NoOptionError):
        raise ConfigError(
            f"Your configuration file '{config_path}' is invalid: {error_string}"
        ) from e
    if isinstance(e, ValueError):
        raise ConfigError(
            f"You have entered a wrong value in '{config_path}' -> '{error_string}'"
        ) from e
    raise ConfigError(
        f"An error occurred while reading the configuration file: {error_string}"
    ) from e


def load_config(config_path: Path | str) -> RivetConfig:
    """Loads the client configuration from an ini file.

    :param config_path: Path to the ini file.

    :return: The validated configuration.
    :rtype: RivetConfig

    :raises ConfigError: When the file is missing, incomplete or malformed.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file '{config_path}' not found.")

    logger.info(f"Reading {config_path.name} file ...")

    parser = ConfigParser(interpolation=None)
    # Keep header names as written
    parser.optionxform = str  # type: ignore[assignment,method-assign]

    try:
        parser.read(config_path, encoding="utf-8")
        config = _handle_rivet_section(parser, config_path)
        config._parser = parser
        _handle_headers_section(config)
        _handle_logging_section(config)

    except (configparser.Error, ValueError) as e:
        _handle_config_error(e, config_path)

    validate_config(config)
    return config
