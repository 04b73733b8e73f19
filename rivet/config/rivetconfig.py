"""Configuration Class for Shared State"""

from __future__ import annotations

from configparser import ConfigParser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


DEFAULT_TIMEOUT: float = 30.0


@dataclass
class RivetConfig:
    # region Fields

    # Mandatory property
    endpoint: str

    # Seconds, enforced by the httpx transport for every single attempt
    timeout: float = DEFAULT_TIMEOUT

    # 0 disables the retry wrapper altogether
    retry_count: int = 0

    headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True

    # Anything else the transport understands, forwarded as-is
    transport_options: dict[str, Any] = field(default_factory=dict)

    # Misc
    debug: bool = False
    log_levels: dict[str, str] = field(
        default_factory=lambda: {
            "rivet_console": "INFO",
            "rivet_file": "INFO",
        }
    )

    # Configuration file
    config_path: Path | None = None

    # Objects
    _parser: ConfigParser = field(
        default_factory=lambda: ConfigParser(interpolation=None),
        repr=False,
        compare=False,
    )

    # endregion Fields

    # region Methods

    @classmethod
    def from_options(cls, endpoint: str, **options: Any) -> RivetConfig:
        """Build a configuration from `rivet.create` style keyword arguments.

        `timeout` and `retry_count` (or the legacy `retryCount`) are picked
        out, `headers` and `verify` map onto their fields, everything else
        ends up in `transport_options`.
        """
        options = dict(options)
        retry_count = options.pop("retry_count", None)
        legacy_retry_count = options.pop("retryCount", None)
        if retry_count is None:
            retry_count = legacy_retry_count

        timeout = options.pop("timeout", None)

        return cls(
            endpoint=endpoint,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
            retry_count=retry_count or 0,
            headers=dict(options.pop("headers", None) or {}),
            verify_ssl=options.pop("verify", True),
            transport_options=options,
        )

    def transport_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for `HTTPXAsyncTransport`.

        The retry count is consumed by the client and never forwarded.
        """
        return {
            "url": self.endpoint,
            "headers": dict(self.headers),
            "verify": self.verify_ssl,
            "timeout": self.timeout,
            **self.transport_options,
        }

    # endregion Methods
