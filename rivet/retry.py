"""Retry wrapper for GraphQL requests."""

from __future__ import annotations

import functools
import uuid
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from .logging import retry_logger as logger


RT = TypeVar("RT")


def with_retry(
    request: Callable[..., Awaitable[RT]],
    max_retries: int,
) -> Callable[..., Awaitable[RT]]:
    """Wrap an async request function so failed attempts are retried.

    Attempts run one after the other without any delay. The error of the
    last attempt is re-raised unchanged. Every top-level call gets its own
    correlation id so the log lines of one retried request can be grouped.

    Args:
        request: Async function performing a single attempt
        max_retries: Total number of attempts, at least 1

    Returns:
        Async function with the same signature as `request`

    Raises:
        ValueError: If `max_retries` is smaller than 1

    Examples:
        ```python
        request = with_retry(client.request, 3)
        data = await request("query { hello }")
        ```
    """
    if max_retries < 1:
        raise ValueError(f"max_retries must be at least 1, got {max_retries}")

    @functools.wraps(request)
    async def wrapper(*args: Any, **kwargs: Any) -> RT:
        correlation_id = uuid.uuid4()
        for attempt in range(1, max_retries + 1):
            try:
                return await request(*args, **kwargs)
            except Exception as e:
                if attempt == max_retries:
                    logger.error(f"[{correlation_id}] Failed all retries, throwing!")
                    raise
                logger.warning(
                    f"[{correlation_id}] Failed retry #{attempt}, retrying... "
                    f"({type(e).__name__}: {e})"
                )

        raise RuntimeError("Unexpected retry path")  # pragma: no cover

    wrapper.max_retries = max_retries  # type: ignore[attr-defined]
    return wrapper
