"""Request assembly.

`assemble_query` turns a root query plus component dependencies into the
document text that is sent, `Rivet` sends it.
"""

from __future__ import annotations

import warnings
from collections.abc import Awaitable, Sequence
from typing import Any

from .client import RivetClient
from .collectors import collect_fragments, collect_variables
from .config import RivetConfig, validate_config
from .errors import MissingQueryError
from .logging import pipeline_logger as logger
from .rewriter import inject_variables


FRAGMENTS_DEPRECATION = (
    '[rivet] The "fragments" argument is deprecated, please use '
    '"dependencies" instead.'
)


# Frames between the warning and the caller of a public entry point
_WARNING_STACKLEVEL = 4


def _manual_fragments(fragments: str | Sequence[str] | None) -> list[str]:
    if not fragments:
        return []

    warnings.warn(
        FRAGMENTS_DEPRECATION, DeprecationWarning, stacklevel=_WARNING_STACKLEVEL
    )
    logger.warning(FRAGMENTS_DEPRECATION)

    if isinstance(fragments, str):
        return [fragments]
    return list(fragments)


def assemble_query(
    query: str | None,
    fragments: str | Sequence[str] | None = None,
    dependencies: Sequence[Any] | None = None,
    variables: dict[str, Any] | None = None,
) -> str:
    """Build the document text for a request.

    Args:
        query: Root query source text
        fragments: Deprecated, fragment text appended as-is
        dependencies: Component dependency handles
        variables: Variable values the request will be sent with

    Returns:
        The (possibly rewritten) query followed by one line per fragment

    Raises:
        MissingQueryError: If no query text was given
        InvalidDependenciesError: If `dependencies` is not a list
        VariableMismatchError: If a dependency needs a variable not supplied
        MultipleOperationsError: If variables must be injected into a query
            with several operations
    """
    return _assemble(query, fragments, dependencies, variables)


def _assemble(
    query: str | None,
    fragments: str | Sequence[str] | None,
    dependencies: Sequence[Any] | None,
    variables: dict[str, Any] | None,
) -> str:
    if not query:
        raise MissingQueryError()

    manual = _manual_fragments(fragments)
    if dependencies is None:
        dependencies = []

    collected = collect_fragments(dependencies)
    required = collect_variables(dependencies, variables)
    rewritten = inject_variables(query, required)

    return f"{rewritten}\n" + "\n".join([*manual, *collected])


class Rivet:
    """Request function bound to one configured client.

    Calling it validates and assembles the request immediately, so
    assembly errors are raised at call time, and returns the awaitable
    of the network call.

    Examples:
        ```python
        async with rivet.create("https://example.com/graphql") as fetch:
            data = await fetch(
                query="query Product { product { ...productCard } }",
                dependencies=[ProductCard],
                variables={"productId": "42"},
            )
        ```
    """

    def __init__(self, client: RivetClient) -> None:
        self.client = client

    def fetch(
        self,
        query: str | None = None,
        *,
        fragments: str | Sequence[str] | None = None,
        dependencies: Sequence[Any] | None = None,
        variables: dict[str, Any] | None = None,
    ) -> Awaitable[dict[str, Any]]:
        """Assemble the request and hand it to the client.

        Returns:
            Awaitable resolving to the response data, transport errors are
            raised unchanged when it is awaited

        Raises:
            GraphQLSyntaxError: If the assembled text does not parse
        """
        document = _assemble(query, fragments, dependencies, variables)
        return self.client.request(document, variables)

    __call__ = fetch

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> Rivet:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def create_from_config(config: RivetConfig) -> Rivet:
    """Build a request function from a loaded configuration."""
    validate_config(config)
    return Rivet(RivetClient(config))


def create(endpoint_url: str, **options: Any) -> Rivet:
    """Build a request function for a GraphQL endpoint.

    Args:
        endpoint_url: GraphQL endpoint URL
        **options: `timeout` in seconds (default 30), `retry_count`
            (default 0, no retries), anything else is passed to the
            httpx transport as-is (e.g. `headers`, `verify`)

    Returns:
        `Rivet` request function, its `client` attribute sends raw requests

    Raises:
        ConfigError: If the endpoint, timeout or retry count is invalid
    """
    return create_from_config(RivetConfig.from_options(endpoint_url, **options))
