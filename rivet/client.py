"""GraphQL transport client."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any

from gql import Client, gql
from gql.client import AsyncClientSession
from gql.transport.httpx import HTTPXAsyncTransport
from graphql import DocumentNode

from .config import RivetConfig
from .logging import client_logger
from .retry import with_retry


class RivetClient:
    """Thin wrapper around a `gql` client sending raw query text.

    The session is opened on the first request and shared by all requests
    afterwards. Query text is parsed when `request` is called. When the
    configuration asks for retries, only sending the parsed document is
    retried, so raw requests made through this client retry transport
    failures as well.

    Examples:
        ```python
        client = RivetClient(RivetConfig(endpoint="https://example.com/graphql"))
        try:
            data = await client.request("query { hello }")
        finally:
            await client.close()
        ```
    """

    def __init__(self, config: RivetConfig, log: Any = None) -> None:
        """Initialize client.

        Args:
            config: Endpoint, timeout, retry count and transport options
            log: Optional logger instance
        """
        self.config = config
        self.url = config.endpoint
        self.log = log or client_logger

        # Schema is never fetched, the text is sent as assembled
        self.http_transport = HTTPXAsyncTransport(**config.transport_kwargs())
        self.gql_client = Client(
            transport=self.http_transport,
            fetch_schema_from_transport=False,
        )
        self._session: AsyncClientSession | None = None
        self._connect_lock = asyncio.Lock()

        self.retry_count = config.retry_count
        if self.retry_count:
            self.execute = with_retry(self.execute, self.retry_count)  # type: ignore[method-assign]

        self.log.debug(f"Using GraphQL endpoint at {self.url}")
        self.log.debug(f"Timeout: {config.timeout}s, retries: {self.retry_count}")

    async def _get_session(self) -> AsyncClientSession:
        if self._session is None:
            async with self._connect_lock:
                if self._session is None:
                    self._session = await self.gql_client.connect_async(
                        reconnecting=False
                    )
                    self.log.debug("GQL client session established")
        return self._session

    def request(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> Awaitable[dict[str, Any]]:
        """Parse query text and send it to the endpoint.

        The text is parsed before anything is sent, so a malformed document
        fails immediately and is never retried.

        Args:
            query: Complete GraphQL document text
            variables: Optional variable values

        Returns:
            Awaitable resolving to the `data` part of the response

        Raises:
            GraphQLSyntaxError: If the text does not parse
        """
        document = gql(query)
        return self.execute(document, variables)

    async def execute(
        self,
        document: DocumentNode,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a parsed document to the endpoint.

        Raises:
            TransportQueryError: If the server reports GraphQL errors
            TransportServerError: If the server answers with an error status
            TransportError: On other transport failures
            httpx.TimeoutException: If the request times out
        """
        session = await self._get_session()
        result = await session.execute(document, variable_values=variables)
        return dict(result)

    async def close(self) -> None:
        """Close the session, if one was opened."""
        async with self._connect_lock:
            if self._session is None:
                return
            self._session = None
            await self.gql_client.close_async()
            self.log.debug("GQL client session closed")

    async def __aenter__(self) -> RivetClient:
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()
