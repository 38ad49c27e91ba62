"""Outbound HTTP for the resource adapters.

All upstream traffic goes through :class:`HttpGateway`, which issues exactly
one GET per call and never retries. When no ``httpx.AsyncClient`` is injected,
a short-lived client is built per request so nothing is shared across calls.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from gravatar_mcp.adapters.errors import ErrorMapper
from gravatar_mcp.config import GravatarSettings

logger = logging.getLogger(__name__)


def build_async_client(settings: GravatarSettings | None = None) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` with the configured timeout and identity headers."""
    settings = settings or GravatarSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
    )


class HttpGateway:
    """Single-GET executor shared by the profile and avatar adapters."""

    def __init__(
        self,
        settings: GravatarSettings,
        client: httpx.AsyncClient | None = None,
        error_mapper: ErrorMapper | None = None,
    ) -> None:
        self._settings = settings
        self._client = client
        self._error_mapper = error_mapper or ErrorMapper()

    @property
    def error_mapper(self) -> ErrorMapper:
        return self._error_mapper

    def build_headers(self, accept: str) -> dict[str, str]:
        """Headers sent on every request; ``Authorization`` only when a key is configured."""
        headers = {
            "User-Agent": self._settings.user_agent,
            "Accept": accept,
        }
        api_key = self._settings.resolve_api_key()
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        return headers

    async def get(self, url: str, *, accept: str = "application/json") -> httpx.Response:
        """Issue one GET and return the response whatever its status.

        Raises:
            GravatarTransportError: If no response was received.
        """
        headers = self.build_headers(accept)
        logger.debug("GET %s", url)
        try:
            async with self._client_scope() as client:
                response = await client.get(url, headers=headers)
        except httpx.RequestError as error:
            logger.debug("GET %s failed before a response: %r", url, error)
            raise self._error_mapper.from_transport_error(error, url) from error
        logger.debug("GET %s -> %d", url, response.status_code)
        return response

    @asynccontextmanager
    async def _client_scope(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with build_async_client(self._settings) as client:
            yield client
