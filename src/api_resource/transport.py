# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
httpx-based transport.

HttpxTransport is the default TransportProtocol implementation. It sends the
envelope with an ``httpx.AsyncClient`` in streaming mode and hands the
unread response to the caller. Every ``httpx.RequestError`` (DNS failure,
refused connection, reset, timeout, undecodable body, redirect loop) and
every invalid URL is reported as the same
``TransportError("Server unavailable")``; the httpx exception stays
reachable as ``__cause__``.

Retries, pooling policy and TLS options beyond the scheme are left at httpx
defaults with retries disabled.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager

import httpx

from .endpoint import EndpointConfig
from .exceptions import TransportError
from .headers import redact
from .types.envelope import RequestEnvelope

logger = logging.getLogger(__name__)


class HttpxResponseStream:
    """ResponseStreamProtocol adapter over a streaming ``httpx.Response``."""

    __slots__ = ("_headers", "_response")

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._headers = {
            name.lower(): value for name, value in response.headers.items()
        }

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self._headers

    async def iter_chunks(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_bytes():
                if chunk:
                    yield chunk
        except httpx.RequestError as e:
            logger.warning(
                f"Connection lost while reading {self._response.request.url}: "
                f"{type(e).__name__}"
            )
            raise TransportError() from e


class HttpxTransport:
    """
    Transport that performs calls with httpx.

    Args:
        timeout: Total timeout in seconds, None for no timeout
        connect_timeout: Connect timeout; defaults to ``timeout``
        follow_redirects: Follow 3xx responses
        transport: Optional ``httpx.AsyncBaseTransport`` (for example
            ``httpx.MockTransport`` in tests)
        client: Optional pre-built ``httpx.AsyncClient``; when given, the
            other options are ignored and the caller owns its lifecycle

    Example:
        >>> transport = HttpxTransport(timeout=10.0)
        >>> client = ResourceClient("https://api.example.com", transport=transport)
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        follow_redirects: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.follow_redirects = follow_redirects
        self._transport = transport
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            connect = (
                self.connect_timeout
                if self.connect_timeout is not None
                else self.timeout
            )
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=connect),
                follow_redirects=self.follow_redirects,
                transport=self._transport,
            )
        return self._client

    @asynccontextmanager
    async def open(
        self,
        endpoint: EndpointConfig,
        envelope: RequestEnvelope,
    ) -> AsyncIterator[HttpxResponseStream]:
        """Send ``envelope`` to ``endpoint`` and yield the unread response."""
        if endpoint.port is None:
            logger.warning(f"No usable port for host {endpoint.host!r}")
            raise TransportError()

        client = self._get_client()
        url = f"{endpoint.base_url}{envelope.url}"
        logger.debug(
            f"Sending {envelope.method} {url} headers={redact(envelope.headers)}"
        )
        try:
            request = client.build_request(
                envelope.method,
                url,
                headers=dict(envelope.headers),
                content=envelope.content,
            )
            response = await client.send(request, stream=True)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.warning(
                f"{envelope.method} {endpoint.base_url}{envelope.path} failed: "
                f"{type(e).__name__}: {e}"
            )
            raise TransportError() from e

        try:
            yield HttpxResponseStream(response)
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


__all__ = ["HttpxResponseStream", "HttpxTransport"]
