# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocols for the network transport."""

from collections.abc import AsyncIterator, Mapping
from contextlib import AbstractAsyncContextManager
from typing import Protocol, runtime_checkable

from ..endpoint import EndpointConfig
from ..types.envelope import RequestEnvelope


@runtime_checkable
class ResponseStreamProtocol(Protocol):
    """
    An HTTP response whose body has not been read yet.

    ``iter_chunks`` yields body chunks in receipt order and raises
    ``api_resource.exceptions.TransportError`` if the connection fails
    mid-body.
    """

    @property
    def status(self) -> int:
        """HTTP status code."""
        ...

    @property
    def headers(self) -> Mapping[str, str]:
        """Response headers with lower-cased names."""
        ...

    def iter_chunks(self) -> AsyncIterator[bytes]:
        """Iterate over body chunks as they arrive."""
        ...


@runtime_checkable
class TransportProtocol(Protocol):
    """
    The one component that touches the network.

    The core library never opens sockets itself; any object implementing
    this protocol can be handed to ResourceClient. Implementations must map
    every connection-level failure to
    ``api_resource.exceptions.TransportError`` and must not interpret the
    response.
    """

    def open(
        self,
        endpoint: EndpointConfig,
        envelope: RequestEnvelope,
    ) -> AbstractAsyncContextManager[ResponseStreamProtocol]:
        """
        Send a request and expose the response stream for the block's duration.

        Args:
            endpoint: Where to connect and whether to use TLS
            envelope: Method, target, headers and encoded body

        Returns:
            Async context manager yielding the response stream; the
            connection is released when the block exits.
        """
        ...

    async def aclose(self) -> None:
        """Release any resources held by the transport."""
        ...
