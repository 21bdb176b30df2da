# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Per-resource requests.

A ResourceRequest is bound to one path of a ResourceClient. Its CRUD
methods are thin renames of the HTTP verb methods, and every verb funnels
into one primitive that

1. serializes ``params`` into the query string (bracket notation),
2. overlays the request's headers onto the client's base headers,
3. encodes the body according to its type (JsonBody, FormBody, RawBody),
4. hands the envelope to the transport and interprets the response.

    users = client.request("users")
    outcome = await users.index({"page": 2})
    outcome = await users.create({}, {"name": "Ada"})
    outcome = await users.update(7, {}, FormBody({"name": "Ada"}))

Streaming calls skip interpretation and deliver raw chunks instead.
"""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from functools import partial
from typing import TYPE_CHECKING, Any

from .exceptions import SerializationError, TransportError
from .headers import (
    CONTENT_TYPE,
    EMPTY_HEADERS,
    HeaderSet,
    freeze_headers,
    merge_headers,
    with_header,
)
from .streaming.iterator import StreamingChunkIterator
from .streaming.result import StreamResult
from .types.body import coerce_body
from .types.envelope import RequestEnvelope
from .types.outcome import ResponseOutcome
from .types.params import ParamMapping

if TYPE_CHECKING:
    from .client import ResourceClient

logger = logging.getLogger(__name__)

ChunkSink = Callable[[bytes], Awaitable[None] | None]


class ResourceRequest:
    """
    Requests against one resource path.

    Instances are cheap; they hold no per-call state and may be reused for
    any number of calls, concurrently or not.

    Args:
        client: The owning ResourceClient
        path: Resource path; a leading ``/`` is added when missing
    """

    def __init__(self, client: ResourceClient, path: str) -> None:
        self._client = client
        self.path = path if path.startswith("/") else f"/{path}"
        self._headers: HeaderSet = EMPTY_HEADERS

    @property
    def client(self) -> ResourceClient:
        return self._client

    @property
    def headers(self) -> HeaderSet:
        """This request's overlay headers."""
        return self._headers

    def set_headers(self, headers: Mapping[str, str] | None) -> ResourceRequest:
        """Replace the overlay headers; returns the request for chaining."""
        self._headers = freeze_headers(headers)
        return self

    # CRUD methods

    async def index(self, params: ParamMapping | None = None) -> ResponseOutcome:
        return await self.get(None, params)

    async def show(
        self, resource_id: Any, params: ParamMapping | None = None
    ) -> ResponseOutcome:
        return await self.get(resource_id, params)

    async def create(
        self, params: ParamMapping | None = None, data: Any = None
    ) -> ResponseOutcome:
        return await self.post(None, params, data)

    async def update(
        self, resource_id: Any, params: ParamMapping | None = None, data: Any = None
    ) -> ResponseOutcome:
        return await self.put(resource_id, params, data)

    async def destroy(
        self, resource_id: Any, params: ParamMapping | None = None
    ) -> ResponseOutcome:
        return await self.delete(resource_id, params)

    # HTTP methods

    async def get(
        self, resource_id: Any = None, params: ParamMapping | None = None
    ) -> ResponseOutcome:
        return await self.request_json("GET", resource_id, params)

    async def post(
        self,
        resource_id: Any = None,
        params: ParamMapping | None = None,
        data: Any = None,
    ) -> ResponseOutcome:
        return await self.request_json("POST", resource_id, params, data)

    async def put(
        self,
        resource_id: Any = None,
        params: ParamMapping | None = None,
        data: Any = None,
    ) -> ResponseOutcome:
        return await self.request_json("PUT", resource_id, params, data)

    async def delete(
        self, resource_id: Any = None, params: ParamMapping | None = None
    ) -> ResponseOutcome:
        return await self.request_json("DELETE", resource_id, params)

    # Request primitives

    async def request_json(
        self,
        method: str,
        resource_id: Any = None,
        params: ParamMapping | None = None,
        data: Any = None,
    ) -> ResponseOutcome:
        """
        Perform one call and interpret the response.

        Returns:
            Success, DomainError, ParseError or TransportError.

        Raises:
            SerializationError: If ``params`` or ``data`` cannot be encoded;
                nothing is sent in that case.
        """
        envelope = self.build_envelope(method, resource_id, params, data)
        return await self._dispatch(envelope)

    async def request(
        self,
        method: str,
        resource_id: Any = None,
        params: ParamMapping | None = None,
        data: Any = None,
    ) -> ResponseOutcome:
        """
        Perform one call.

        Responses are classified by their Content-Type whatever the caller
        expects, so this behaves exactly like ``request_json``.
        """
        return await self.request_json(method, resource_id, params, data)

    async def stream(
        self,
        method: str,
        data: Any = None,
        on_chunk: ChunkSink | None = None,
        *,
        resource_id: Any = None,
        params: ParamMapping | None = None,
    ) -> StreamResult:
        """
        Perform one call, forwarding body chunks as they arrive.

        ``on_chunk`` is called once per chunk in receipt order; a coroutine
        function is awaited before the next chunk is read. By default the
        call targets the bare resource path with no query string.

        Returns:
            StreamResult with the concatenated buffer. A connection failure
            is reported through ``StreamResult.error``, never raised.
        """
        envelope = self.build_envelope(method, resource_id, params, data)
        chunks: StreamingChunkIterator | None = None
        try:
            async with self._open_stream(envelope) as chunks:
                async for chunk in chunks:
                    if on_chunk is not None:
                        delivered = on_chunk(chunk)
                        if inspect.isawaitable(delivered):
                            await delivered
            return chunks.result()
        except TransportError as e:
            if chunks is None:
                return StreamResult(error=e)
            return chunks.result()

    def iter_stream(
        self,
        method: str,
        data: Any = None,
        *,
        resource_id: Any = None,
        params: ParamMapping | None = None,
    ) -> AbstractAsyncContextManager[StreamingChunkIterator]:
        """
        Open a streaming call as an async context manager of chunks.

        Example:
            async with request.iter_stream("GET") as chunks:
                async for chunk in chunks:
                    print(len(chunk))
            everything = chunks.buffer

        Raises:
            TransportError: On entering the block if the connection cannot
                be opened, or during iteration if it breaks.
        """
        envelope = self.build_envelope(method, resource_id, params, data)
        return self._open_stream(envelope)

    def build_envelope(
        self,
        method: str,
        resource_id: Any = None,
        params: ParamMapping | None = None,
        data: Any = None,
    ) -> RequestEnvelope:
        """
        Build the RequestEnvelope for one call without sending it.

        Raises:
            SerializationError: If ``params`` or ``data`` cannot be encoded.
        """
        client = self._client
        method = method.upper()
        try:
            query = client.serialize(params)
            body = coerce_body(data)
            encoded = body.encode(client.serialize) if body is not None else None
        except SerializationError as e:
            logger.debug(f"Rejected {method} {self.path}: {e}")
            client.record_serialization_error(method)
            raise

        headers = merge_headers(client.headers, self._headers)
        if encoded is not None and encoded.content_type is not None:
            headers = with_header(headers, CONTENT_TYPE, encoded.content_type)

        return RequestEnvelope(
            method=method,
            path=self.path,
            query=query,
            resource_id=resource_id,
            params=params,
            body=encoded,
            headers=headers,
        )

    async def _dispatch(self, envelope: RequestEnvelope) -> ResponseOutcome:
        client = self._client
        started = time.perf_counter()
        outcome: ResponseOutcome
        try:
            async with client.transport.open(client.endpoint, envelope) as response:
                outcome = await client.interpreter.consume(response)
        except TransportError as e:
            outcome = e
        duration = time.perf_counter() - started

        logger.debug(
            f"{envelope.method} {envelope.url} -> "
            f"{type(outcome).__name__} (status {outcome.status}) in {duration:.3f}s"
        )
        client.record_outcome(envelope.method, outcome, duration)
        return outcome

    @asynccontextmanager
    async def _open_stream(
        self, envelope: RequestEnvelope
    ) -> AsyncIterator[StreamingChunkIterator]:
        client = self._client
        started = time.perf_counter()
        opened = False
        try:
            async with client.transport.open(client.endpoint, envelope) as response:
                opened = True
                logger.debug(
                    f"Streaming {envelope.method} {envelope.url} "
                    f"(status {response.status})"
                )
                chunks = StreamingChunkIterator(
                    response.iter_chunks(),
                    response.status,
                    response.headers,
                    on_complete=partial(client.record_stream, envelope.method),
                )
                try:
                    yield chunks
                finally:
                    await chunks.aclose()
        except TransportError as e:
            if not opened:
                client.record_stream(
                    envelope.method,
                    StreamResult(error=e),
                    time.perf_counter() - started,
                )
            raise


__all__ = ["ChunkSink", "ResourceRequest"]
