# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Recording async iterator for streaming responses.

This module provides the StreamingChunkIterator class, the pull-based form
of a streaming call. It yields raw body chunks unchanged while recording
them, so the full buffer is still available once iteration ends:

    async with request.iter_stream("GET") as chunks:
        async for chunk in chunks:
            handle(chunk)
    full = chunks.buffer

The wrapper intercepts iteration to:
1. Record every chunk (count, bytes, activity time)
2. Report completion exactly once, on exhaustion or on a transport error
3. Support aclose() for explicit cleanup after an early break, reporting
   the stream as aborted
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, AsyncIterator, Callable, Mapping

from ..exceptions import TransportError
from .recorder import ChunkRecorder
from .result import StreamResult

logger = logging.getLogger(__name__)

StreamCompleteCallback = Callable[[StreamResult, float], None]
"""Called with the final result and the stream duration in seconds."""


class StreamingChunkIterator(AsyncIterator[bytes]):
    """
    Async iterator over the chunks of one streaming response.

    The wrapper is transparent to consumers: it yields the same chunks as
    the underlying iterator, in the same order.
    """

    __slots__ = (
        "__weakref__",
        "_aborted",
        "_closed",
        "_completed",
        "_error",
        "_headers",
        "_inner",
        "_on_complete",
        "_recorder",
        "_status",
    )

    def __init__(
        self,
        inner: AsyncIterator[bytes],
        status: int,
        headers: Mapping[str, str],
        on_complete: StreamCompleteCallback | None = None,
    ) -> None:
        """
        Initialize the recording iterator.

        Args:
            inner: The transport's chunk iterator
            status: HTTP status of the response
            headers: Response headers
            on_complete: Optional callback invoked once with the final result
        """
        self._inner = inner
        self._status = status
        self._headers = headers
        self._on_complete = on_complete
        self._recorder = ChunkRecorder()
        self._error: TransportError | None = None
        self._completed = False
        self._closed = False
        self._aborted = False

    @property
    def status(self) -> int:
        return self._status

    @property
    def headers(self) -> Mapping[str, str]:
        return self._headers

    @property
    def recorder(self) -> ChunkRecorder:
        return self._recorder

    @property
    def buffer(self) -> bytes:
        """Concatenation of every chunk yielded so far."""
        return self._recorder.buffer

    def result(self) -> StreamResult:
        """Snapshot of the stream as a StreamResult."""
        return StreamResult(
            buffer=self._recorder.buffer,
            status=self._status,
            headers=self._headers,
            chunk_count=self._recorder.chunk_count,
            error=self._error,
            aborted=self._aborted,
        )

    def __aiter__(self) -> StreamingChunkIterator:
        return self

    async def __anext__(self) -> bytes:
        """
        Get the next chunk, recording it.

        Raises:
            StopAsyncIteration: When the body is exhausted (after completion
                is reported)
            TransportError: When the connection fails mid-body (after
                completion is reported)
        """
        if self._closed:
            raise StopAsyncIteration
        try:
            chunk = await self._inner.__anext__()
        except StopAsyncIteration:
            self._complete()
            raise
        except TransportError as e:
            self._error = e
            self._complete()
            raise
        self._recorder.record(chunk)
        return chunk

    def _complete(self) -> None:
        if self._completed:
            return
        self._completed = True

        logger.debug(
            f"Stream finished: {self._recorder.chunk_count} chunks, "
            f"{self._recorder.byte_count} bytes"
            + (f", error: {self._error}" if self._error else "")
            + (", aborted" if self._aborted else "")
        )
        if self._on_complete is not None:
            try:
                self._on_complete(self.result(), self._recorder.duration_seconds)
            except Exception as e:
                logger.warning(
                    f"Stream completion callback failed: {type(e).__name__}: {e}"
                )

    async def aclose(self) -> None:
        """
        Stop iteration and close the underlying iterator.

        Closing before the body is exhausted marks the stream as aborted.
        """
        if self._closed:
            return
        self._closed = True
        if not self._completed:
            self._aborted = True
        if isinstance(self._inner, AsyncGenerator):
            await self._inner.aclose()
        self._complete()


__all__ = ["StreamCompleteCallback", "StreamingChunkIterator"]
