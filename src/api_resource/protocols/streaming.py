# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for streaming chunk consumers."""

from collections.abc import Awaitable
from typing import Protocol, runtime_checkable


@runtime_checkable
class ChunkSinkProtocol(Protocol):
    """
    Receives raw body chunks of a streaming call as they arrive.

    A sink may be a plain function or a coroutine function; the stream
    awaits the result when it is awaitable, so a slow async sink delays the
    next chunk.
    """

    def __call__(self, chunk: bytes) -> Awaitable[None] | None:
        """Consume one chunk."""
        ...
