# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Result of a streaming call."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from ..exceptions import TransportError


@dataclass(frozen=True)
class StreamResult:
    """
    What a streaming call delivers once the stream ends.

    Streaming calls skip response interpretation: the status and headers are
    reported as received and ``buffer`` holds every chunk in receipt order.
    When the connection could not be opened, ``error`` is set and
    ``buffer`` is empty; when it broke mid-body, ``buffer`` holds the chunks
    received before the failure. ``aborted`` is set when the consumer
    stopped reading before the body ended (an early break, or a chunk sink
    that raised).
    """

    buffer: bytes = b""
    status: int = 0
    headers: Mapping[str, str] = field(default_factory=dict)
    chunk_count: int = 0
    error: TransportError | None = None
    aborted: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_tuple(self) -> tuple[TransportError | None, bytes]:
        """Return the ``(error, full_buffer)`` completion shape."""
        return (self.error, self.buffer)

    def unwrap(self) -> bytes:
        """Return the buffer, raising the transport error if there was one."""
        if self.error is not None:
            raise self.error
        return self.buffer


__all__ = ["StreamResult"]
