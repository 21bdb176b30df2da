# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Chunk recording for streaming calls.

This module provides the ChunkRecorder dataclass that accumulates the
chunks of one streaming call in receipt order and tracks its activity.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class ChunkRecorder:
    """
    Append-only record of the chunks received by one streaming call.

    Attributes:
        started_at: Timestamp when the stream was opened

    Runtime tracking attributes:
        chunk_count: Number of chunks received
        byte_count: Total bytes received
        last_chunk_at: Timestamp of the last chunk received
    """

    started_at: float = field(default_factory=time.monotonic)

    chunk_count: int = field(default=0, repr=False)
    byte_count: int = field(default=0, repr=False)
    last_chunk_at: float | None = field(default=None, repr=False)
    _chunks: list[bytes] = field(default_factory=list, repr=False)

    def record(self, chunk: bytes) -> None:
        """Append a chunk and update activity tracking."""
        self._chunks.append(chunk)
        self.chunk_count += 1
        self.byte_count += len(chunk)
        self.last_chunk_at = time.monotonic()

    @property
    def chunks(self) -> tuple[bytes, ...]:
        return tuple(self._chunks)

    @property
    def buffer(self) -> bytes:
        """All chunks concatenated in receipt order."""
        return b"".join(self._chunks)

    @property
    def duration_seconds(self) -> float:
        """Time from opening the stream to the last chunk (or now)."""
        end = self.last_chunk_at if self.last_chunk_at is not None else time.monotonic()
        return end - self.started_at


__all__ = ["ChunkRecorder"]
