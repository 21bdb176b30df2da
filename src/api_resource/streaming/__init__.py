# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Streaming support.

Streaming calls bypass response interpretation: raw body chunks are handed
to the caller as they arrive and also accumulated into one final buffer.

Classes:
    ChunkRecorder: Append-only record of the chunks of one stream.
    StreamingChunkIterator: Async iterator that yields and records chunks.
    StreamResult: Final buffer, status, headers and transport error of a
        finished stream.
"""

from .iterator import StreamCompleteCallback, StreamingChunkIterator
from .recorder import ChunkRecorder
from .result import StreamResult

__all__ = [
    "ChunkRecorder",
    "StreamCompleteCallback",
    "StreamResult",
    "StreamingChunkIterator",
]
