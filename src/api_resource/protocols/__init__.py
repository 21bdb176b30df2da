# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for api-resource components.

This module provides Protocol classes that define the interfaces for
pluggable components of the client.

Available protocols:
- TransportProtocol: Interface for the component that performs HTTP calls
- ResponseStreamProtocol: Interface for an unread HTTP response
- ChunkSinkProtocol: Interface for consumers of streamed body chunks
"""

from .streaming import ChunkSinkProtocol
from .transport import ResponseStreamProtocol, TransportProtocol

__all__ = [
    "ChunkSinkProtocol",
    "ResponseStreamProtocol",
    "TransportProtocol",
]
