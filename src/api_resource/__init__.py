# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""API Resource - A client library for JSON/HTTP REST APIs.

This library builds per-resource requests against one API host, serializes
nested parameters in bracket notation, negotiates JSON or form request
bodies and classifies every response into a tagged outcome.

Key Features:
    - Host/port/scheme inference from a single host string
    - Bracket-notation query and form serialization with cycle detection
    - CRUD and HTTP verb methods on a per-path request object
    - Responses classified as Success, DomainError, ParseError or
      TransportError, following the ``meta.error`` convention
    - Streaming calls with live chunk delivery and a final buffer
    - Pluggable transport (httpx by default) and metrics recorders

Quick Start:
    >>> from api_resource import ResourceClient, FormBody
    >>>
    >>> async with ResourceClient("https://api.example.com") as client:
    ...     client.authorize("token")
    ...     users = client.request("users")
    ...     outcome = await users.index({"filter": {"active": True}})
    ...     if outcome.ok:
    ...         print(outcome.body)
    ...     error, body, headers, status = outcome.as_tuple()

Main Exports:
    - ResourceClient, ResourceRequest: Client and per-path requests
    - ClientConfig: Configuration options
    - JsonBody, FormBody, RawBody: Request body variants
    - Success, ResponseOutcome: Call outcomes
    - EndpointConfig, ParamSerializer, serialize: Building blocks
    - HttpxTransport, TransportProtocol: Network transport

Version: 1.0.0
"""

__version__ = "1.0.0"

from .client import ResourceClient
from .config import ClientConfig
from .endpoint import EndpointConfig
from .exceptions import (
    APIResourceError,
    ConfigurationError,
    DomainError,
    ParseError,
    ResponseError,
    SerializationError,
    TransportError,
)
from .headers import merge_headers
from .interpreter import ResponseInterpreter
from .observability import ClientMetrics, MetricsRecorderProtocol
from .protocols import (
    ChunkSinkProtocol,
    ResponseStreamProtocol,
    TransportProtocol,
)
from .request import ResourceRequest
from .serialization import ParamSerializer, serialize
from .streaming import StreamingChunkIterator, StreamResult
from .transport import HttpxTransport
from .types import (
    FormBody,
    JsonBody,
    ParamTree,
    RawBody,
    RequestEnvelope,
    ResponseOutcome,
    Success,
)

__all__ = [
    # Exceptions
    "APIResourceError",
    "ChunkSinkProtocol",
    # Configuration
    "ClientConfig",
    "ClientMetrics",
    "ConfigurationError",
    "DomainError",
    "EndpointConfig",
    # Bodies
    "FormBody",
    # Transport
    "HttpxTransport",
    "JsonBody",
    "MetricsRecorderProtocol",
    "ParamSerializer",
    "ParamTree",
    "ParseError",
    "RawBody",
    "RequestEnvelope",
    # Client
    "ResourceClient",
    "ResourceRequest",
    "ResponseError",
    "ResponseInterpreter",
    # Outcomes
    "ResponseOutcome",
    "ResponseStreamProtocol",
    "SerializationError",
    "StreamResult",
    "StreamingChunkIterator",
    "Success",
    "TransportError",
    "TransportProtocol",
    "merge_headers",
    "serialize",
]
