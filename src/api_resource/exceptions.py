# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the api-resource library.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from APIResourceError, making it easy to catch
all client-related exceptions with a single except clause.

The three response-level errors (TransportError, ParseError, DomainError)
double as the failure variants of a ResponseOutcome: a request returns
them as values, and ``outcome.unwrap()`` raises them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

SERVER_UNAVAILABLE = "Server unavailable"
"""Message carried by every TransportError, whatever the underlying failure."""

UNEXPECTED_RESPONSE = "Unexpected server response:"
"""Prefix of a ParseError message; the raw body follows on the next line."""


class APIResourceError(Exception):
    """Base exception for all api-resource errors.

    Example:
        try:
            outcome = await client.request("users").show(42)
            user = outcome.unwrap()
        except APIResourceError as e:
            logger.error(f"API call failed: {e}")
    """

    pass


class ConfigurationError(APIResourceError, ValueError):
    """Raised when a ClientConfig value is invalid.

    Subclasses ValueError so existing ``except ValueError`` handlers around
    configuration code keep working.

    Example:
        try:
            config = ClientConfig(timeout=-1)
        except ConfigurationError as e:
            logger.error(f"Invalid configuration: {e}")
            raise SystemExit(1)
    """

    pass


class SerializationError(APIResourceError):
    """Raised when a parameter tree cannot be serialized.

    This happens when the tree contains a cycle (a mapping or sequence that
    contains itself, directly or through descendants), when the top level is
    not a mapping, or when a leaf is not a supported scalar.

    Attributes:
        key_path: The key path (outermost first) at which serialization
            failed. Empty when the failure is at the top level.

    Example:
        params = {"filter": {}}
        params["filter"]["self"] = params
        try:
            serialize(params)
        except SerializationError as e:
            print(e.key_path)  # ('filter', 'self')
    """

    def __init__(self, message: str, key_path: tuple[str, ...] = ()):
        super().__init__(message)
        self.key_path = key_path


class ResponseError(APIResourceError):
    """Base class for errors produced by a completed (or failed) HTTP call.

    Carries the same four pieces of information a call result always has, so
    callers can treat every failure uniformly.

    Attributes:
        status: HTTP status code, or 0 when no response was obtained.
        headers: Response headers (lower-cased names), empty when no response
            was obtained.
        body: The response body as far as it was interpreted: parsed JSON,
            raw bytes, or an empty dict placeholder.
    """

    def __init__(
        self,
        message: str,
        status: int = 0,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.status = status
        self.headers: Mapping[str, str] = headers if headers is not None else {}
        self.body: Any = body if body is not None else {}

    ok = False

    @property
    def message(self) -> str:
        return str(self)

    @property
    def error(self) -> ResponseError:
        return self

    def as_tuple(self) -> tuple[ResponseError, Any, Mapping[str, str], int]:
        """Return the ``(error, body, headers, status)`` call result shape."""
        return (self, self.body, self.headers, self.status)

    def unwrap(self) -> Any:
        """Raise this error; mirrors ``Success.unwrap()``."""
        raise self


class TransportError(ResponseError):
    """Raised when the network exchange could not be completed at all.

    DNS failures, refused connections, resets and timeouts all map to the
    same message; the underlying exception is available as ``__cause__``.

    Example:
        outcome = await request.index()
        if isinstance(outcome, TransportError):
            await asyncio.sleep(1.0)
    """

    def __init__(self, message: str = SERVER_UNAVAILABLE):
        super().__init__(message, status=0, headers={}, body={})


class ParseError(ResponseError):
    """Raised when a response claimed to be JSON but could not be parsed.

    Attributes:
        raw_body: The undecodable response text.
    """

    def __init__(
        self,
        raw_body: str,
        status: int = 0,
        headers: Mapping[str, str] | None = None,
    ):
        super().__init__(
            f"{UNEXPECTED_RESPONSE}\n{raw_body}",
            status=status,
            headers=headers,
            body={},
        )
        self.raw_body = raw_body


class DomainError(ResponseError):
    """Raised when the server signalled an application-level failure.

    Produced either from a JSON ``{"meta": {"error": {...}}}`` document
    (whatever the HTTP status) or from a non-2xx response whose body is not
    JSON, in which case the message is the body text.

    Attributes:
        details: ``meta.error.details`` when the server supplied it.

    Example:
        outcome = await client.request("users").create({}, JsonBody({}))
        if isinstance(outcome, DomainError):
            for field, problem in (outcome.details or {}).items():
                print(field, problem)
    """

    def __init__(
        self,
        message: str,
        status: int = 0,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        details: Any = None,
    ):
        super().__init__(message, status=status, headers=headers, body=body)
        self.details = details


__all__ = [
    "SERVER_UNAVAILABLE",
    "UNEXPECTED_RESPONSE",
    "APIResourceError",
    "ConfigurationError",
    "DomainError",
    "ParseError",
    "ResponseError",
    "SerializationError",
    "TransportError",
]
