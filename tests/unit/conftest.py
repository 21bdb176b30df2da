"""
Shared fixtures for api-resource unit tests.

Provides an in-memory transport that records every envelope it is handed
and answers with scripted responses, so request building and response
interpretation can be tested without a network.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any

import pytest

from api_resource.client import ResourceClient
from api_resource.endpoint import EndpointConfig
from api_resource.exceptions import TransportError
from api_resource.types.envelope import RequestEnvelope


class FakeResponseStream:
    """Scripted response: fixed status, headers and body chunks."""

    def __init__(
        self,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
        chunks: Sequence[bytes] = (),
        fail_after: int | None = None,
    ) -> None:
        self._status = status
        self._headers = {k.lower(): v for k, v in (headers or {}).items()}
        self._chunks = list(chunks)
        self._fail_after = fail_after

    @property
    def status(self) -> int:
        return self._status

    @property
    def headers(self) -> Mapping[str, str]:
        return self._headers

    async def iter_chunks(self) -> AsyncIterator[bytes]:
        for index, chunk in enumerate(self._chunks):
            if self._fail_after is not None and index >= self._fail_after:
                raise TransportError()
            yield chunk
        if self._fail_after is not None and self._fail_after >= len(self._chunks):
            raise TransportError()


Responder = Callable[[RequestEnvelope], Any]


class FakeTransport:
    """TransportProtocol implementation backed by a responder function."""

    def __init__(self, responder: Responder) -> None:
        self.responder = responder
        self.sent: list[tuple[EndpointConfig, RequestEnvelope]] = []
        self.closed = False

    @property
    def last_envelope(self) -> RequestEnvelope:
        return self.sent[-1][1]

    @asynccontextmanager
    async def open(
        self, endpoint: EndpointConfig, envelope: RequestEnvelope
    ) -> AsyncIterator[FakeResponseStream]:
        self.sent.append((endpoint, envelope))
        response = self.responder(envelope)
        if isinstance(response, BaseException):
            raise response
        yield response

    async def aclose(self) -> None:
        self.closed = True


def json_response(
    document: Any, status: int = 200, headers: Mapping[str, str] | None = None
) -> FakeResponseStream:
    merged = {"Content-Type": "application/json; charset=utf-8", **(headers or {})}
    return FakeResponseStream(
        status=status,
        headers=merged,
        chunks=[json.dumps(document).encode("utf-8")],
    )


@pytest.fixture
def make_response() -> Callable[..., FakeResponseStream]:
    """Factory for scripted responses."""
    return FakeResponseStream


@pytest.fixture
def make_json_response() -> Callable[..., FakeResponseStream]:
    """Factory for JSON responses."""
    return json_response


@pytest.fixture
def make_transport() -> Callable[[Responder], FakeTransport]:
    """Factory for fake transports with a custom responder."""
    return FakeTransport


@pytest.fixture
def transport() -> FakeTransport:
    """Fake transport answering every call with ``{"data": "ok"}``."""
    return FakeTransport(lambda envelope: json_response({"data": "ok"}))


@pytest.fixture
def client(transport: FakeTransport) -> ResourceClient:
    """Client for api.example.com using the fake transport."""
    return ResourceClient("https://api.example.com", transport=transport)
