"""
Unit tests for HttpxTransport.

Uses ``httpx.MockTransport`` so no sockets are opened.
"""

import json

import httpx
import pytest

from api_resource.client import ResourceClient
from api_resource.endpoint import EndpointConfig
from api_resource.exceptions import DomainError, TransportError
from api_resource.transport import HttpxTransport
from api_resource.types.body import JsonBody
from api_resource.types.envelope import RequestEnvelope
from api_resource.types.outcome import Success


def make_client(handler, host="https://api.example.com", **kwargs):
    transport = HttpxTransport(transport=httpx.MockTransport(handler))
    return ResourceClient(host, transport=transport, **kwargs)


class TestHttpxTransport:
    """Tests for request construction and response adaptation."""

    @pytest.mark.asyncio
    async def test_sends_method_url_headers_and_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            seen["content_type"] = request.headers.get("content-type")
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"id": 9})

        client = make_client(handler)
        client.authorize("tok")
        outcome = await client.request("users").create({"v": 2}, JsonBody({"n": 1}))

        assert isinstance(outcome, Success)
        assert outcome.body == {"id": 9}
        assert outcome.status == 201
        assert seen == {
            "method": "POST",
            "url": "https://api.example.com/users?v=2",
            "auth": "Bearer tok",
            "content_type": "application/json; charset=utf-8",
            "body": {"n": 1},
        }
        await client.aclose()

    @pytest.mark.asyncio
    async def test_non_default_port_in_url(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            return httpx.Response(200, text="ok")

        client = make_client(handler, host="localhost:8080")
        outcome = await client.request("ping").index()
        assert seen["url"] == "http://localhost:8080/ping"
        assert outcome.body == b"ok"

    @pytest.mark.asyncio
    async def test_headers_lower_cased(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers={"X-Request-Id": "r1"}, json={})

        outcome = await make_client(handler).request("users").index()
        assert outcome.headers["x-request-id"] == "r1"

    @pytest.mark.asyncio
    async def test_non_json_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="Service Unavailable")

        outcome = await make_client(handler).request("users").index()
        assert isinstance(outcome, DomainError)
        assert outcome.message == "Service Unavailable"

    @pytest.mark.asyncio
    async def test_connect_error_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        outcome = await make_client(handler).request("users").index()
        assert isinstance(outcome, TransportError)
        assert outcome.as_tuple() == (outcome, {}, {}, 0)
        assert isinstance(outcome.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        outcome = await make_client(handler).request("users").index()
        assert isinstance(outcome, TransportError)
        assert outcome.message == "Server unavailable"

    @pytest.mark.asyncio
    async def test_missing_port_is_transport_error(self):
        transport = HttpxTransport(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )
        endpoint = EndpointConfig("api.example.com", None, False)
        with pytest.raises(TransportError):
            async with transport.open(endpoint, RequestEnvelope("GET", "/")):
                pass

    @pytest.mark.asyncio
    async def test_stream_chunks(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"streamed body")

        received = []
        result = await make_client(handler).request("events").stream(
            "GET", None, received.append
        )
        assert b"".join(received) == b"streamed body"
        assert result.unwrap() == b"streamed body"


class BrokenBodyStream(httpx.AsyncByteStream):
    """Response body that fails after its first chunk."""

    async def __aiter__(self):
        yield b"partial"
        raise httpx.ReadError("connection reset")


class TestRequestErrors:
    """Every httpx request failure becomes a TransportError outcome."""

    @pytest.mark.asyncio
    async def test_undecodable_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                headers={
                    "content-encoding": "gzip",
                    "content-type": "application/json",
                },
                content=b"not gzip at all",
            )

        outcome = await make_client(handler).request("users").index()
        assert isinstance(outcome, TransportError)
        assert outcome.as_tuple() == (outcome, {}, {}, 0)
        assert isinstance(outcome.__cause__, httpx.DecodingError)

    @pytest.mark.asyncio
    async def test_redirect_loop(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"location": "/users"})

        transport = HttpxTransport(
            transport=httpx.MockTransport(handler), follow_redirects=True
        )
        client = ResourceClient("https://api.example.com", transport=transport)
        outcome = await client.request("users").index()
        assert isinstance(outcome, TransportError)
        assert isinstance(outcome.__cause__, httpx.TooManyRedirects)

    @pytest.mark.asyncio
    async def test_read_error_mid_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, stream=BrokenBodyStream())

        outcome = await make_client(handler).request("users").index()
        assert isinstance(outcome, TransportError)
        assert isinstance(outcome.__cause__, httpx.ReadError)

    @pytest.mark.asyncio
    async def test_read_error_mid_stream_keeps_partial_buffer(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, stream=BrokenBodyStream())

        client = make_client(handler)
        received = []
        result = await client.request("events").stream("GET", None, received.append)

        assert received == [b"partial"]
        assert result.buffer == b"partial"
        assert isinstance(result.error, TransportError)
        assert client.metrics.streams_failed == 1


class TestClientOwnership:
    """Tests for httpx client lifecycle."""

    @pytest.mark.asyncio
    async def test_external_client_not_closed(self):
        http = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )
        transport = HttpxTransport(client=http)
        await transport.aclose()
        assert http.is_closed is False
        await http.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        transport = HttpxTransport(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )
        http = transport._get_client()
        await transport.aclose()
        assert http.is_closed is True

    def test_timeouts(self):
        transport = HttpxTransport(timeout=5.0, connect_timeout=1.0)
        timeout = transport._get_client().timeout
        assert timeout.connect == 1.0
        assert timeout.read == 5.0
