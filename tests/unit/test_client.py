"""
Unit tests for ResourceClient.

Tests cover:
- Endpoint normalization through the constructor
- Base headers and authorize()
- Metrics recorder fan-out
- Transport ownership and the async context manager
"""

from unittest.mock import AsyncMock, Mock

import pytest

from api_resource.client import ResourceClient
from api_resource.config import DEFAULT_USER_AGENT, ClientConfig
from api_resource.observability.constants import (
    OUTCOME_SUCCESS,
    OUTCOME_TRANSPORT_ERROR,
)
from api_resource.observability.protocols import MetricsRecorderProtocol
from api_resource.request import ResourceRequest
from api_resource.transport import HttpxTransport


class TestConstruction:
    """Tests for client construction."""

    def test_endpoint_from_host(self, transport):
        client = ResourceClient("https://api.example.com", transport=transport)
        assert client.host == "api.example.com"
        assert client.port == 443
        assert client.ssl is True

    def test_port_and_ssl_hint(self, transport):
        client = ResourceClient("localhost", "8443", True, transport=transport)
        assert (client.host, client.port, client.ssl) == ("localhost", 8443, True)

    def test_default_transport_is_httpx(self):
        client = ResourceClient("api.example.com")
        assert isinstance(client.transport, HttpxTransport)

    def test_default_headers(self, client):
        assert dict(client.headers) == {"User-Agent": DEFAULT_USER_AGENT}

    def test_config_headers(self, transport):
        config = ClientConfig(user_agent=None, default_headers={"Accept": "a"})
        client = ResourceClient("h", transport=transport, config=config)
        assert dict(client.headers) == {"Accept": "a"}

    def test_request_returns_resource_request(self, client):
        request = client.request("users")
        assert isinstance(request, ResourceRequest)
        assert request.client is client

    def test_repr(self, client):
        assert repr(client) == "ResourceClient('https://api.example.com:443')"


class TestAuthorize:
    """Tests for authorize() and set_header()."""

    def test_authorize_sets_bearer(self, client):
        client.authorize("abc")
        assert client.headers["Authorization"] == "Bearer abc"

    def test_authorize_replaces_previous_token(self, client):
        client.authorize("one")
        client.authorize("two")
        assert client.headers["Authorization"] == "Bearer two"

    def test_authorize_replaces_header_set(self, client):
        """The old header set is not mutated."""
        before = client.headers
        client.authorize("abc")
        assert "Authorization" not in before
        assert client.headers is not before

    def test_set_header(self, client):
        client.set_header("X-Trace", "1")
        assert client.headers["X-Trace"] == "1"


class TestSerialize:
    """Tests for the client-level serialize helper."""

    def test_serialize(self, client):
        assert client.serialize({"a": [1, 2]}) == "a[]=1&a[]=2"

    def test_percent_encoding_from_config(self, transport):
        config = ClientConfig(percent_encode_params=True)
        client = ResourceClient("h", transport=transport, config=config)
        assert client.serialize({"q": "a b"}) == "q=a%20b"


class TestMetrics:
    """Tests for recorder fan-out."""

    @pytest.mark.asyncio
    async def test_outcome_recorded(self, client):
        await client.request("users").index()
        assert client.metrics.requests_completed == 1
        assert client.metrics.successes == 1

    def test_metrics_disabled(self, transport):
        client = ResourceClient(
            "h", transport=transport, config=ClientConfig(metrics_enabled=False)
        )
        assert client.metrics is None

    @pytest.mark.asyncio
    async def test_extra_recorder_notified(self, transport):
        recorder = Mock(spec=MetricsRecorderProtocol)
        client = ResourceClient("h", transport=transport, recorders=[recorder])
        await client.request("users").index()
        recorder.record_outcome.assert_called_once()
        method, outcome, duration = recorder.record_outcome.call_args.args
        assert (method, outcome) == ("GET", OUTCOME_SUCCESS)
        assert duration >= 0

    @pytest.mark.asyncio
    async def test_failing_recorder_does_not_break_call(self, transport):
        recorder = Mock(spec=MetricsRecorderProtocol)
        recorder.record_outcome.side_effect = RuntimeError("boom")
        client = ResourceClient("h", transport=transport, recorders=[recorder])
        outcome = await client.request("users").index()
        assert outcome.ok
        assert client.metrics.successes == 1

    @pytest.mark.asyncio
    async def test_stream_failure_label(self, make_transport):
        from api_resource.exceptions import TransportError

        recorder = Mock(spec=MetricsRecorderProtocol)
        client = ResourceClient(
            "h",
            transport=make_transport(lambda envelope: TransportError()),
            recorders=[recorder],
        )
        await client.request("events").stream("GET")
        method, outcome, chunks, size, _ = recorder.record_stream.call_args.args
        assert (method, outcome, chunks, size) == ("GET", OUTCOME_TRANSPORT_ERROR, 0, 0)


class TestLifecycle:
    """Tests for transport ownership."""

    @pytest.mark.asyncio
    async def test_injected_transport_not_closed(self, transport):
        async with ResourceClient("h", transport=transport):
            pass
        assert transport.closed is False

    @pytest.mark.asyncio
    async def test_owned_transport_closed(self):
        client = ResourceClient("h")
        client.transport.aclose = AsyncMock()
        async with client:
            pass
        client.transport.aclose.assert_awaited_once()
