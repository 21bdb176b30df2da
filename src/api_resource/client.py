# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
ResourceClient: the entry point of the library.

A client owns the normalized endpoint, the base header set, the parameter
serializer, the response interpreter and the transport. It hands out
ResourceRequest objects bound to resource paths:

    async with ResourceClient("https://api.example.com") as client:
        client.authorize(token)
        outcome = await client.request("users").show(42)
        error, body, headers, status = outcome.as_tuple()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import TracebackType

from .config import ClientConfig
from .endpoint import EndpointConfig
from .headers import AUTHORIZATION, HeaderSet, bearer, freeze_headers, with_header
from .interpreter import ResponseInterpreter
from .observability.metrics import (
    ClientMetrics,
    get_prometheus_client_metrics,
    outcome_label,
    stream_outcome_label,
)
from .observability.protocols import MetricsRecorderProtocol
from .protocols.transport import TransportProtocol
from .request import ResourceRequest
from .serialization import ParamSerializer
from .streaming.result import StreamResult
from .transport import HttpxTransport
from .types.outcome import ResponseOutcome
from .types.params import ParamMapping

logger = logging.getLogger(__name__)


class ResourceClient:
    """
    Client for one JSON/HTTP REST API host.

    Args:
        host: Host name, optionally prefixed with ``http://`` or
            ``https://`` and optionally suffixed with ``:port``
        port: Explicit port (int or numeric string)
        ssl: TLS hint, used only when ``host`` has no scheme prefix
        config: Client configuration; defaults to ClientConfig()
        transport: Transport to send calls with; defaults to an
            HttpxTransport built from ``config`` and owned by the client
        recorders: Extra metrics recorders notified of every call

    Concurrency:
        Any number of calls may be in flight at once. Each call snapshots
        the base headers when it is built, so ``authorize`` never changes
        a call that has already started.
    """

    def __init__(
        self,
        host: str,
        port: int | str | None = None,
        ssl: bool | None = None,
        *,
        config: ClientConfig | None = None,
        transport: TransportProtocol | None = None,
        recorders: Iterable[MetricsRecorderProtocol] = (),
    ) -> None:
        self.config = config or ClientConfig()
        self.endpoint = EndpointConfig.from_host(host, port, ssl)
        self.serializer = ParamSerializer(
            percent_encode=self.config.percent_encode_params
        )
        self.interpreter = ResponseInterpreter(
            error_body_preview=self.config.error_body_preview
        )
        self._headers: HeaderSet = freeze_headers(self.config.base_headers())

        if transport is None:
            transport = HttpxTransport(
                timeout=self.config.timeout,
                connect_timeout=self.config.connect_timeout,
                follow_redirects=self.config.follow_redirects,
            )
            self._owns_transport = True
        else:
            self._owns_transport = False
        self.transport: TransportProtocol = transport

        self.metrics: ClientMetrics | None = (
            ClientMetrics() if self.config.metrics_enabled else None
        )
        self._recorders: list[MetricsRecorderProtocol] = []
        if self.metrics is not None:
            self._recorders.append(self.metrics)
        if self.config.prometheus_enabled:
            prometheus = get_prometheus_client_metrics()
            if prometheus is not None:
                self._recorders.append(prometheus)
        self._recorders.extend(recorders)

        logger.debug(
            f"ResourceClient for {self.endpoint.base_url} "
            f"({len(self._recorders)} metrics recorders)"
        )

    @property
    def host(self) -> str:
        return self.endpoint.host

    @property
    def port(self) -> int | None:
        return self.endpoint.port

    @property
    def ssl(self) -> bool:
        return self.endpoint.ssl

    @property
    def headers(self) -> HeaderSet:
        """The base header set shared by every request of this client."""
        return self._headers

    def authorize(self, access_token: str) -> None:
        """
        Send ``Authorization: Bearer <access_token>`` on every later call.

        The base header set is replaced, not mutated.
        """
        self._headers = with_header(self._headers, AUTHORIZATION, bearer(access_token))

    def set_header(self, name: str, value: str) -> None:
        """Set one base header for every later call."""
        self._headers = with_header(self._headers, name, value)

    def serialize(self, params: ParamMapping | None) -> str:
        """Serialize a parameter tree the way query strings are built."""
        return self.serializer.serialize(params)

    def request(self, path: str) -> ResourceRequest:
        """Return a ResourceRequest bound to ``path``."""
        return ResourceRequest(self, path)

    # Metrics fan-out

    def record_outcome(
        self, method: str, outcome: ResponseOutcome, duration: float
    ) -> None:
        label = outcome_label(outcome)
        for recorder in self._recorders:
            try:
                recorder.record_outcome(method, label, duration)
            except Exception as e:
                logger.warning(f"Metrics recorder failed: {type(e).__name__}: {e}")

    def record_stream(
        self, method: str, result: StreamResult, duration: float
    ) -> None:
        label = stream_outcome_label(result)
        for recorder in self._recorders:
            try:
                recorder.record_stream(
                    method, label, result.chunk_count, len(result.buffer), duration
                )
            except Exception as e:
                logger.warning(f"Metrics recorder failed: {type(e).__name__}: {e}")

    def record_serialization_error(self, method: str) -> None:
        for recorder in self._recorders:
            try:
                recorder.record_serialization_error(method)
            except Exception as e:
                logger.warning(f"Metrics recorder failed: {type(e).__name__}: {e}")

    # Lifecycle

    async def aclose(self) -> None:
        """Close the transport if the client created it."""
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> ResourceClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"ResourceClient({self.endpoint.base_url!r})"


__all__ = ["ResourceClient"]
