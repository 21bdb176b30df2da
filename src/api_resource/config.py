# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client Configuration for api-resource

This module provides the configuration class for ResourceClient, covering
transport timeouts, default headers, parameter encoding and metrics.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from . import __version__
from .exceptions import ConfigurationError

DEFAULT_USER_AGENT = f"api-resource/{__version__}"


@dataclass
class ClientConfig:
    """
    Configuration for a ResourceClient.

    The defaults reproduce the plain client behaviour: no timeout, values
    written into query strings unencoded, JSON request bodies.
    """

    # === Transport ===

    timeout: float | None = None
    """Total per-call timeout in seconds. None disables the timeout."""

    connect_timeout: float | None = None
    """Connect timeout in seconds; falls back to ``timeout`` when None."""

    follow_redirects: bool = False
    """Follow 3xx redirects inside the transport."""

    # === Headers ===

    default_headers: Mapping[str, str] = field(default_factory=dict)
    """Headers seeded into the client's base header set."""

    user_agent: str | None = DEFAULT_USER_AGENT
    """User-Agent header value. None leaves the header unset."""

    # === Encoding ===

    percent_encode_params: bool = False
    """Percent-encode serialized keys and values.

    Off by default: values containing ``&`` or ``=`` will then corrupt the
    query string, which matches the wire format servers of this API style
    expect.
    """

    # === Diagnostics ===

    error_body_preview: int = 1000
    """Maximum number of body characters quoted in log messages."""

    # === Metrics and Monitoring ===

    metrics_enabled: bool = True
    """Record per-client counters in ClientMetrics."""

    prometheus_enabled: bool = False
    """Also export call metrics to prometheus_client collectors."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.connect_timeout is not None and self.connect_timeout <= 0:
            raise ConfigurationError("connect_timeout must be positive")
        if self.error_body_preview < 0:
            raise ConfigurationError("error_body_preview must be non-negative")
        for name, value in self.default_headers.items():
            if not isinstance(name, str) or not isinstance(value, str):
                raise ConfigurationError(
                    f"default_headers must map str to str, got {name!r}: {value!r}"
                )
        if self.user_agent is not None and not self.user_agent:
            raise ConfigurationError("user_agent must be non-empty or None")

    def base_headers(self) -> dict[str, str]:
        """Headers a new client starts with."""
        headers: dict[str, str] = {}
        if self.user_agent is not None:
            headers["User-Agent"] = self.user_agent
        headers.update(self.default_headers)
        return headers


__all__ = [
    "DEFAULT_USER_AGENT",
    "ClientConfig",
]
