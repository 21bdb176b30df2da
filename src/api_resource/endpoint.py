# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Endpoint normalization.

Turns the host string a caller hands to ResourceClient (optionally prefixed
with ``http://`` or ``https://``, optionally carrying a ``host:port``
suffix) plus explicit port and ssl arguments into one immutable
EndpointConfig.

Resolution order:
    1. ``https://`` prefix: ssl on, port defaults to 443
    2. ``http://`` prefix: ssl off, port defaults to 80
    3. no prefix: port defaults to 80, ssl follows the caller's hint
    4. a resolved port of 443 switches ssl on
    5. an embedded ``host:port`` suffix replaces the port last, so it never
       re-triggers (or undoes) step 4

Ports are parsed leniently: leading digits of a string are used
(``"8080abc"`` is 8080) and a zero or unparseable explicit port falls back
to the default. An unparseable embedded port leaves ``port`` as None; the
transport reports such an endpoint as unavailable.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

HTTPS_PREFIX = "https://"
HTTP_PREFIX = "http://"
HTTP_DEFAULT_PORT = 80
HTTPS_DEFAULT_PORT = 443

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_port(value: object) -> int | None:
    """Parse a port the lenient way; return None when nothing parses."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


@dataclass(frozen=True)
class EndpointConfig:
    """
    Canonical connection target of a client.

    Attributes:
        host: Host name or address, without scheme or port.
        port: TCP port, or None when an embedded port could not be parsed.
        ssl: Whether to connect over TLS.
    """

    host: str
    port: int | None
    ssl: bool

    @classmethod
    def from_host(
        cls,
        host: str,
        port: int | str | None = None,
        ssl: bool | None = None,
    ) -> EndpointConfig:
        """Normalize a user-supplied host, port and ssl hint."""
        explicit_port = parse_port(port)

        if host.startswith(HTTPS_PREFIX):
            host = host[len(HTTPS_PREFIX) :]
            resolved_port = explicit_port or HTTPS_DEFAULT_PORT
            use_ssl = True
        elif host.startswith(HTTP_PREFIX):
            host = host[len(HTTP_PREFIX) :]
            resolved_port = explicit_port or HTTP_DEFAULT_PORT
            use_ssl = False
        else:
            resolved_port = explicit_port or HTTP_DEFAULT_PORT
            use_ssl = bool(ssl)

        if resolved_port == HTTPS_DEFAULT_PORT:
            use_ssl = True

        port_out: int | None = resolved_port
        if ":" in host:
            host, _, embedded = host.partition(":")
            port_out = parse_port(embedded)
            if port_out is None:
                logger.warning(f"Unparseable port {embedded!r} in host string")

        return cls(host=host, port=port_out, ssl=use_ssl)

    @property
    def scheme(self) -> str:
        return "https" if self.ssl else "http"

    @property
    def base_url(self) -> str:
        """``scheme://host:port`` without a trailing slash."""
        if self.port is None:
            return f"{self.scheme}://{self.host}"
        return f"{self.scheme}://{self.host}:{self.port}"


__all__ = [
    "HTTPS_DEFAULT_PORT",
    "HTTP_DEFAULT_PORT",
    "EndpointConfig",
    "parse_port",
]
