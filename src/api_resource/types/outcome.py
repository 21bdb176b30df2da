# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Call outcome types.

Every non-streaming call produces exactly one ResponseOutcome:

* ``Success`` - a dataclass holding status, headers and body
* ``DomainError`` / ``ParseError`` / ``TransportError`` - exception
  instances from ``api_resource.exceptions``

All variants share ``ok``, ``as_tuple()`` and ``unwrap()``, so callers can
either branch on the variant or raise on failure:

    outcome = await request.show(42)
    error, body, headers, status = outcome.as_tuple()
    user = outcome.unwrap()  # raises the error variants
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from ..exceptions import DomainError, ParseError, TransportError


@dataclass(frozen=True)
class Success:
    """
    A completed call the server did not flag as an error.

    Attributes:
        status: HTTP status code.
        headers: Response headers with lower-cased names.
        body: Parsed JSON when the response declared ``application/json``,
            raw bytes otherwise.
    """

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None

    ok = True

    @property
    def error(self) -> None:
        return None

    def as_tuple(self) -> tuple[None, Any, Mapping[str, str], int]:
        """Return the ``(error, body, headers, status)`` call result shape."""
        return (None, self.body, self.headers, self.status)

    def unwrap(self) -> Any:
        """Return the body."""
        return self.body


ResponseOutcome = Union[Success, DomainError, ParseError, TransportError]
"""Tagged union of the four possible results of a non-streaming call."""


__all__ = ["ResponseOutcome", "Success"]
