# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request envelope type.

A RequestEnvelope is built fresh for every call by ResourceRequest and handed
to the transport; it is never reused.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .body import EncodedBody
from .params import ParamTree


@dataclass(frozen=True)
class RequestEnvelope:
    """
    Everything needed to dispatch one HTTP call.

    Attributes:
        method: HTTP verb, upper-case.
        path: Resource path, always starting with ``/``.
        query: Serialized query string without the leading ``?``.
        resource_id: Optional id appended to the path as ``/<id>``.
        params: The parameter tree the query was serialized from.
        body: The encoded body, or None for body-less calls.
        headers: Effective headers (client base overlaid by request headers,
            plus any Content-Type the body requires).
    """

    method: str
    path: str
    query: str = ""
    resource_id: Any = None
    params: ParamTree = None
    body: EncodedBody | None = None
    headers: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def url(self) -> str:
        """Request target: ``path[/id][?query]``."""
        target = self.path
        if self.resource_id is not None and self.resource_id != "":
            target = f"{target}/{self.resource_id}"
        if self.query:
            target = f"{target}?{self.query}"
        return target

    @property
    def content(self) -> bytes | None:
        return self.body.content if self.body is not None else None


__all__ = ["RequestEnvelope"]
