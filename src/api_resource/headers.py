# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Immutable header sets.

A client owns a base header set and every request may carry an overlay set.
Both are read-only mappings; changing headers means building a new mapping,
so an in-flight call keeps the snapshot it started with.

Header names compare case-insensitively when merging: an overlay entry
replaces any base entry of the same name, and its spelling is kept.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

HeaderSet = Mapping[str, str]

AUTHORIZATION = "Authorization"
CONTENT_TYPE = "Content-Type"

EMPTY_HEADERS: HeaderSet = MappingProxyType({})


def freeze_headers(headers: Mapping[str, str] | None) -> HeaderSet:
    """Return a read-only copy of ``headers``."""
    if not headers:
        return EMPTY_HEADERS
    return MappingProxyType(dict(headers))


def merge_headers(base: HeaderSet, *overlays: HeaderSet | None) -> HeaderSet:
    """
    Overlay header sets onto ``base``; later sets win on name collision.

    Example:
        >>> dict(merge_headers({"Accept": "a"}, {"accept": "b", "X-Id": "1"}))
        {'accept': 'b', 'X-Id': '1'}
    """
    merged: dict[str, str] = dict(base)
    for overlay in overlays:
        if not overlay:
            continue
        for name, value in overlay.items():
            lowered = name.lower()
            for existing in [k for k in merged if k.lower() == lowered]:
                del merged[existing]
            merged[name] = value
    return MappingProxyType(merged)


def with_header(headers: HeaderSet, name: str, value: str) -> HeaderSet:
    """Return a new header set with one header set or replaced."""
    return merge_headers(headers, {name: value})


def bearer(token: str) -> str:
    return f"Bearer {token}"


def redact(headers: HeaderSet) -> dict[str, str]:
    """Copy of ``headers`` safe for log output."""
    return {
        name: ("<redacted>" if name.lower() == AUTHORIZATION.lower() else value)
        for name, value in headers.items()
    }


__all__ = [
    "AUTHORIZATION",
    "CONTENT_TYPE",
    "EMPTY_HEADERS",
    "HeaderSet",
    "bearer",
    "freeze_headers",
    "merge_headers",
    "redact",
    "with_header",
]
