# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Bracket-notation parameter serialization.

Converts a nested parameter tree into the ``key=value&...`` form used both
for query strings and for form-encoded bodies:

    >>> serialize({"a": {"b": 1, "c": [2, 3]}})
    'a[b]=1&a[c][]=2&a[c][]=3'

Rules:
    * mappings extend the key path: ``outer[inner][leaf]=v``
    * sequences repeat the key with an array marker: ``tags[]=x&tags[]=y``;
      a mapping inside a sequence continues after the marker
      (``items[][id]=1``)
    * dates render as ``YEAR-MONTH-DAY`` with no zero padding
    * booleans render as ``true``/``false``, None as an empty value
    * values are not percent-encoded unless the serializer is built with
      ``percent_encode=True``
    * empty mappings and sequences contribute nothing

Key order follows mapping insertion order. Trees that contain themselves
raise SerializationError instead of recursing forever.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from datetime import date
from typing import cast
from urllib.parse import quote

from .exceptions import SerializationError
from .types.params import NodeKind, ParamMapping, classify

# Path segment that renders as the "[]" array marker
_ARRAY_MARKER = ""


def format_date(value: date) -> str:
    """Format a date as ``YEAR-MONTH-DAY``, month 1-based, unpadded."""
    return f"{value.year}-{value.month}-{value.day}"


def format_scalar(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return format_date(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def format_key(path: Sequence[str]) -> str:
    """Render a key path: first segment bare, the rest wrapped in brackets."""
    head, *rest = path
    return head + "".join(f"[{segment}]" for segment in rest)


class ParamSerializer:
    """
    Serializes parameter trees into bracket-notation strings.

    Instances are stateless apart from the encoding flag and safe to share
    between concurrent calls.
    """

    def __init__(self, percent_encode: bool = False) -> None:
        self.percent_encode = percent_encode

    def __call__(self, tree: ParamMapping | None) -> str:
        return self.serialize(tree)

    def serialize(self, tree: ParamMapping | None) -> str:
        """
        Serialize a parameter tree.

        Args:
            tree: Mapping of top-level keys to parameter trees. None and an
                empty mapping both serialize to an empty string.

        Returns:
            The ``&``-joined fragments.

        Raises:
            SerializationError: If the tree is cyclic or nested too deeply,
                the top level is not a mapping, or a leaf is of an
                unsupported type.
        """
        if tree is None:
            return ""
        if classify(tree) is not NodeKind.MAPPING:
            raise SerializationError(
                f"Parameters must be a mapping, got {type(tree).__name__}"
            )

        fragments: list[str] = []
        try:
            self._walk(tree, [], fragments, set())
        except RecursionError as e:
            raise SerializationError("Parameter tree is nested too deeply") from e
        return "&".join(fragments)

    def _walk(
        self,
        node: object,
        path: list[str],
        fragments: list[str],
        active: set[int],
    ) -> None:
        kind = classify(node)

        if kind is NodeKind.SCALAR:
            fragments.append(self._fragment(path, node))
            return

        if kind is NodeKind.UNSUPPORTED:
            raise SerializationError(
                f"Unsupported parameter value of type {type(node).__name__}",
                key_path=tuple(path),
            )

        node_id = id(node)
        if node_id in active:
            raise SerializationError(
                f"Cyclic parameter tree at {format_key(path)!r}",
                key_path=tuple(path),
            )
        active.add(node_id)
        try:
            if kind is NodeKind.MAPPING:
                for key, child in cast(Mapping[str, object], node).items():
                    self._walk(child, [*path, str(key)], fragments, active)
            else:
                for child in cast(Sequence[object], node):
                    self._walk(child, [*path, _ARRAY_MARKER], fragments, active)
        finally:
            active.discard(node_id)

    def _fragment(self, path: list[str], value: object) -> str:
        key = format_key(path)
        text = format_scalar(value)
        if self.percent_encode:
            key = quote(key, safe="[]")
            text = quote(text, safe="")
        return f"{key}={text}"


_default_serializer = ParamSerializer()


def serialize(tree: ParamMapping | None) -> str:
    """Serialize with the default (non-encoding) serializer."""
    return _default_serializer.serialize(tree)


__all__ = [
    "ParamSerializer",
    "format_date",
    "format_key",
    "format_scalar",
    "serialize",
]
