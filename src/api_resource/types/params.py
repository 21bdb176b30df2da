# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Parameter tree types.

A parameter tree is what callers hand to a request as query parameters or as
a form body: a scalar, a sequence of trees, or a mapping from string keys to
trees. Classification is by runtime type so plain dicts, lists and tuples
work without wrapping.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from enum import Enum
from typing import Union

ParamScalar = Union[str, int, float, bool, date, None]
"""Leaf values. ``datetime`` is a ``date`` subclass and is accepted too."""

ParamTree = Union[ParamScalar, Sequence["ParamTree"], Mapping[str, "ParamTree"]]
"""A scalar, a sequence of trees, or a mapping of string keys to trees."""

ParamMapping = Mapping[str, ParamTree]
"""The top level of a serializable tree is always a mapping."""


class NodeKind(Enum):
    """Kind of a node in a parameter tree."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    UNSUPPORTED = "unsupported"


_SCALAR_TYPES = (str, int, float, bool, date, type(None))


def classify(value: object) -> NodeKind:
    """Return the NodeKind of a parameter tree node.

    Strings and bytes are sequences in Python but leaves here; bytes are not
    a supported leaf at all.
    """
    if isinstance(value, _SCALAR_TYPES):
        return NodeKind.SCALAR
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    if isinstance(value, Sequence) and not isinstance(
        value, (bytes, bytearray, memoryview)
    ):
        return NodeKind.SEQUENCE
    return NodeKind.UNSUPPORTED


__all__ = [
    "NodeKind",
    "ParamMapping",
    "ParamScalar",
    "ParamTree",
    "classify",
]
