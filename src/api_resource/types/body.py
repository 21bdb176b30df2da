# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request body variants.

The body encoding of a call is chosen by the type of the body object:

* ``JsonBody(value)`` - JSON document, ``application/json; charset=utf-8``
* ``FormBody(value)`` - bracket-notation form fields,
  ``application/x-www-form-urlencoded``
* ``RawBody(data)`` - bytes sent as-is, no Content-Type is set

Plain values passed where a body is expected are coerced by ``coerce_body``:
bytes become a RawBody, mappings and sequences a JsonBody, strings and
numbers are sent unmodified as UTF-8 text.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, Union

from ..exceptions import SerializationError
from .params import ParamMapping

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _json_default(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


@dataclass(frozen=True)
class EncodedBody:
    """Bytes ready for the wire plus the Content-Type they require, if any."""

    content: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class JsonBody:
    """A body sent as a JSON document."""

    value: Any

    def encode(self, serialize: Callable[[ParamMapping], str]) -> EncodedBody:
        try:
            text = json.dumps(
                self.value,
                separators=(",", ":"),
                ensure_ascii=False,
                default=_json_default,
            )
        except (TypeError, ValueError) as e:
            # ValueError is json's "Circular reference detected"
            raise SerializationError(f"Cannot encode JSON body: {e}") from e
        except RecursionError as e:
            raise SerializationError("JSON body is nested too deeply") from e
        return EncodedBody(text.encode("utf-8"), JSON_CONTENT_TYPE)


@dataclass(frozen=True)
class FormBody:
    """A body sent as URL-encoded form fields in bracket notation."""

    value: ParamMapping

    def encode(self, serialize: Callable[[ParamMapping], str]) -> EncodedBody:
        return EncodedBody(serialize(self.value).encode("utf-8"), FORM_CONTENT_TYPE)


@dataclass(frozen=True)
class RawBody:
    """A body sent byte-for-byte, without touching the headers."""

    data: bytes

    def encode(self, serialize: Callable[[ParamMapping], str]) -> EncodedBody:
        return EncodedBody(bytes(self.data))


RequestBody = Union[JsonBody, FormBody, RawBody]


def coerce_body(data: Any) -> RequestBody | None:
    """Turn whatever a caller passed as ``data`` into a RequestBody.

    Raises:
        SerializationError: If ``data`` has no sensible wire representation.
    """
    if data is None or isinstance(data, (JsonBody, FormBody, RawBody)):
        return data
    if isinstance(data, (bytes, bytearray, memoryview)):
        return RawBody(bytes(data))
    if isinstance(data, (Mapping, Sequence)) and not isinstance(data, str):
        return JsonBody(data)
    if isinstance(data, (str, int, float)) and not isinstance(data, bool):
        return RawBody(str(data).encode("utf-8"))
    raise SerializationError(
        f"Unsupported request body type: {type(data).__name__}"
    )


__all__ = [
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "EncodedBody",
    "FormBody",
    "JsonBody",
    "RawBody",
    "RequestBody",
    "coerce_body",
]
