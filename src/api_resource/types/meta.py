# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Models for the ``meta.error`` response convention.

JSON responses may signal an application-level failure, independent of
the HTTP status, with a document of the form::

    {"meta": {"error": {"message": "...", "details": {...}}}}
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class MetaError(BaseModel):
    """The ``meta.error`` object of a response document."""

    model_config = ConfigDict(extra="allow", frozen=True)

    message: str = ""
    details: Any = None

    @field_validator("message", mode="before")
    @classmethod
    def _coerce_message(cls, value: Any) -> str:
        return "" if value is None else str(value)


def extract_meta_error(document: Any) -> MetaError | None:
    """
    Return the ``meta.error`` of a parsed JSON document, if it carries one.

    Only truthy ``meta.error`` values count; a bare string is taken as the
    message.
    """
    if not isinstance(document, dict):
        return None
    meta = document.get("meta")
    if not isinstance(meta, dict):
        return None
    error = meta.get("error")
    if not error:
        return None
    if isinstance(error, dict):
        return MetaError.model_validate(error)
    return MetaError(message=error)


__all__ = ["MetaError", "extract_meta_error"]
