# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Response interpretation.

Turns a fully buffered HTTP response into exactly one ResponseOutcome.

Decision tree:
    1. ``Content-Type`` (parameters ignored) is ``application/json``:
       a. body does not parse -> ParseError carrying the raw text
       b. document has a truthy ``meta.error`` -> DomainError with its
          message and details, whatever the HTTP status
       c. otherwise the parsed document is the candidate body
    2. any other content type -> the raw bytes are the candidate body
    3. raw-bytes body with a non-2xx status -> DomainError(body text);
       everything else -> Success
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from .exceptions import DomainError, ParseError, TransportError
from .protocols.transport import ResponseStreamProtocol
from .types.meta import extract_meta_error
from .types.outcome import ResponseOutcome, Success

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


def media_type(headers: Mapping[str, str]) -> str:
    """Content-Type without parameters, lower-cased."""
    value = headers.get("content-type", "")
    return value.split(";", 1)[0].strip().lower()


def is_success_status(status: int) -> bool:
    return status // 100 == 2


class ResponseInterpreter:
    """
    Classifies responses into outcomes.

    Args:
        error_body_preview: Maximum number of body characters included in
            log messages about unparseable responses.
    """

    def __init__(self, error_body_preview: int = 1000) -> None:
        self.error_body_preview = error_body_preview

    async def read(self, stream: ResponseStreamProtocol) -> bytes:
        """Buffer the whole response body."""
        chunks = [chunk async for chunk in stream.iter_chunks()]
        return b"".join(chunks)

    async def consume(self, stream: ResponseStreamProtocol) -> ResponseOutcome:
        """
        Buffer and interpret a response stream.

        A connection failure while reading yields a TransportError outcome
        rather than propagating.
        """
        try:
            body = await self.read(stream)
        except TransportError as e:
            return e
        return self.interpret(stream.status, stream.headers, body)

    def interpret(
        self,
        status: int,
        headers: Mapping[str, str],
        body: bytes,
    ) -> ResponseOutcome:
        """Classify one buffered response."""
        headers = {name.lower(): value for name, value in headers.items()}

        if media_type(headers) == JSON_MEDIA_TYPE:
            text = body.decode("utf-8", errors="replace")
            try:
                document = json.loads(text)
            except ValueError:
                logger.warning(
                    f"Unparseable JSON response (status {status}): "
                    f"{text[: self.error_body_preview]!r}"
                )
                return ParseError(text, status=status, headers=headers)

            meta_error = extract_meta_error(document)
            if meta_error is not None:
                return DomainError(
                    meta_error.message,
                    status=status,
                    headers=headers,
                    body=document,
                    details=meta_error.details,
                )
            return Success(status=status, headers=headers, body=document)

        if not is_success_status(status):
            return DomainError(
                body.decode("utf-8", errors="replace"),
                status=status,
                headers=headers,
                body=body,
            )
        return Success(status=status, headers=headers, body=body)


__all__ = [
    "JSON_MEDIA_TYPE",
    "ResponseInterpreter",
    "is_success_status",
    "media_type",
]
