# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Type definitions for api-resource.

This module contains the data types that flow through a call: parameter
trees, request bodies, the request envelope and the response outcome.
"""

from .body import (
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    EncodedBody,
    FormBody,
    JsonBody,
    RawBody,
    RequestBody,
    coerce_body,
)
from .envelope import RequestEnvelope
from .meta import MetaError, extract_meta_error
from .outcome import ResponseOutcome, Success
from .params import NodeKind, ParamMapping, ParamScalar, ParamTree, classify

__all__ = [
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "EncodedBody",
    "FormBody",
    "JsonBody",
    "MetaError",
    "NodeKind",
    "ParamMapping",
    "ParamScalar",
    "ParamTree",
    "RawBody",
    "RequestBody",
    "RequestEnvelope",
    "ResponseOutcome",
    "Success",
    "classify",
    "coerce_body",
    "extract_meta_error",
]
