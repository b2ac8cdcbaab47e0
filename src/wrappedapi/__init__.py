# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
wrappedapi package entrypoint.

Typed HTTP API requests: subclass WrappedApi to describe a remote API, build
immutable ApiRequest objects bound to it, and send them synchronously or
asynchronously. Responses are materialized into the declared response type,
and the api observes every stage through overridable hooks. The transport is
abstracted behind an injectable interface backed by httpx.
"""

from .api import WrappedApi
from .builder import ApiRequestBuilder
from .config import ApiSettings, load_api_settings
from .engine import asend, send, send_async
from .errors import (
    ErrorCategory,
    HttpError,
    HttpException,
    InstantiationError,
    InvalidRequestError,
    MaterializationError,
    TransportError,
    UnresolvedTemplateError,
    ValidationError,
    WrappedApiError,
)
from .http import (
    HttpRequest,
    HttpResponse,
    HttpxTransport,
    StubTransport,
    Transport,
    bodies,
    create_default_transport,
)
from .log import setup_logging
from .method import RequestMethod
from .parameters import Header, PathParameter, QueryParameter
from .request import ApiRequest
from .response import (
    ApiResponse,
    Deserializable,
    DeserializableApiResponse,
    JsonApiResponse,
    StatusBindable,
    materialize,
)
from .version import __version__

__all__ = [
    "ApiRequest",
    "ApiRequestBuilder",
    "ApiResponse",
    "ApiSettings",
    "Deserializable",
    "DeserializableApiResponse",
    "ErrorCategory",
    "Header",
    "HttpError",
    "HttpException",
    "HttpRequest",
    "HttpResponse",
    "HttpxTransport",
    "InstantiationError",
    "InvalidRequestError",
    "JsonApiResponse",
    "MaterializationError",
    "PathParameter",
    "QueryParameter",
    "RequestMethod",
    "StatusBindable",
    "StubTransport",
    "Transport",
    "TransportError",
    "UnresolvedTemplateError",
    "ValidationError",
    "WrappedApi",
    "WrappedApiError",
    "asend",
    "bodies",
    "create_default_transport",
    "load_api_settings",
    "materialize",
    "send",
    "send_async",
    "setup_logging",
    "__version__",
]
