# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport-level exports."""

from . import bodies
from .adapters import StubTransport
from .bodies import BodyReader, BodyWriter
from .client import Transport, create_default_transport
from .headers import has_header, header_value, header_values
from .httpx_client import HttpxTransport
from .models import HttpRequest, HttpRequestBuilder, HttpResponse, validate_url

__all__ = [
    "BodyReader",
    "BodyWriter",
    "HttpRequest",
    "HttpRequestBuilder",
    "HttpResponse",
    "HttpxTransport",
    "StubTransport",
    "Transport",
    "bodies",
    "create_default_transport",
    "has_header",
    "header_value",
    "header_values",
    "validate_url",
]
