# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Wire-level HTTP request/response data models consumed by Transport implementations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from ..errors import InvalidRequestError, ValidationError
from .bodies import BodyWriter, no_body
from .headers import header_value, header_values

HeaderPairs = tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class HttpRequest:
    """Immutable request handed to a Transport."""

    url: str
    method: str = "GET"
    headers: HeaderPairs = ()
    body: bytes = b""
    timeout: float | None = None

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)


class HttpRequestBuilder:
    """
    Accumulates the parts of an HttpRequest.

    The target URI is validated as soon as it is set so malformed URLs never
    reach a transport.
    """

    def __init__(self) -> None:
        self._url: str | None = None
        self._method = "GET"
        self._body_writer: BodyWriter = no_body()
        self._headers: list[tuple[str, str]] = []
        self._timeout: float | None = None

    def uri(self, url: str) -> HttpRequestBuilder:
        self._url = validate_url(url)
        return self

    def method(self, name: str, body_writer: BodyWriter | None = None) -> HttpRequestBuilder:
        if not name:
            raise ValidationError("Request method must not be empty")
        self._method = str(name)
        self._body_writer = body_writer if body_writer is not None else no_body()
        return self

    def header(self, key: str, value: str) -> HttpRequestBuilder:
        if not key:
            raise ValidationError("Header key must not be empty")
        self._headers.append((key, value))
        return self

    def timeout(self, seconds: float | None) -> HttpRequestBuilder:
        if seconds is not None and seconds <= 0:
            raise ValidationError(f"Timeout must be positive, got {seconds}")
        self._timeout = seconds
        return self

    def build(self) -> HttpRequest:
        if self._url is None:
            raise ValidationError("Request URI is required")
        body = self._body_writer()
        return HttpRequest(
            url=self._url,
            method=self._method,
            headers=tuple(self._headers),
            body=bytes(body or b""),
            timeout=self._timeout,
        )


def validate_url(url: str) -> str:
    """Return `url` unchanged if it is an absolute http(s)-style URI, else raise InvalidRequestError."""
    if not isinstance(url, str):
        raise InvalidRequestError(repr(url), "not a string")
    if any(ch.isspace() for ch in url):
        raise InvalidRequestError(url, "contains whitespace")
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidRequestError(url, str(exc)) from exc
    if not parsed.scheme or not parsed.host:
        raise InvalidRequestError(url, "scheme and host are required")
    return url


@dataclass
class HttpResponse:
    """Raw response returned by a Transport before materialization."""

    status_code: int
    body: Any = None
    headers: HeaderPairs = ()
    content: bytes = b""
    url: str | None = None
    request: HttpRequest | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)

    def header_values(self, name: str) -> list[str]:
        return header_values(self.headers, name)


__all__ = ["HeaderPairs", "HttpRequest", "HttpRequestBuilder", "HttpResponse", "validate_url"]
