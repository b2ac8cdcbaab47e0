# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .request import ApiRequest


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    import socket
    import ssl as ssl_module

    import httpx

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    # ConnectError wraps TLS and DNS failures; look at the underlying cause first.
    cause = exc.__cause__ or exc.__context__
    if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR
    if isinstance(cause, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ConnectionError, TimeoutError)):
        return ErrorCategory.TIMEOUT if isinstance(exc, TimeoutError) else ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


class WrappedApiError(Exception):
    """Base class for every error raised by wrappedapi."""


class ValidationError(WrappedApiError, ValueError):
    """A request was assembled with missing or invalid values."""


class InvalidRequestError(ValidationError):
    """The final request URL does not parse as a URI."""

    def __init__(self, url: str, reason: str | None = None):
        message = f"Invalid URI {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url


class UnresolvedTemplateError(ValidationError):
    """The computed endpoint still contains `{...}` placeholders."""

    def __init__(self, endpoint: str, request: ApiRequest | None = None):
        super().__init__(f"Missing path parameters: {endpoint}")
        self.endpoint = endpoint
        self.request = request


class TransportError(WrappedApiError):
    """The transport failed to deliver a request or read its response."""

    def __init__(self, message: str, *, category: ErrorCategory | None = None):
        super().__init__(message)
        self.category = category or ErrorCategory.UNKNOWN_ERROR

    @classmethod
    def wrap(cls, exc: BaseException, url: str | None = None) -> TransportError:
        """Wrap an arbitrary transport exception, keeping its category."""
        target = f" {url}" if url else ""
        error = cls(f"Request to{target} failed: {exc}", category=categorize_exception(exc))
        error.__cause__ = exc
        return error


class MaterializationError(WrappedApiError):
    """The raw response could not be turned into the declared response type."""


class InstantiationError(MaterializationError):
    """The declared response type cannot be default-constructed."""

    def __init__(self, response_type: Any, reason: str):
        name = getattr(response_type, "__qualname__", None) or repr(response_type)
        super().__init__(f"Cannot create instance of {name}: {reason}")
        self.response_type = response_type


@dataclass(frozen=True)
class HttpError:
    """HTTP status code bundled with the exception that accompanied it."""

    code: int
    exception: BaseException | None = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.code < 300

    @classmethod
    def from_exception(cls, exc: BaseException) -> HttpError:
        """Build an HttpError, reading the status from `exc.response` when present."""
        response = getattr(exc, "response", None)
        if response is None and exc.__cause__ is not None:
            response = getattr(exc.__cause__, "response", None)
        code = getattr(response, "status_code", None)
        return cls(code=code if isinstance(code, int) else -1, exception=exc)


class HttpException(WrappedApiError):
    """Raised for callers that prefer a single error carrying an HttpError."""

    def __init__(self, http_error: HttpError):
        super().__init__(f"During requesting, HTTP Error occurred! Code: {http_error.code}")
        self.http_error = http_error
        if http_error.exception is not None:
            self.__cause__ = http_error.exception


__all__ = [
    "ErrorCategory",
    "HttpError",
    "HttpException",
    "InstantiationError",
    "InvalidRequestError",
    "MaterializationError",
    "TransportError",
    "UnresolvedTemplateError",
    "ValidationError",
    "WrappedApiError",
    "categorize_exception",
]
