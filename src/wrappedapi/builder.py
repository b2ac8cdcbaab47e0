# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fluent builder for ApiRequest."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .errors import ValidationError
from .http import bodies
from .http.bodies import BodyReader, BodyWriter
from .method import RequestMethod
from .parameters import Header, PathParameter, QueryParameter
from .request import ApiRequest

if TYPE_CHECKING:
    from .api import WrappedApi

T = TypeVar("T")


def _require(name: str, value: Any) -> None:
    if value is None:
        raise ValidationError(f"{name} must not be None")


def _require_instance(name: str, value: Any, expected: type) -> None:
    _require(name, value)
    if not isinstance(value, expected):
        raise ValidationError(f"{name} must be a {expected.__name__}, got {type(value).__name__}")


class ApiRequestBuilder(Generic[T]):
    """
    Collects the parts of an ApiRequest.

    `build()` validates the collected values and copies them, so the builder
    can keep being modified or reused without touching requests built earlier.
    """

    def __init__(self, api: WrappedApi, response_type: type[T]):
        _require("api", api)
        _require("response_type", response_type)
        self.api = api
        self.response_type = response_type
        self._url: str | None = None
        self._endpoint: str | None = None
        self._method: RequestMethod | None = None
        self._path_parameters: list[PathParameter] = []
        self._query_parameters: list[QueryParameter] = []
        self._headers: list[Header] = []
        self._body_writer: BodyWriter | None = None
        self._body_reader: BodyReader | None = None
        self._response_factory: Callable[[], T] | None = None

    @classmethod
    def of_response(cls, api: WrappedApi, response_type: type[T]) -> ApiRequestBuilder[T]:
        return cls(api, response_type)

    def with_url(self, url: str) -> ApiRequestBuilder[T]:
        """Send to `url` instead of the api's default URL. One trailing slash is dropped."""
        _require_instance("url", url, str)
        if url.endswith("/"):
            url = url[:-1]
        self._url = url
        return self

    def with_endpoint(self, endpoint: str) -> ApiRequestBuilder[T]:
        _require_instance("endpoint", endpoint, str)
        if not endpoint.startswith("/"):
            endpoint = "/" + endpoint
        self._endpoint = endpoint
        return self

    def with_method(self, method: RequestMethod | str) -> ApiRequestBuilder[T]:
        _require("method", method)
        if not isinstance(method, (RequestMethod, str)):
            raise ValidationError(f"method must be a RequestMethod or str, got {type(method).__name__}")
        self._method = RequestMethod.of(method)
        return self

    def with_path_parameter(self, parameter: PathParameter) -> ApiRequestBuilder[T]:
        _require_instance("path parameter", parameter, PathParameter)
        self._path_parameters.append(parameter)
        return self

    def with_path_parameters(self, *parameters: PathParameter) -> ApiRequestBuilder[T]:
        for parameter in parameters:
            self.with_path_parameter(parameter)
        return self

    def with_query(self, query: QueryParameter) -> ApiRequestBuilder[T]:
        _require_instance("query", query, QueryParameter)
        self._query_parameters.append(query)
        return self

    def with_queries(self, *queries: QueryParameter) -> ApiRequestBuilder[T]:
        for query in queries:
            self.with_query(query)
        return self

    def with_header(self, header: Header) -> ApiRequestBuilder[T]:
        _require_instance("header", header, Header)
        self._headers.append(header)
        return self

    def with_headers(self, *headers: Header) -> ApiRequestBuilder[T]:
        for header in headers:
            self.with_header(header)
        return self

    def with_body_writer(self, body_writer: BodyWriter) -> ApiRequestBuilder[T]:
        _require("body_writer", body_writer)
        if not callable(body_writer):
            raise ValidationError("body_writer must be callable")
        self._body_writer = body_writer
        return self

    def with_body_reader(self, body_reader: BodyReader) -> ApiRequestBuilder[T]:
        _require("body_reader", body_reader)
        if not callable(body_reader):
            raise ValidationError("body_reader must be callable")
        self._body_reader = body_reader
        return self

    def with_response_factory(self, factory: Callable[[], T]) -> ApiRequestBuilder[T]:
        """Create default response instances with `factory` instead of calling the response type."""
        _require("response_factory", factory)
        if not callable(factory):
            raise ValidationError("response_factory must be callable")
        self._response_factory = factory
        return self

    def build(self) -> ApiRequest[T]:
        if self._endpoint is None:
            raise ValidationError("endpoint is required")
        if self._method is None:
            raise ValidationError("method is required")

        return ApiRequest(
            api=self.api,
            response_type=self.response_type,
            endpoint=self._endpoint,
            method=self._method,
            url=self._url,
            path_parameters=tuple(self._path_parameters),
            query_parameters=tuple(self._query_parameters),
            headers=tuple(self._headers),
            body_writer=self._body_writer if self._body_writer is not None else bodies.no_body(),
            body_reader=self._body_reader if self._body_reader is not None else bodies.as_text(),
            response_factory=self._response_factory,
        )


__all__ = ["ApiRequestBuilder"]
