# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Base class for API definitions."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, TypeVar

from . import engine
from .config import ApiSettings, load_api_settings
from .http.client import Transport, create_default_transport
from .http.models import HttpRequestBuilder, HttpResponse
from .parameters import Header
from .response import create_instance, materialize

if TYPE_CHECKING:
    from .builder import ApiRequestBuilder
    from .request import ApiRequest

T = TypeVar("T")


class WrappedApi(ABC):
    """
    Describes one remote API and the defaults shared by all of its requests.

    Subclasses provide `default_url` and override only what they need: default
    headers, the rethrow policy, the lifecycle hooks, or any of the default
    request-handling steps below. Instances are shared across threads and are
    never mutated by the library.

    A `transport` passed to the constructor is shared by every request of this
    api and is never closed by the library. Without one, each send creates its
    own transport from `settings` and closes it afterwards.
    """

    default_headers: Sequence[Header] = ()
    rethrow_exceptions: bool = True

    settings: ApiSettings | None = None
    transport: Transport | None = None

    def __init__(self, *, settings: ApiSettings | None = None, transport: Transport | None = None):
        self.settings = settings
        self.transport = transport

    @property
    @abstractmethod
    def default_url(self) -> str:
        """Base URL used when a request carries no URL of its own (no trailing slash)."""

    @property
    def api_settings(self) -> ApiSettings:
        return self.settings if self.settings is not None else load_api_settings()

    @property
    def timeout(self) -> float:
        """Seconds a single request may take."""
        return self.api_settings.timeout

    def request(self, response_type: type[T]) -> ApiRequestBuilder[T]:
        """Start building a request bound to this api."""
        from .builder import ApiRequestBuilder

        return ApiRequestBuilder.of_response(self, response_type)

    # Default request handling. ApiRequest delegates here unless overridden.

    def compute_endpoint(self, request: ApiRequest[Any]) -> str:
        """Substitute path parameters into the endpoint and append the queries."""
        endpoint = request.endpoint
        for parameter in request.path_parameters:
            endpoint = endpoint.replace(parameter.token, parameter.replacement)

        for index, query in enumerate(request.query_parameters):
            endpoint += ("?" if index == 0 else "&") + f"{query.name}={query.value}"

        return endpoint

    def resolve_base_url(self, request: ApiRequest[Any]) -> str:
        return request.url if request.url is not None else self.default_url

    def assemble_headers(self, request: ApiRequest[Any]) -> list[Header]:
        """Request headers first, then this api's defaults. Duplicates are kept."""
        return [*request.headers, *(self.default_headers or ())]

    def apply_headers(self, request: ApiRequest[Any], builder: HttpRequestBuilder) -> None:
        for header in request.assembled_headers():
            builder.header(header.key, header.value)

    def create_request_builder(self) -> HttpRequestBuilder:
        return HttpRequestBuilder()

    def create_transport(self) -> Transport:
        if self.transport is not None:
            return self.transport
        return create_default_transport(self.api_settings)

    def release_transport(self, transport: Transport) -> None:
        """Close transports created for a single send; shared ones stay open."""
        if transport is not self.transport:
            transport.close()

    def run_async(self, work: Callable[[], None]) -> None:
        """Schedule `work` for `send_async`. Defaults to one new daemon thread per call."""
        threading.Thread(target=work, name=f"{type(self).__name__}-send", daemon=True).start()

    def create_response_instance(self, request: ApiRequest[T]) -> T:
        return create_instance(request.response_type, request.response_factory)

    def handle_response(self, request: ApiRequest[T], response: HttpResponse) -> T:
        return materialize(request, response)

    def send(self, request: ApiRequest[T]) -> T | None:
        return engine.send(request)

    def send_async(self, request: ApiRequest[T]) -> Future[T | None]:
        return engine.send_async(request)

    # Lifecycle hooks. Return values are ignored.

    def on_before_send(self, request: ApiRequest[Any]) -> None:
        """Called after the wire request is assembled, right before the transport call."""

    def on_after_send(self, request: ApiRequest[Any]) -> None:
        """Called once the transport returned a response, before materialization."""

    def on_after_handled(self, request: ApiRequest[T], response: T) -> None:
        """Called with the materialized response just before `send` returns it."""

    def on_exception(self, request: ApiRequest[Any], error: Exception) -> None:
        """Called once for a transport or materialization failure."""
