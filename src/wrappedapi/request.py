# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""The immutable request descriptor."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from .http import bodies
from .http.bodies import BodyReader, BodyWriter
from .method import RequestMethod
from .parameters import Header, PathParameter, QueryParameter

if TYPE_CHECKING:
    from .api import WrappedApi
    from .builder import ApiRequestBuilder
    from .http.models import HttpRequestBuilder, HttpResponse

T = TypeVar("T")


@dataclass(frozen=True)
class ApiRequest(Generic[T]):
    """
    A fully specified request to `api`, materialized into `response_type`.

    Instances are normally created with `ApiRequest.builder()` and can be sent
    any number of times. Every step of the pipeline delegates to `api` by
    default; subclass and override a step to customise a single request type.
    """

    api: WrappedApi
    response_type: type[T]
    endpoint: str
    method: RequestMethod
    url: str | None = None
    path_parameters: tuple[PathParameter, ...] = ()
    query_parameters: tuple[QueryParameter, ...] = ()
    headers: tuple[Header, ...] = ()
    body_writer: BodyWriter = field(default_factory=bodies.no_body)
    body_reader: BodyReader = field(default_factory=bodies.as_text)
    response_factory: Callable[[], T] | None = field(default=None, compare=False)

    @staticmethod
    def builder(api: WrappedApi, response_type: type[T]) -> ApiRequestBuilder[T]:
        from .builder import ApiRequestBuilder

        return ApiRequestBuilder.of_response(api, response_type)

    def computed_endpoint(self) -> str:
        return self.api.compute_endpoint(self)

    def assembled_headers(self) -> list[Header]:
        return self.api.assemble_headers(self)

    def apply_headers(self, builder: HttpRequestBuilder) -> None:
        self.api.apply_headers(self, builder)

    def create_response_instance(self) -> T:
        return self.api.create_response_instance(self)

    def handle_response(self, response: HttpResponse) -> T:
        return self.api.handle_response(self, response)

    def send(self) -> T | None:
        return self.api.send(self)

    def send_async(self) -> Future[T | None]:
        return self.api.send_async(self)

    async def asend(self) -> T | None:
        return await asyncio.wrap_future(self.send_async())
