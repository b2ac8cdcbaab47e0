# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Response materialization.

Turning a raw HttpResponse into the declared response type happens in three
steps: create a default instance through the request's factory, bind the HTTP
status and owning api when the instance supports it, then hand over to the
instance's own `deserialize` when it has one.
"""

from __future__ import annotations

import dataclasses
import inspect
import json
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, get_origin, runtime_checkable

from .errors import HttpError, HttpException, InstantiationError, MaterializationError

if TYPE_CHECKING:
    from .api import WrappedApi
    from .http.models import HttpResponse
    from .request import ApiRequest

T = TypeVar("T")

_CONTAINER_TYPES = (list, tuple, set, frozenset, dict, str, bytes, bytearray)
_BINDING_ATTRIBUTES = frozenset({"http_status_code", "api"})


@runtime_checkable
class StatusBindable(Protocol):
    """Capability: the response wants the HTTP status and the api that produced it."""

    def bind_response(self, status_code: int, api: WrappedApi | None) -> None: ...


@runtime_checkable
class Deserializable(Protocol):
    """Capability: the response builds its final value from the raw response."""

    def deserialize(self, request: ApiRequest[Any], response: HttpResponse) -> Any: ...


class ApiResponse:
    """
    Base class for responses that carry their HTTP status code and api.

    `http_status_code` stays -1 until the response is bound. `api` is a lookup
    reference only; responses never manage the api's lifetime.
    """

    http_status_code: int = -1
    api: WrappedApi | None = None

    def bind_response(self, status_code: int, api: WrappedApi | None) -> None:
        self.http_status_code = status_code
        self.api = api

    @property
    def is_success(self) -> bool:
        return 200 <= self.http_status_code < 300

    def raise_for_status(self) -> None:
        """Raise HttpException when the bound status code is not 2xx."""
        if not self.is_success:
            raise HttpException(HttpError(self.http_status_code))


class DeserializableApiResponse(ApiResponse, ABC):
    """An ApiResponse that turns the raw response into its final value itself."""

    @abstractmethod
    def deserialize(self, request: ApiRequest[Any], response: HttpResponse) -> Any:
        """Return the materialized response; `self` is already bound at this point."""


class JsonApiResponse(DeserializableApiResponse):
    """
    Deserializes a text body as JSON into a new instance of the concrete class.

    Dataclass subclasses receive their declared fields as constructor arguments;
    other subclasses get matching attributes assigned on an instance built by the
    request's response factory.
    Keys without a matching field are ignored.
    """

    def json_decoder(self) -> json.JSONDecoder:
        """Return the decoder used for the body. Override to customise decoding."""
        return json.JSONDecoder()

    def deserialize(self, request: ApiRequest[Any], response: HttpResponse) -> Any:
        body = response.body
        if not isinstance(body, str):
            raise MaterializationError(f"Response body must be a string, currently is: {type(body).__name__}")
        try:
            payload = self.json_decoder().decode(body)
        except json.JSONDecodeError as exc:
            raise MaterializationError(f"Response body is not valid JSON: {exc}") from exc

        result = type(self).from_json(payload, factory=request.create_response_instance)
        if isinstance(result, StatusBindable):
            result.bind_response(self.http_status_code, self.api)
        return result

    @classmethod
    def from_json(cls, payload: Any, factory: Callable[[], Any] | None = None) -> Any:
        """
        Build an instance from a decoded JSON object.

        Non-dataclass instances come from `factory` when given; JSON keys are
        assigned when they name an annotated attribute or one set by the
        instance itself.
        """
        if not isinstance(payload, Mapping):
            raise MaterializationError(
                f"Expected a JSON object for {cls.__qualname__}, got {type(payload).__name__}"
            )
        if dataclasses.is_dataclass(cls):
            names = {f.name for f in dataclasses.fields(cls) if f.init}
            try:
                return cls(**{key: value for key, value in payload.items() if key in names})
            except TypeError as exc:
                raise MaterializationError(f"Cannot build {cls.__qualname__} from JSON: {exc}") from exc

        instance = factory() if factory is not None else cls()
        names: set[str] = set(vars(instance)) if hasattr(instance, "__dict__") else set()
        for klass in cls.__mro__:
            names.update(inspect.get_annotations(klass))
        names -= _BINDING_ATTRIBUTES

        for key, value in payload.items():
            if key in names:
                setattr(instance, key, value)
        return instance


def create_instance(response_type: type[T], factory: Callable[[], T] | None = None) -> T:
    """Create the default instance of `response_type`, raising InstantiationError when impossible."""
    if response_type is None:
        raise InstantiationError(response_type, "no response type declared")
    origin = get_origin(response_type) or response_type
    if isinstance(origin, type) and issubclass(origin, _CONTAINER_TYPES):
        raise InstantiationError(response_type, "container types have no default element")
    if inspect.isabstract(response_type):
        raise InstantiationError(response_type, "type is abstract")

    build = factory if factory is not None else response_type
    try:
        return build()
    except TypeError as exc:
        raise InstantiationError(response_type, str(exc)) from exc


def materialize(request: ApiRequest[T], response: HttpResponse) -> T:
    """Materialize `response` into the type declared by `request`."""
    instance = request.create_response_instance()

    if isinstance(instance, StatusBindable):
        instance.bind_response(response.status_code, request.api)

    if isinstance(instance, Deserializable):
        return instance.deserialize(request, response)

    return instance


__all__ = [
    "ApiResponse",
    "Deserializable",
    "DeserializableApiResponse",
    "JsonApiResponse",
    "StatusBindable",
    "create_instance",
    "materialize",
]
