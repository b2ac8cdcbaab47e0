# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request execution.

`send` runs the whole lifecycle of one request on the calling thread:

    endpoint -> url -> headers/body -> on_before_send -> transport
             -> on_after_send -> materialize -> on_after_handled

Validation problems (unresolved templates, malformed URLs) are raised before
any hook runs. Transport and materialization failures are handed to the api's
`on_exception` hook exactly once and then re-raised or swallowed according to
`api.rethrow_exceptions`. `send_async` runs the same pipeline on a unit of
work scheduled by the api.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Future
from typing import TYPE_CHECKING, TypeVar

from .errors import MaterializationError, TransportError, UnresolvedTemplateError, WrappedApiError
from .http.models import HttpRequest, HttpResponse

if TYPE_CHECKING:
    from .request import ApiRequest

T = TypeVar("T")

logger = logging.getLogger(__name__)


def build_http_request(request: ApiRequest[T]) -> HttpRequest:
    """Compute the URL, headers and body of `request` into a wire-level HttpRequest."""
    api = request.api
    endpoint = request.computed_endpoint()
    if "{" in endpoint or "}" in endpoint:
        raise UnresolvedTemplateError(endpoint, request)

    url = api.resolve_base_url(request) + endpoint

    builder = api.create_request_builder()
    builder.timeout(api.timeout)
    builder.uri(url)
    request.apply_headers(builder)
    builder.method(request.method.name, request.body_writer)
    return builder.build()


def _route_failure(request: ApiRequest[T], error: WrappedApiError) -> None:
    api = request.api
    logger.debug("%s %s failed: %s", request.method, request.endpoint, error)
    api.on_exception(request, error)
    if api.rethrow_exceptions:
        raise error
    logger.debug("Suppressing %s for %s %s", type(error).__name__, request.method, request.endpoint)


def send(request: ApiRequest[T]) -> T | None:
    """
    Execute `request` synchronously.

    Returns the materialized response, or None when a failure was routed to
    `on_exception` and the api does not rethrow.
    """
    api = request.api
    http_request = build_http_request(request)

    api.on_before_send(request)
    logger.debug("Sending %s %s", http_request.method, http_request.url)

    transport = None
    try:
        try:
            transport = api.create_transport()
            http_response: HttpResponse = transport.send(http_request, request.body_reader)
        except TransportError as exc:
            _route_failure(request, exc)
            return None
        except Exception as exc:  # noqa: BLE001
            _route_failure(request, TransportError.wrap(exc, http_request.url))
            return None
    finally:
        if transport is not None:
            api.release_transport(transport)

    api.on_after_send(request)

    try:
        response = request.handle_response(http_response)
    except MaterializationError as exc:
        _route_failure(request, exc)
        return None
    except Exception as exc:  # noqa: BLE001
        error = MaterializationError(f"Failed to handle response of {request.method} {request.endpoint}: {exc}")
        error.__cause__ = exc
        _route_failure(request, error)
        return None

    api.on_after_handled(request, response)
    return response


def send_async(request: ApiRequest[T]) -> Future[T | None]:
    """
    Execute `request` on a unit of work scheduled by `request.api.run_async`.

    The returned future completes with exactly what `send` would have returned
    or raised. Cancelling it only prevents a send that has not started yet.
    """
    future: Future[T | None] = Future()

    def run() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = send(request)
        except BaseException as exc:  # noqa: BLE001
            future.set_exception(exc)
        else:
            future.set_result(result)

    request.api.run_async(run)
    return future


async def asend(request: ApiRequest[T]) -> T | None:
    """Await `send_async` from a running event loop."""
    return await asyncio.wrap_future(send_async(request))


__all__ = ["asend", "build_http_request", "send", "send_async"]
