# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import threading
from concurrent.futures import Future

import httpx
import pytest

from httpbin_api import ANYTHING_URL, AnythingResponse, RecordingApi, json_response
from wrappedapi import (
    ApiRequest,
    ErrorCategory,
    HttpResponse,
    InvalidRequestError,
    MaterializationError,
    PathParameter,
    StubTransport,
    TransportError,
    UnresolvedTemplateError,
    engine,
)


def test_send_runs_hooks_in_order_and_materializes():
    transport = StubTransport({ANYTHING_URL: json_response(201)})
    api = RecordingApi(transport)
    request = api.fetch_anything()

    response = request.send()

    assert isinstance(response, AnythingResponse)
    assert response.url == "https://x"
    assert response.http_status_code == 201
    assert response.api is api
    assert api.event_names == ["before_send", "after_send", "after_handled"]
    assert api.events[-1][2] is response


def test_send_builds_wire_request_from_request_and_api_defaults():
    transport = StubTransport({ANYTHING_URL: json_response()})
    api = RecordingApi(transport)

    api.fetch_anything().send()

    (sent,) = transport.requests
    assert sent.url == ANYTHING_URL
    assert sent.method == "GET"
    assert sent.headers == (
        ("SomeHeader", "SomeHeaderValue"),
        ("Content-Type", "application/json"),
        ("X-Client", "tests"),
    )
    assert sent.body == b""
    assert sent.timeout == api.timeout


def test_unresolved_template_fails_before_transport():
    transport = StubTransport(default=json_response())
    api = RecordingApi(transport, rethrow=False)
    request = ApiRequest.builder(api, AnythingResponse).with_endpoint("/users/{id}/posts/{post}").with_method("GET").with_path_parameter(PathParameter("id", "7")).build()

    with pytest.raises(UnresolvedTemplateError) as excinfo:
        request.send()

    assert excinfo.value.endpoint == "/users/7/posts/{post}"
    assert excinfo.value.request is request
    assert transport.calls == 0
    assert api.events == []


def test_invalid_url_propagates_regardless_of_rethrow_policy():
    transport = StubTransport(default=json_response())
    api = RecordingApi(transport, rethrow=False)
    request = ApiRequest.builder(api, AnythingResponse).with_url("not a url").with_endpoint("/x").with_method("GET").build()

    with pytest.raises(InvalidRequestError):
        request.send()

    assert transport.calls == 0
    assert api.events == []


def test_transport_failure_is_routed_and_rethrown():
    boom = httpx.ConnectError("connection refused")
    transport = StubTransport({ANYTHING_URL: boom})
    api = RecordingApi(transport)

    with pytest.raises(TransportError) as excinfo:
        api.fetch_anything().send()

    assert excinfo.value.__cause__ is boom
    assert excinfo.value.category == ErrorCategory.CONNECTION_ERROR
    assert api.event_names == ["before_send", "exception"]
    assert api.events[-1][2] is excinfo.value


def test_transport_failure_returns_none_without_rethrow():
    transport = StubTransport({ANYTHING_URL: TransportError("down")})
    api = RecordingApi(transport, rethrow=False)

    result = api.fetch_anything().send()

    assert result is None
    assert api.event_names.count("exception") == 1
    assert api.event_names == ["before_send", "exception"]


def test_materialization_failure_is_wrapped_and_routed_once():
    transport = StubTransport({ANYTHING_URL: HttpResponse(status_code=200, body=b"{}")})
    api = RecordingApi(transport, rethrow=False)

    assert api.fetch_anything().send() is None
    assert api.event_names == ["before_send", "after_send", "exception"]
    assert isinstance(api.events[-1][2], MaterializationError)


def test_unexpected_materialization_exception_becomes_materialization_error():
    class Exploding:
        def deserialize(self, request, response):  # noqa: ARG002
            raise KeyError("missing")

    transport = StubTransport(default=json_response())
    api = RecordingApi(transport)
    request = ApiRequest.builder(api, Exploding).with_endpoint("/x").with_method("GET").build()

    with pytest.raises(MaterializationError) as excinfo:
        request.send()

    assert isinstance(excinfo.value.__cause__, KeyError)
    assert api.event_names == ["before_send", "after_send", "exception"]


def test_hook_exceptions_propagate_without_exception_routing():
    class FailingHookApi(RecordingApi):
        def on_after_send(self, request):
            super().on_after_send(request)
            raise RuntimeError("hook failed")

    transport = StubTransport({ANYTHING_URL: json_response()})
    api = FailingHookApi(transport, rethrow=False)

    with pytest.raises(RuntimeError, match="hook failed"):
        api.fetch_anything().send()

    assert "exception" not in api.event_names


def test_send_twice_performs_two_transport_calls():
    transport = StubTransport({ANYTHING_URL: json_response()})
    api = RecordingApi(transport)
    request = api.fetch_anything()

    first = request.send()
    second = request.send()

    assert transport.calls == 2
    assert first == second
    assert first is not second


def test_shared_transport_is_not_closed_but_per_call_transport_is():
    shared = StubTransport({ANYTHING_URL: json_response()})
    api = RecordingApi(shared)
    api.fetch_anything().send()
    assert shared.closed is False

    created: list[StubTransport] = []

    class PerCallApi(RecordingApi):
        def create_transport(self):
            transport = StubTransport({ANYTHING_URL: json_response()})
            created.append(transport)
            return transport

    per_call = PerCallApi()
    per_call.fetch_anything().send()
    per_call.fetch_anything().send()
    assert len(created) == 2
    assert all(transport.closed for transport in created)


def test_per_call_transport_is_closed_on_failure():
    created: list[StubTransport] = []

    class PerCallApi(RecordingApi):
        def create_transport(self):
            transport = StubTransport()
            created.append(transport)
            return transport

    api = PerCallApi(rethrow=False)
    assert api.fetch_anything().send() is None
    assert created[0].closed is True


class BrokenTransportApi(RecordingApi):
    def create_transport(self):
        raise ValueError("no transport available")


def test_transport_creation_failure_is_routed_and_rethrown():
    api = BrokenTransportApi()

    with pytest.raises(TransportError) as excinfo:
        api.fetch_anything().send()

    assert isinstance(excinfo.value.__cause__, ValueError)
    assert api.event_names == ["before_send", "exception"]
    assert api.events[-1][2] is excinfo.value


def test_transport_creation_failure_returns_none_without_rethrow():
    api = BrokenTransportApi(rethrow=False)

    assert api.fetch_anything().send() is None
    assert api.event_names == ["before_send", "exception"]
    assert isinstance(api.events[-1][2], TransportError)


def test_request_subclass_can_override_endpoint_computation():
    class FixedEndpointRequest(ApiRequest):
        def computed_endpoint(self) -> str:
            return "/fixed"

    transport = StubTransport(default=json_response())
    api = RecordingApi(transport)
    request = FixedEndpointRequest(api=api, response_type=AnythingResponse, endpoint="/{ignored}", method=api.fetch_anything().method)

    request.send()

    assert transport.requests[0].url == "https://httpbin.org/fixed"


def test_send_async_matches_send():
    transport = StubTransport({ANYTHING_URL: json_response(202)})
    api = RecordingApi(transport)
    request = api.fetch_anything()

    future = request.send_async()
    async_result = future.result(timeout=5)
    sync_result = request.send()

    assert isinstance(future, Future)
    assert async_result == sync_result
    assert async_result.http_status_code == sync_result.http_status_code == 202


def test_send_async_completes_with_exception():
    transport = StubTransport({ANYTHING_URL: TransportError("down")})
    api = RecordingApi(transport)

    future = api.fetch_anything().send_async()

    with pytest.raises(TransportError):
        future.result(timeout=5)
    assert api.event_names == ["before_send", "exception"]


def test_send_async_uses_api_scheduler():
    scheduled = []

    class InlineApi(RecordingApi):
        def run_async(self, work):
            scheduled.append(threading.current_thread())
            work()

    transport = StubTransport({ANYTHING_URL: json_response()})
    api = InlineApi(transport)

    future = api.fetch_anything().send_async()

    assert scheduled == [threading.current_thread()]
    assert future.done()
    assert future.result().url == "https://x"


def test_send_async_default_runs_on_new_thread():
    seen = []

    class ThreadRecordingApi(RecordingApi):
        def on_before_send(self, request):
            seen.append(threading.current_thread())

    transport = StubTransport({ANYTHING_URL: json_response()})
    api = ThreadRecordingApi(transport)

    api.fetch_anything().send_async().result(timeout=5)

    assert seen and seen[0] is not threading.current_thread()


def test_cancelled_future_skips_send():
    pending = []

    class DeferredApi(RecordingApi):
        def run_async(self, work):
            pending.append(work)

    transport = StubTransport({ANYTHING_URL: json_response()})
    api = DeferredApi(transport)

    future = api.fetch_anything().send_async()
    assert future.cancel() is True
    pending[0]()

    assert transport.calls == 0


def test_asend_awaits_result():
    transport = StubTransport({ANYTHING_URL: json_response()})
    api = RecordingApi(transport)
    request = api.fetch_anything()

    result = asyncio.run(request.asend())
    module_result = asyncio.run(engine.asend(request))

    assert result.url == "https://x"
    assert module_result == result


def test_build_http_request_uses_override_url():
    api = RecordingApi()
    request = ApiRequest.builder(api, AnythingResponse).with_url("https://other.example/v2/").with_endpoint("status").with_method("DELETE").build()

    http_request = engine.build_http_request(request)

    assert http_request.url == "https://other.example/v2/status"
    assert http_request.method == "DELETE"
