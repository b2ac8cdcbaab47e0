# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory Transport implementations."""

from __future__ import annotations

from collections.abc import Callable

from ..errors import TransportError
from .bodies import BodyReader
from .client import Transport
from .models import HttpRequest, HttpResponse

StubResult = HttpResponse | BaseException | Callable[[HttpRequest], HttpResponse]


class StubTransport(Transport):
    """
    Deterministic, programmable Transport for tests.

    Responses are keyed by URL. A stubbed exception is raised instead of
    answering; a callable is invoked with the request. The response body is run
    through the request's reader, starting from the stub's `content`, unless the
    stub already carries a body.
    """

    def __init__(self, responses: dict[str, StubResult] | None = None, default: StubResult | None = None):
        self._responses: dict[str, StubResult] = dict(responses or {})
        self._default = default
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: StubResult) -> None:
        self._responses[url] = response

    @property
    def calls(self) -> int:
        return len(self.requests)

    def send(self, request: HttpRequest, reader: BodyReader) -> HttpResponse:
        self.requests.append(request)
        stub = self._responses.get(request.url, self._default)
        if stub is None:
            raise TransportError(f"No stubbed response configured for {request.url}")
        if isinstance(stub, BaseException):
            raise stub
        response = stub(request) if callable(stub) else stub
        body = response.body if response.body is not None else reader(response.content, "utf-8")
        return HttpResponse(
            status_code=response.status_code,
            body=body,
            headers=response.headers,
            content=response.content,
            url=response.url or request.url,
            request=request,
            meta=dict(response.meta),
        )

    def close(self) -> None:
        self.closed = True
