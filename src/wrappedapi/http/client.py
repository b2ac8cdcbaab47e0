# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and factory."""

from typing import Protocol

from ..config import ApiSettings, load_api_settings
from .bodies import BodyReader
from .models import HttpRequest, HttpResponse


class Transport(Protocol):
    """Minimal protocol for delivering a request and reading its response."""

    def send(self, request: HttpRequest, reader: BodyReader) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_transport(settings: ApiSettings | None = None) -> Transport:
    """Factory for the default httpx-backed transport."""
    from .httpx_client import HttpxTransport

    return HttpxTransport(settings or load_api_settings())
