# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import ApiSettings, load_api_settings
from ..errors import TransportError
from .bodies import BodyReader
from .client import Transport
from .headers import has_header
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """Synchronous httpx client wrapper."""

    def __init__(self, settings: ApiSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_api_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def send(self, request: HttpRequest, reader: BodyReader) -> HttpResponse:
        headers = list(request.headers)
        if not has_header(headers, "User-Agent"):
            headers.append(("User-Agent", self.settings.user_agent))

        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=headers,
                content=request.body or None,
                timeout=timeout,
            )
        except httpx.HTTPError as exc:
            logger.debug("Transport failure for %s %s: %s", request.method, request.url, exc)
            raise TransportError.wrap(exc, request.url) from exc

        content = resp.content
        return HttpResponse(
            status_code=resp.status_code,
            body=reader(content, resp.encoding),
            headers=tuple(resp.headers.multi_items()),
            content=content,
            url=str(resp.url),
            request=request,
            meta={"http_version": resp.http_version},
        )

    def close(self) -> None:
        self._client.close()
