# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request body writers and response body readers.

A body writer is a zero-argument callable producing the request payload; it is
only invoked when the wire request is built. A body reader turns the raw bytes
of a response (plus the charset the transport detected) into the value exposed
as `HttpResponse.body`.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

BodyWriter = Callable[[], bytes]
BodyReader = Callable[[bytes, "str | None"], Any]


def _empty_body() -> bytes:
    return b""


def no_body() -> BodyWriter:
    """Writer for requests without a payload."""
    return _empty_body


def of_bytes(data: bytes | bytearray | memoryview) -> BodyWriter:
    payload = bytes(data)

    def write() -> bytes:
        return payload

    return write


def of_string(text: str, encoding: str = "utf-8") -> BodyWriter:
    def write() -> bytes:
        return text.encode(encoding)

    return write


def of_json(payload: Any, **dumps_kwargs: Any) -> BodyWriter:
    """Writer serializing `payload` with `json.dumps` when the request is built."""

    def write() -> bytes:
        return json.dumps(payload, **dumps_kwargs).encode("utf-8")

    return write


def _read_text(content: bytes, encoding: str | None) -> str:
    try:
        return content.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")


def _read_bytes(content: bytes, encoding: str | None) -> bytes:  # noqa: ARG001
    return content


def _discard(content: bytes, encoding: str | None) -> None:  # noqa: ARG001
    return None


def as_text() -> BodyReader:
    """Reader exposing the whole body as text (the default)."""
    return _read_text


def as_bytes() -> BodyReader:
    return _read_bytes


def discarding() -> BodyReader:
    return _discard


__all__ = [
    "BodyReader",
    "BodyWriter",
    "as_bytes",
    "as_text",
    "discarding",
    "no_body",
    "of_bytes",
    "of_json",
    "of_string",
]
