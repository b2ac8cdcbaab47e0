# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request methods."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .errors import ValidationError


@dataclass(frozen=True)
class RequestMethod:
    """
    An HTTP verb.

    The common verbs are available as class attributes; `RequestMethod.of()`
    accepts any other token the server understands.
    """

    name: str

    GET: ClassVar[RequestMethod]
    POST: ClassVar[RequestMethod]
    PUT: ClassVar[RequestMethod]
    PATCH: ClassVar[RequestMethod]
    DELETE: ClassVar[RequestMethod]
    HEAD: ClassVar[RequestMethod]
    OPTIONS: ClassVar[RequestMethod]

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError(f"Request method name must be a non-empty string, got {self.name!r}")
        if any(ch.isspace() for ch in self.name):
            raise ValidationError(f"Request method name must not contain whitespace: {self.name!r}")

    @classmethod
    def of(cls, name: str | RequestMethod) -> RequestMethod:
        """
        Return the method for `name`.

        Known verbs match case-insensitively and return the shared constant; any
        other name is sent exactly as given.
        """
        if isinstance(name, RequestMethod):
            return name
        if isinstance(name, str):
            known = _KNOWN_METHODS.get(name.upper())
            if known is not None:
                return known
        return cls(name)

    def __str__(self) -> str:
        return self.name


RequestMethod.GET = RequestMethod("GET")
RequestMethod.POST = RequestMethod("POST")
RequestMethod.PUT = RequestMethod("PUT")
RequestMethod.PATCH = RequestMethod("PATCH")
RequestMethod.DELETE = RequestMethod("DELETE")
RequestMethod.HEAD = RequestMethod("HEAD")
RequestMethod.OPTIONS = RequestMethod("OPTIONS")

_KNOWN_METHODS = {
    method.name: method
    for method in (
        RequestMethod.GET,
        RequestMethod.POST,
        RequestMethod.PUT,
        RequestMethod.PATCH,
        RequestMethod.DELETE,
        RequestMethod.HEAD,
        RequestMethod.OPTIONS,
    )
}

__all__ = ["RequestMethod"]
