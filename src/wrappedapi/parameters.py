# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Immutable key/value parts of a request: path parameters, queries and headers."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ValidationError


def _require_str(owner: str, field_name: str, value: object) -> None:
    if value is None:
        raise ValidationError(f"{owner}.{field_name} must not be None")
    if not isinstance(value, str):
        raise ValidationError(f"{owner}.{field_name} must be a string, got {type(value).__name__}")


@dataclass(frozen=True)
class PathParameter:
    """Replacement for the `{id}` token of an endpoint template."""

    id: str
    replacement: str

    def __post_init__(self) -> None:
        _require_str("PathParameter", "id", self.id)
        _require_str("PathParameter", "replacement", self.replacement)
        if "{" in self.id or "}" in self.id:
            raise ValidationError(f"PathParameter id must not contain braces: {self.id!r}")

    @classmethod
    def of(cls, id: str, replacement: str) -> PathParameter:  # noqa: A002
        return cls(id, replacement)

    @property
    def token(self) -> str:
        return "{" + self.id + "}"

    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True)
class QueryParameter:
    """A `name=value` pair appended to the endpoint. Values are sent as given."""

    name: str
    value: str

    def __post_init__(self) -> None:
        _require_str("QueryParameter", "name", self.name)
        _require_str("QueryParameter", "value", self.value)

    @classmethod
    def of(cls, name: str, value: str) -> QueryParameter:
        return cls(name, value)

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


@dataclass(frozen=True)
class Header:
    key: str
    value: str

    def __post_init__(self) -> None:
        _require_str("Header", "key", self.key)
        _require_str("Header", "value", self.value)

    @classmethod
    def of(cls, key: str, value: str) -> Header:
        return cls(key, value)

    @classmethod
    def content_type(cls, value: str) -> Header:
        """Shortcut for a `Content-Type` header."""
        return cls("Content-Type", value)

    def as_tuple(self) -> tuple[str, str]:
        return (self.key, self.value)


__all__ = ["Header", "PathParameter", "QueryParameter"]
