# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header lookup utilities.

HTTP header field names are case-insensitive (RFC 9110). Requests keep headers as
ordered `(key, value)` pairs so duplicates survive; these helpers read them
without caring about key casing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def _iter_pairs(headers: Mapping[str, str] | Iterable[tuple[str, str]] | None) -> Iterable[tuple[str, str]]:
    if not headers:
        return ()
    items = getattr(headers, "multi_items", None)
    if callable(items):
        return items()
    if isinstance(headers, Mapping):
        return headers.items()
    return headers


def header_values(headers: Mapping[str, str] | Iterable[tuple[str, str]] | None, name: str) -> list[str]:
    """Return every value sent for `name`, in order."""
    if not name:
        return []
    lower = name.lower()
    return [str(value) for key, value in _iter_pairs(headers) if key is not None and str(key).lower() == lower]


def header_value(headers: Mapping[str, str] | Iterable[tuple[str, str]] | None, name: str, default: str = "") -> str:
    """
    Return the last value for `name` using case-insensitive key matching.

    The last occurrence wins, mirroring how most servers treat repeated headers.
    """
    values = header_values(headers, name)
    if not values:
        return default
    return values[-1].strip()


def has_header(headers: Mapping[str, str] | Iterable[tuple[str, str]] | None, name: str) -> bool:
    return bool(header_values(headers, name))


__all__ = ["has_header", "header_value", "header_values"]
