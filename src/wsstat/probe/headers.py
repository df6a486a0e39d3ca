# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header parsing utilities.

Headers are kept in an ``httpx.Headers`` multimap: names are case-insensitive, insertion
order is preserved and a name may carry several values.
"""

from __future__ import annotations

from collections.abc import Iterable

import httpx

from ..errors import InputError


def parse_headers(spec: str | None) -> httpx.Headers:
    """
    Parse ``"name:value, name2:value2"`` into headers.

    Each segment is split on its first colon only, so values may contain colons.
    """
    if not spec or not spec.strip():
        return httpx.Headers()

    pairs: list[tuple[str, str]] = []
    for part in spec.split(","):
        name, sep, value = part.partition(":")
        name = name.strip()
        if not sep or not name:
            raise InputError(f"Invalid header format: {part!r}")
        pairs.append((name, value.strip()))
    return httpx.Headers(pairs)


def header_pairs(headers: httpx.Headers | None) -> list[tuple[str, str]]:
    """Return (name, value) pairs keeping the original name casing."""
    if not headers:
        return []
    encoding = headers.encoding
    return [(key.decode(encoding), value.decode(encoding)) for key, value in headers.raw]


def grouped_headers(headers: httpx.Headers | None) -> list[tuple[str, list[str]]]:
    """Group values by header name, in first-seen order."""
    groups: dict[str, tuple[str, list[str]]] = {}
    for name, value in header_pairs(headers):
        key = name.lower()
        if key not in groups:
            groups[key] = (name, [])
        groups[key][1].append(value)
    return list(groups.values())


def headers_from_pairs(pairs: Iterable[tuple[str, str]] | None) -> httpx.Headers:
    return httpx.Headers(list(pairs or []))


__all__ = ["grouped_headers", "header_pairs", "headers_from_pairs", "parse_headers"]
