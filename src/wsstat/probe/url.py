# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""WebSocket URI resolution."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from ..errors import InputError

SECURE_SCHEME = "wss"
INSECURE_SCHEME = "ws"
_DEFAULT_PORTS = {SECURE_SCHEME: 443, INSECURE_SCHEME: 80}


@dataclass(frozen=True)
class Target:
    """A resolved WebSocket URL."""

    url: str
    scheme: str
    host: str
    port: int
    path: str = "/"

    @property
    def secure(self) -> bool:
        return self.scheme == SECURE_SCHEME

    def __str__(self) -> str:
        return self.url


def parse_ws_uri(raw_uri: str, *, insecure: bool = False) -> Target:
    """
    Parse user input into a Target.

    A bare host (no ``://``) gets ``wss://`` prepended, or ``ws://`` when ``insecure`` is set.
    """
    raw = str(raw_uri or "").strip()
    if not raw:
        raise InputError("Error parsing input URI: empty target")

    if "://" not in raw:
        scheme = INSECURE_SCHEME if insecure else SECURE_SCHEME
        raw = f"{scheme}://{raw}"

    try:
        parts = urlsplit(raw)
        port = parts.port
    except ValueError as exc:
        raise InputError(f"Error parsing input URI: {exc}") from exc

    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS:
        raise InputError(f"Error parsing input URI: unsupported scheme '{parts.scheme}', expected ws or wss")
    if not parts.hostname:
        raise InputError(f"Error parsing input URI: missing host in '{raw}'")

    path = parts.path or "/"
    if parts.query:
        path = f"{path}?{parts.query}"

    return Target(
        url=raw,
        scheme=scheme,
        host=parts.hostname,
        port=port or _DEFAULT_PORTS[scheme],
        path=path,
    )


__all__ = ["INSECURE_SCHEME", "SECURE_SCHEME", "Target", "parse_ws_uri"]
