# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe client abstraction and factory."""

from typing import Protocol

from ..config import ProbeSettings, load_probe_settings
from .models import ProbeOutcome, ProbeRequest


class ProbeClient(Protocol):
    """Minimal protocol for instrumented WebSocket measurements.

    ``measure`` raises on transport failure; it never returns a partial outcome.
    """

    def measure(self, request: ProbeRequest) -> ProbeOutcome: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_probe_client(settings: ProbeSettings | None = None) -> ProbeClient:
    """Factory for the default websockets-backed client."""
    from .websockets_client import WebsocketsProbeClient

    return WebsocketsProbeClient(settings or load_probe_settings())
