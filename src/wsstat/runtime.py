# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level wsstat facade for one-shot measurements."""

from __future__ import annotations

from contextlib import suppress

import httpx

from .config import ProbeSettings, load_probe_settings
from .measure.invoker import Measurement, MeasurementInvoker
from .models.mode import MeasurementMode, Ping
from .probe.client import ProbeClient, create_default_probe_client
from .probe.url import Target, parse_ws_uri


class WSStat:
    """
    Convenience wrapper that wires a probe client into the measurement invoker.

    Each ``measure`` call is independent: nothing is cached or reused between calls.
    """

    def __init__(self, probe_client: ProbeClient | None = None, settings: ProbeSettings | None = None):
        # Explicit settings, then the given client's own, then the environment.
        self.probe_settings = settings or getattr(probe_client, "settings", None) or load_probe_settings()
        self.probe_client = probe_client or create_default_probe_client(self.probe_settings)
        self.invoker = MeasurementInvoker(self.probe_client)

    def measure(
        self,
        target: Target | str,
        headers: httpx.Headers | None = None,
        mode: MeasurementMode | None = None,
        *,
        insecure: bool = False,
    ) -> Measurement:
        if not isinstance(target, Target):
            target = parse_ws_uri(target, insecure=insecure)
        return self.invoker.invoke(target, headers if headers is not None else httpx.Headers(), mode or Ping())

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.probe_client, "close"):
                self.probe_client.close()

    def __enter__(self) -> WSStat:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
