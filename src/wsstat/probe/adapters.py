# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Adapters implementing the ProbeClient protocol without touching the network."""

from __future__ import annotations

from .client import ProbeClient
from .models import ProbeOutcome, ProbeRequest


class StubProbeClient(ProbeClient):
    """Deterministic, programmable ProbeClient for tests."""

    def __init__(self, outcome: ProbeOutcome | None = None, error: BaseException | None = None):
        self._outcome = outcome
        self._error = error
        self.requests: list[ProbeRequest] = []
        self.closed = False

    def measure(self, request: ProbeRequest) -> ProbeOutcome:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        if self._outcome is None:
            raise RuntimeError("No stubbed outcome configured")
        return self._outcome

    def close(self) -> None:
        self.closed = True
