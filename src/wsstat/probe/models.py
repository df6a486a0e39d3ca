# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe request/result data models shared by backends and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

import httpx

ZERO = timedelta(0)

Frame = str | bytes


@dataclass(frozen=True)
class TLSCertificate:
    subject: str
    issuer: str
    not_before: str
    not_after: str


@dataclass(frozen=True)
class TLSState:
    """Negotiated TLS session metadata."""

    version: str
    cipher_suite: str
    peer_certificates: tuple[TLSCertificate, ...] = ()


@dataclass(frozen=True)
class ProbeRequest:
    """
    Normalized input consumed by ProbeClient implementations.

    ``messages`` are sent one after the other and each is awaited before the next one; when
    it is empty the backend sends ``ping_count`` pings instead.
    """

    url: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    messages: tuple[Frame, ...] = ()
    ping_count: int = 1

    @property
    def message_count(self) -> int:
        return len(self.messages) if self.messages else self.ping_count


@dataclass(frozen=True)
class Result:
    """
    Captured phase timings for one measurement.

    Only phase durations are stored; the cumulative "done" markers are derived from them so
    that every marker is the sum of the durations before it.
    """

    url: str
    dns_lookup: timedelta = ZERO
    tcp_connection: timedelta = ZERO
    tls_handshake: timedelta | None = None
    ws_handshake: timedelta = ZERO
    message_rtt: timedelta = ZERO
    message_count: int = 1
    ips: tuple[str, ...] = ()
    tls_state: TLSState | None = None
    request_headers: httpx.Headers = field(default_factory=httpx.Headers)
    response_headers: httpx.Headers = field(default_factory=httpx.Headers)

    @property
    def secure(self) -> bool:
        return self.tls_handshake is not None

    @property
    def dns_lookup_done(self) -> timedelta:
        return self.dns_lookup

    @property
    def tcp_connected(self) -> timedelta:
        return self.dns_lookup_done + self.tcp_connection

    @property
    def tls_handshake_done(self) -> timedelta:
        return self.tcp_connected + (self.tls_handshake or ZERO)

    @property
    def ws_handshake_done(self) -> timedelta:
        return self.tls_handshake_done + self.ws_handshake

    @property
    def total_time(self) -> timedelta:
        return self.ws_handshake_done + self.message_rtt

    @property
    def mean_message_rtt(self) -> timedelta:
        return self.message_rtt / max(1, self.message_count)

    def phases(self) -> list[tuple[str, timedelta]]:
        """Ordered (name, duration) pairs; the TLS phase only appears on secure connections."""
        phases = [("dns_lookup", self.dns_lookup), ("tcp_connection", self.tcp_connection)]
        if self.tls_handshake is not None:
            phases.append(("tls_handshake", self.tls_handshake))
        phases.append(("ws_handshake", self.ws_handshake))
        phases.append(("message_rtt", self.message_rtt))
        return phases


@dataclass(frozen=True)
class ProbeOutcome:
    """What a ProbeClient hands back: the timings plus the raw frames received, in order."""

    result: Result
    frames: tuple[Frame, ...] = ()
