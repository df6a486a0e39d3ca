# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""websockets-backed ProbeClient implementation."""

from __future__ import annotations

import logging
import socket
import ssl
import time
from datetime import timedelta

from websockets.sync.client import ClientConnection, connect

from ..config import ProbeSettings, load_probe_settings
from ..errors import HandshakeMismatchError, ProbeError
from .client import ProbeClient
from .headers import header_pairs, headers_from_pairs
from .models import Frame, ProbeOutcome, ProbeRequest, Result, TLSCertificate, TLSState
from .url import Target, parse_ws_uri

logger = logging.getLogger(__name__)

# OpenSSL reasons reported when the peer answers a ClientHello with plaintext.
_PLAINTEXT_PEER_REASONS = {
    "WRONG_VERSION_NUMBER",
    "RECORD_LAYER_FAILURE",
    "UNKNOWN_PROTOCOL",
    "PACKET_LENGTH_TOO_LONG",
    "HTTP_REQUEST",
}


class _EstablishedTLS:
    """Stands in for an SSLContext when the socket handed to websockets already speaks TLS."""

    def wrap_socket(self, sock: socket.socket, server_hostname: str | None = None) -> socket.socket:  # noqa: ARG002
        return sock


def _elapsed(start: float, end: float) -> timedelta:
    return timedelta(seconds=max(0.0, end - start))


def _format_name(rdns: tuple) -> str:
    parts = []
    for rdn in rdns or ():
        for key, value in rdn:
            parts.append(f"{key}={value}")
    return ", ".join(parts)


def _tls_state(sock: ssl.SSLSocket) -> TLSState:
    cipher = sock.cipher()
    peer = sock.getpeercert() or {}
    certificates: tuple[TLSCertificate, ...] = ()
    if peer:
        certificates = (
            TLSCertificate(
                subject=_format_name(peer.get("subject", ())),
                issuer=_format_name(peer.get("issuer", ())),
                not_before=str(peer.get("notBefore", "")),
                not_after=str(peer.get("notAfter", "")),
            ),
        )
    return TLSState(
        version=sock.version() or "unknown",
        cipher_suite=cipher[0] if cipher else "unknown",
        peer_certificates=certificates,
    )


class WebsocketsProbeClient(ProbeClient):
    """
    Synchronous probe built on ``socket``/``ssl`` and the websockets sync client.

    DNS, TCP and TLS are driven by hand so each transition can be timestamped; the prepared
    socket is then handed to websockets for the upgrade handshake and the message exchange.
    """

    def __init__(self, settings: ProbeSettings | None = None, ssl_context: ssl.SSLContext | None = None):
        self.settings = settings or load_probe_settings()
        self._ssl_context = ssl_context

    def _tls_context(self) -> ssl.SSLContext:
        if self._ssl_context is not None:
            return self._ssl_context
        context = ssl.create_default_context()
        if not self.settings.verify_ssl:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context

    def _resolve(self, target: Target) -> list[tuple]:
        try:
            infos = socket.getaddrinfo(target.host, target.port, type=socket.SOCK_STREAM)
        except socket.gaierror as exc:
            raise ProbeError(f"DNS resolution failed for {target.host}: {exc}") from exc
        if not infos:
            raise ProbeError(f"No addresses found for {target.host}")
        return infos

    def _connect(self, infos: list[tuple]) -> socket.socket:
        last_error: OSError | None = None
        for family, socktype, proto, _, sockaddr in infos:
            sock = socket.socket(family, socktype, proto)
            sock.settimeout(self.settings.timeout)
            try:
                sock.connect(sockaddr)
                return sock
            except OSError as exc:
                sock.close()
                last_error = exc
                logger.debug("TCP connect to %s failed: %s", sockaddr[0], exc)
        if last_error is None:
            raise ProbeError("No usable address to connect to")
        raise last_error

    def _handshake_tls(self, sock: socket.socket, server_hostname: str) -> ssl.SSLSocket:
        try:
            return self._tls_context().wrap_socket(sock, server_hostname=server_hostname)
        except OSError as exc:
            sock.close()
            # A plaintext WebSocket server hangs up on the ClientHello instead of answering it.
            if isinstance(exc, ssl.SSLEOFError) or (
                isinstance(exc, ssl.SSLError) and getattr(exc, "reason", None) in _PLAINTEXT_PEER_REASONS
            ):
                raise HandshakeMismatchError(str(exc)) from exc
            raise

    def _open(self, target: Target, sock: socket.socket, request: ProbeRequest) -> ClientConnection:
        sock.settimeout(None)
        return connect(
            target.url,
            sock=sock,
            ssl=_EstablishedTLS() if target.secure else None,
            additional_headers=header_pairs(request.headers),
            user_agent_header=self.settings.user_agent,
            compression="deflate" if self.settings.compression else None,
            open_timeout=self.settings.timeout,
            ping_interval=None,
        )

    def _exchange(self, ws: ClientConnection, request: ProbeRequest) -> list[Frame]:
        frames: list[Frame] = []
        if not request.messages:
            for _ in range(max(1, request.ping_count)):
                pong = ws.ping()
                if not pong.wait(self.settings.timeout):
                    raise TimeoutError("timed out waiting for pong")
            return frames
        for message in request.messages:
            ws.send(message)
            frames.append(ws.recv(timeout=self.settings.timeout))
        return frames

    def measure(self, request: ProbeRequest) -> ProbeOutcome:
        target = parse_ws_uri(request.url)

        start = time.perf_counter()
        infos = self._resolve(target)
        dns_done = time.perf_counter()
        ips = tuple(dict.fromkeys(str(info[4][0]) for info in infos))
        logger.debug("Resolved %s to %s", target.host, ", ".join(ips))

        sock = self._connect(infos)
        tcp_done = time.perf_counter()

        ws_start = tcp_done
        tls_handshake: timedelta | None = None
        tls_state: TLSState | None = None
        if target.secure:
            sock = self._handshake_tls(sock, target.host)
            ws_start = time.perf_counter()
            tls_handshake = _elapsed(tcp_done, ws_start)
            tls_state = _tls_state(sock)

        try:
            ws = self._open(target, sock, request)
        except Exception:
            sock.close()
            raise
        ws_done = time.perf_counter()

        try:
            frames = self._exchange(ws, request)
            messages_done = time.perf_counter()
        finally:
            ws.close()

        result = Result(
            url=target.url,
            dns_lookup=_elapsed(start, dns_done),
            tcp_connection=_elapsed(dns_done, tcp_done),
            tls_handshake=tls_handshake,
            ws_handshake=_elapsed(ws_start, ws_done),
            message_rtt=_elapsed(ws_done, messages_done),
            message_count=request.message_count,
            ips=ips,
            tls_state=tls_state,
            request_headers=headers_from_pairs(ws.request.headers.raw_items() if ws.request else None),
            response_headers=headers_from_pairs(ws.response.headers.raw_items() if ws.response else None),
        )
        logger.debug("Measured %s in %s", target.url, result.total_time)
        return ProbeOutcome(result=result, frames=tuple(frames))

    def close(self) -> None:
        return None
