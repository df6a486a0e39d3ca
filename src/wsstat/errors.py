# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

from websockets.exceptions import InvalidHandshake

# Diagnostics emitted when a TLS client talks to a plaintext peer. Only consulted for
# probe backends that do not raise HandshakeMismatchError themselves.
_TLS_MISMATCH_MARKERS = (
    "first record does not look like a TLS handshake",
    "wrong version number",
)


class ErrorCategory(str, Enum):
    INPUT_ERROR = "INPUT_ERROR"
    TLS_EXPECTED_BUT_ABSENT = "TLS_EXPECTED_BUT_ABSENT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    SSL_ERROR = "SSL_ERROR"
    TIMEOUT = "TIMEOUT"
    HANDSHAKE_ERROR = "HANDSHAKE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class WSStatError(Exception):
    """Base class for errors surfaced to the user."""

    category = ErrorCategory.UNKNOWN_ERROR
    exit_code = 1


class InputError(WSStatError):
    """Invalid arguments; always raised before any network activity."""

    category = ErrorCategory.INPUT_ERROR
    exit_code = 2


class WSConnectionError(WSStatError):
    """The target could not be reached or the WebSocket session failed."""

    category = ErrorCategory.CONNECTION_ERROR

    def __init__(self, url: str, cause: BaseException | str):
        self.url = url
        self.cause = cause
        super().__init__(f"Error establishing WS connection to '{url}': {cause}")


class TLSExpectedButAbsentError(WSConnectionError):
    """A secure connection was attempted but the peer did not speak TLS."""

    category = ErrorCategory.TLS_EXPECTED_BUT_ABSENT

    def __str__(self) -> str:
        return (
            f"{super().__str__()}\n\n"
            "Is the target server using a secure WS connection? If not, use the '-insecure' flag "
            "or specify the correct scheme in the input."
        )


class InternalError(WSStatError):
    category = ErrorCategory.INTERNAL_ERROR


class ProbeError(Exception):
    """Transport-level failure raised by probe backends."""


class HandshakeMismatchError(ProbeError):
    """The first bytes from the peer were not a TLS handshake record."""


def _looks_like_tls_mismatch(exc: BaseException) -> bool:
    message = str(exc).lower()
    return any(marker.lower() in message for marker in _TLS_MISMATCH_MARKERS)


def classify_connection_error(exc: BaseException, url: str) -> WSConnectionError:
    """Rewrap a raw probe failure into a user-facing connection error."""
    if isinstance(exc, WSConnectionError):
        return exc
    if isinstance(exc, HandshakeMismatchError) or _looks_like_tls_mismatch(exc):
        return TLSExpectedButAbsentError(url, exc)
    return WSConnectionError(url, exc)


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/websockets exceptions to ErrorCategory.
    """
    if isinstance(exc, WSStatError):
        return exc.category

    if isinstance(exc, HandshakeMismatchError):
        return ErrorCategory.TLS_EXPECTED_BUT_ABSENT

    if isinstance(exc, ProbeError) and exc.__cause__ is not None:
        return categorize_exception(exc.__cause__)

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (TimeoutError, socket.timeout)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, InvalidHandshake):
        return ErrorCategory.HANDSHAKE_ERROR

    if isinstance(exc, (ConnectionError, OSError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.INPUT_ERROR: "Invalid input",
        ErrorCategory.TLS_EXPECTED_BUT_ABSENT: "Target did not answer with TLS",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.TIMEOUT: "Network timeout during probe",
        ErrorCategory.HANDSHAKE_ERROR: "WebSocket upgrade rejected",
        ErrorCategory.INTERNAL_ERROR: "Internal error",
        ErrorCategory.UNKNOWN_ERROR: "Probe failed",
        None: "",
    }
    return mapping.get(category, "Probe failed")


__all__ = [
    "ErrorCategory",
    "HandshakeMismatchError",
    "InputError",
    "InternalError",
    "ProbeError",
    "TLSExpectedButAbsentError",
    "WSConnectionError",
    "WSStatError",
    "categorize_exception",
    "classify_connection_error",
    "error_category_to_reason",
]
