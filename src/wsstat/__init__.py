# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
wsstat package entrypoint.

This package measures the latency of a WebSocket connection phase by phase (DNS lookup,
TCP connect, TLS handshake, WebSocket upgrade and message round-trip) and renders the
timings as a cumulative tiered diagram. Network instrumentation is abstracted behind an
injectable probe client interface, and domain objects are modeled with typed dataclasses.
"""

from .config import OutputOptions, ProbeSettings, load_probe_settings
from .errors import (
    ErrorCategory,
    InputError,
    InternalError,
    TLSExpectedButAbsentError,
    WSConnectionError,
    classify_connection_error,
)
from .log import setup_logging
from .measure import Measurement, MeasurementInvoker, select_mode
from .models import Burst, JSONMessage, JSONMethod, Ping, Result, Text
from .probe import (
    ProbeClient,
    ProbeRequest,
    StubProbeClient,
    Target,
    WebsocketsProbeClient,
    create_default_probe_client,
    parse_headers,
    parse_ws_uri,
)
from .report import build_report, render_timing
from .runtime import WSStat
from .version import __version__

__all__ = [
    "Burst",
    "ErrorCategory",
    "InputError",
    "InternalError",
    "JSONMessage",
    "JSONMethod",
    "Measurement",
    "MeasurementInvoker",
    "OutputOptions",
    "Ping",
    "ProbeClient",
    "ProbeRequest",
    "ProbeSettings",
    "Result",
    "StubProbeClient",
    "TLSExpectedButAbsentError",
    "Target",
    "Text",
    "WSConnectionError",
    "WSStat",
    "WebsocketsProbeClient",
    "build_report",
    "classify_connection_error",
    "create_default_probe_client",
    "load_probe_settings",
    "parse_headers",
    "parse_ws_uri",
    "render_timing",
    "select_mode",
    "setup_logging",
    "__version__",
]
