# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe client exports."""

from .adapters import StubProbeClient
from .client import ProbeClient, create_default_probe_client
from .headers import grouped_headers, header_pairs, parse_headers
from .models import ProbeOutcome, ProbeRequest, Result, TLSCertificate, TLSState
from .url import INSECURE_SCHEME, SECURE_SCHEME, Target, parse_ws_uri
from .websockets_client import WebsocketsProbeClient

__all__ = [
    "INSECURE_SCHEME",
    "SECURE_SCHEME",
    "ProbeClient",
    "ProbeOutcome",
    "ProbeRequest",
    "Result",
    "StubProbeClient",
    "TLSCertificate",
    "TLSState",
    "Target",
    "WebsocketsProbeClient",
    "create_default_probe_client",
    "grouped_headers",
    "header_pairs",
    "parse_headers",
    "parse_ws_uri",
]
