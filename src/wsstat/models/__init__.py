# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for wsstat."""

from ..probe.models import ProbeOutcome, ProbeRequest, Result, TLSCertificate, TLSState
from .mode import Burst, JSONMessage, JSONMethod, MeasurementMode, Ping, Text
from .response import (
    AbsentResponse,
    ObjectResponse,
    RawResponse,
    Response,
    SequenceResponse,
)

__all__ = [
    "AbsentResponse",
    "Burst",
    "JSONMessage",
    "JSONMethod",
    "MeasurementMode",
    "ObjectResponse",
    "Ping",
    "ProbeOutcome",
    "ProbeRequest",
    "RawResponse",
    "Response",
    "Result",
    "SequenceResponse",
    "TLSCertificate",
    "TLSState",
    "Text",
]
