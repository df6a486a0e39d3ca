# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Measurement modes: what gets sent to the target and how often."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Union

JSONRPC_VERSION = "2.0"
JSONRPC_DEFAULT_ID = "1"


@dataclass(frozen=True)
class Ping:
    """Ping/pong round-trip with no application payload."""

    def payload(self) -> str | None:
        return None


@dataclass(frozen=True)
class Text:
    message: str

    def payload(self) -> str | None:
        return self.message


@dataclass(frozen=True)
class JSONMessage:
    """A caller-supplied JSON object, typically a full JSON-RPC request."""

    body: dict[str, Any] = field(hash=False)

    def payload(self) -> str | None:
        return json.dumps(self.body)


@dataclass(frozen=True)
class JSONMethod:
    """A JSON-RPC request for ``method`` without params."""

    method: str

    def envelope(self) -> dict[str, str]:
        return {"method": self.method, "id": JSONRPC_DEFAULT_ID, "jsonrpc": JSONRPC_VERSION}

    def payload(self) -> str | None:
        return json.dumps(self.envelope())


SingleMode = Union[Ping, Text, JSONMessage, JSONMethod]


@dataclass(frozen=True)
class Burst:
    """Repeat ``inner`` ``count`` times within one connection."""

    count: int
    inner: SingleMode

    def payload(self) -> str | None:
        return self.inner.payload()


MeasurementMode = Union[Ping, Text, JSONMessage, JSONMethod, Burst]


def unwrap(mode: MeasurementMode) -> tuple[SingleMode, int]:
    """Return the single-probe mode and how many times it runs."""
    if isinstance(mode, Burst):
        return mode.inner, mode.count
    return mode, 1


def is_json_mode(mode: MeasurementMode) -> bool:
    inner, _ = unwrap(mode)
    return isinstance(inner, (JSONMessage, JSONMethod))


def expects_response(mode: MeasurementMode) -> bool:
    inner, _ = unwrap(mode)
    return not isinstance(inner, Ping)


__all__ = [
    "Burst",
    "JSONMessage",
    "JSONMethod",
    "MeasurementMode",
    "Ping",
    "SingleMode",
    "Text",
    "expects_response",
    "is_json_mode",
    "unwrap",
]
