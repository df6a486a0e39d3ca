# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Mode selection and flag validation, all done before any network activity."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ..errors import InputError
from ..models.mode import Burst, JSONMessage, JSONMethod, MeasurementMode, Ping, SingleMode, Text, unwrap


@dataclass(frozen=True)
class TimingLabels:
    """Round-trip wording used by the timing renderers."""

    rtt_header: str = "Message RTT"
    rtt_summary: str = "Message RTT"
    burst: bool = False
    message_count: int = 1


SINGLE_LABELS = TimingLabels()


def validate_verbosity(basic: bool = False, verbose: bool = False, quiet: bool = False) -> None:
    if sum(bool(flag) for flag in (basic, verbose, quiet)) > 1:
        raise InputError("The basic, verbose and quiet flags are mutually exclusive, choose one.")


def _parse_json_message(raw: str) -> dict[str, Any]:
    try:
        decoded = json.loads(raw)
    except ValueError as exc:
        raise InputError(f"Error unmarshalling JSON message: {exc}") from exc
    if not isinstance(decoded, dict):
        raise InputError("Error unmarshalling JSON message: expected a JSON object")
    return decoded


def select_mode(
    *,
    text: str | None = None,
    json_message: str | None = None,
    method: str | None = None,
    burst: int = 1,
) -> MeasurementMode:
    """Pick the measurement mode from the message flags and the burst count."""
    chosen = [value for value in (text, json_message, method) if value]
    if len(chosen) > 1:
        raise InputError("The message options are mutually exclusive, choose one.")
    if isinstance(burst, bool) or not isinstance(burst, int) or burst < 1:
        raise InputError(f"The burst count must be a positive integer, got {burst!r}.")

    inner: SingleMode
    if text:
        inner = Text(text)
    elif json_message:
        inner = JSONMessage(_parse_json_message(json_message))
    elif method:
        inner = JSONMethod(method)
    else:
        inner = Ping()

    if burst > 1:
        return Burst(count=burst, inner=inner)
    return inner


def timing_labels(mode: MeasurementMode) -> TimingLabels:
    _, count = unwrap(mode)
    if count > 1:
        return TimingLabels(
            rtt_header="Mean Message RTT",
            rtt_summary="Mean message RTT",
            burst=True,
            message_count=count,
        )
    return SINGLE_LABELS


__all__ = ["SINGLE_LABELS", "TimingLabels", "select_mode", "timing_labels", "validate_verbosity"]
