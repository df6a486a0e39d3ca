# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Measurement invoker: one probe call per invocation, normalized to a single triple."""

from __future__ import annotations

import logging
from typing import NamedTuple

import httpx

from ..errors import categorize_exception
from ..models.mode import MeasurementMode, Ping, unwrap
from ..models.response import AbsentResponse, Response, decode_frames
from ..probe.client import ProbeClient
from ..probe.models import ProbeRequest, Result
from ..probe.url import Target

logger = logging.getLogger(__name__)


class Measurement(NamedTuple):
    result: Result | None
    response: Response | None
    error: BaseException | None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_probe_request(target: Target, headers: httpx.Headers, mode: MeasurementMode) -> ProbeRequest:
    inner, count = unwrap(mode)
    if isinstance(inner, Ping):
        return ProbeRequest(url=target.url, headers=headers, ping_count=count)
    payload = inner.payload()
    return ProbeRequest(url=target.url, headers=headers, messages=tuple(payload for _ in range(count)))


class MeasurementInvoker:
    """Dispatches a measurement mode to a ProbeClient."""

    def __init__(self, client: ProbeClient):
        self.client = client

    def invoke(self, target: Target, headers: httpx.Headers, mode: MeasurementMode) -> Measurement:
        request = build_probe_request(target, headers, mode)
        logger.debug("Probing %s with %s (%d message(s))", target.url, type(mode).__name__, request.message_count)
        try:
            outcome = self.client.measure(request)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Probe of %s failed (%s): %s", target.url, categorize_exception(exc).value, exc)
            return Measurement(result=None, response=None, error=exc)

        inner, _ = unwrap(mode)
        response: Response = AbsentResponse() if isinstance(inner, Ping) else decode_frames(outcome.frames)
        return Measurement(result=outcome.result, response=response, error=None)


__all__ = ["Measurement", "MeasurementInvoker", "build_probe_request"]
