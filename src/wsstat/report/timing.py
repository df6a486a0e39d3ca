# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Timing report rendering.

The tiered diagram has a duration row (how long each phase took) above a staircase of
"done" markers (when, measured from t=0, each phase finished). Durations are truncated to
whole milliseconds once and the markers are running sums of those numbers, so the figures
on screen always add up: each duration plus the previous marker equals the next marker.
"""

from __future__ import annotations

from datetime import timedelta
from itertools import accumulate

from ..measure.selector import SINGLE_LABELS, TimingLabels
from ..probe.models import Result
from ..probe.url import SECURE_SCHEME
from .colors import Colors

MILLISECOND = timedelta(milliseconds=1)

WSS_TEMPLATE = (
    "  DNS Lookup    TCP Connection    TLS Handshake    WS Handshake    {rtt_header}\n"
    "|{dns}  |      {tcp}  |     {tls}  |    {ws}  |   {rtt}  |\n"
    "|           |                 |                |               |              |\n"
    "|  DNS lookup:{dns_done}        |                |               |              |\n"
    "|                 TCP connected:{tcp_done}       |               |              |\n"
    "|                                       TLS done:{tls_done}      |              |\n"
    "|                                                        WS done:{ws_done}     |\n"
    "-                                                                         Total:{total}\n"
)

WS_TEMPLATE = (
    "  DNS Lookup    TCP Connection    WS Handshake    {rtt_header}\n"
    "|{dns}  |      {tcp}  |    {ws}  |  {rtt}   |\n"
    "|           |                 |               |              |\n"
    "|  DNS lookup:{dns_done}        |               |              |\n"
    "|                 TCP connected:{tcp_done}      |              |\n"
    "|                                       WS done:{ws_done}     |\n"
    "-                                                        Total:{total}\n"
)


def to_ms(duration: timedelta | None) -> int:
    if duration is None:
        return 0
    return int(duration / MILLISECOND)


def format_pad_left(ms: int) -> str:
    return f"{ms:7d}ms"


def format_pad_right(ms: int) -> str:
    return f"{str(ms) + 'ms':<8}"


def timeline(result: Result) -> list[tuple[str, int, int]]:
    """(phase, duration ms, done-at ms) for each phase of ``result``, in order."""
    phases = result.phases()
    names = [name for name, _ in phases]
    durations = [to_ms(duration) for _, duration in phases]
    return list(zip(names, durations, accumulate(durations)))


def render_timing(
    result: Result,
    scheme: str,
    *,
    labels: TimingLabels = SINGLE_LABELS,
    colors: Colors | None = None,
) -> str:
    """Render the tiered timing diagram for a secure (``wss``) or insecure (``ws``) target."""
    colors = colors or Colors()
    rows = {name: (duration, done) for name, duration, done in timeline(result)}
    secure = scheme == SECURE_SCHEME

    rtt_ms = rows["message_rtt"][0]
    if labels.burst:
        rtt_ms = to_ms(result.mean_message_rtt)

    values = {
        "rtt_header": labels.rtt_header,
        "dns": colors.tea_green(format_pad_left(rows["dns_lookup"][0])),
        "tcp": colors.tea_green(format_pad_left(rows["tcp_connection"][0])),
        "ws": colors.tea_green(format_pad_left(rows["ws_handshake"][0])),
        "rtt": colors.tea_green(format_pad_left(rtt_ms)),
        "dns_done": colors.tea_green(format_pad_right(rows["dns_lookup"][1])),
        "tcp_done": colors.tea_green(format_pad_right(rows["tcp_connection"][1])),
        "ws_done": colors.tea_green(format_pad_right(rows["ws_handshake"][1])),
        "total": colors.ws_orange(format_pad_right(rows["message_rtt"][1])),
    }
    if secure:
        tls_ms, tls_done = rows.get("tls_handshake", (0, rows["tcp_connection"][1]))
        values["tls"] = colors.tea_green(format_pad_left(tls_ms))
        values["tls_done"] = colors.tea_green(format_pad_right(tls_done))
        body = WSS_TEMPLATE.format(**values)
    else:
        body = WS_TEMPLATE.format(**values)

    text = "\n" + body
    if labels.burst:
        text += f"Messages sent: {colors.ws_orange(str(labels.message_count))}\n"
        text += f"Total covers all {labels.message_count} messages; the RTT column shows the mean per message.\n"
    return text + "\n"


def render_basic_timing(result: Result, *, labels: TimingLabels = SINGLE_LABELS, colors: Colors | None = None) -> str:
    colors = colors or Colors()
    total_ms = timeline(result)[-1][2]
    lines = ["", f"Total time: {colors.ws_orange(f'{total_ms}ms')}"]
    if labels.burst:
        lines.append(f"{labels.rtt_summary}: {colors.ws_orange(f'{to_ms(result.mean_message_rtt)}ms')}")
        lines.append(f"Messages sent: {colors.ws_orange(str(labels.message_count))}")
    lines.append("")
    return "\n".join(lines) + "\n"


__all__ = [
    "WSS_TEMPLATE",
    "WS_TEMPLATE",
    "format_pad_left",
    "format_pad_right",
    "render_basic_timing",
    "render_timing",
    "timeline",
    "to_ms",
]
