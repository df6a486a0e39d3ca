# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import re
from datetime import timedelta

import httpx
import pytest

from wsstat.measure.selector import timing_labels
from wsstat.models.mode import Burst, Ping
from wsstat.probe.models import Result, TLSCertificate, TLSState
from wsstat.report.colors import PLAIN, Colors
from wsstat.report.details import render_request_details
from wsstat.report.timing import format_pad_left, format_pad_right, render_basic_timing, render_timing, timeline


def ms(value: float) -> timedelta:
    return timedelta(milliseconds=value)


def secure_result(**overrides) -> Result:
    fields = dict(
        url="wss://example.org",
        dns_lookup=ms(10),
        tcp_connection=ms(20),
        tls_handshake=ms(30),
        ws_handshake=ms(15),
        message_rtt=ms(5),
        ips=("93.184.216.34", "2606:2800:220:1:248:1893:25c8:1946"),
        tls_state=TLSState(
            version="TLSv1.3",
            cipher_suite="TLS_AES_256_GCM_SHA384",
            peer_certificates=(
                TLSCertificate(
                    subject="commonName=example.org",
                    issuer="commonName=Example CA",
                    not_before="Jan  1 00:00:00 2025 GMT",
                    not_after="Jan  1 00:00:00 2026 GMT",
                ),
            ),
        ),
        request_headers=httpx.Headers([("Host", "example.org"), ("Sec-WebSocket-Version", "13")]),
        response_headers=httpx.Headers([("Upgrade", "websocket"), ("Connection", "Upgrade")]),
    )
    fields.update(overrides)
    return Result(**fields)


def insecure_result(**overrides) -> Result:
    fields = dict(
        url="ws://x",
        dns_lookup=ms(1),
        tcp_connection=ms(2),
        ws_handshake=ms(3),
        message_rtt=ms(4),
        ips=("10.0.0.1",),
    )
    fields.update(overrides)
    return Result(**fields)


def test_cumulative_markers_are_sums_of_durations():
    result = secure_result()
    assert result.dns_lookup_done == ms(10)
    assert result.tcp_connected == ms(30)
    assert result.tls_handshake_done == ms(60)
    assert result.ws_handshake_done == ms(75)
    assert result.total_time == ms(80)
    assert sum((d for _, d in result.phases()), timedelta(0)) == result.total_time


def test_insecure_result_has_no_tls_phase():
    result = insecure_result()
    assert [name for name, _ in result.phases()] == ["dns_lookup", "tcp_connection", "ws_handshake", "message_rtt"]
    assert result.tls_handshake_done == result.tcp_connected
    assert result.total_time == ms(10)


def test_end_to_end_secure_markers_read_in_order():
    output = render_timing(secure_result(), "wss", colors=PLAIN)
    markers = ["DNS lookup:10ms", "TCP connected:30ms", "TLS done:60ms", "WS done:75ms", "Total:80ms"]
    positions = [output.index(marker) for marker in markers]
    assert positions == sorted(positions)
    assert "TLS Handshake" in output
    assert "Message RTT" in output
    assert "Mean" not in output


def test_duration_row_lists_each_phase():
    output = render_timing(secure_result(), "wss", colors=PLAIN)
    duration_row = output.splitlines()[2]
    assert [int(n) for n in re.findall(r"(\d+)ms", duration_row)] == [10, 20, 30, 15, 5]


def test_insecure_layout_omits_tls():
    output = render_timing(insecure_result(), "ws", colors=PLAIN)
    assert "TLS" not in output
    for marker in ["DNS lookup:1ms", "TCP connected:3ms", "WS done:6ms", "Total:10ms"]:
        assert marker in output


@pytest.mark.parametrize(
    "durations",
    [
        (10.6, 20.6, 30.6, 15.6, 5.6),
        (0.4, 0.4, 0.4, 0.4, 0.4),
        (123.9, 0.0, 999.99, 1.5, 42.42),
    ],
)
def test_displayed_durations_add_up_to_displayed_total(durations):
    dns, tcp, tls, ws, rtt = (ms(d) for d in durations)
    result = secure_result(dns_lookup=dns, tcp_connection=tcp, tls_handshake=tls, ws_handshake=ws, message_rtt=rtt)
    rows = timeline(result)
    running = 0
    for _, duration, done in rows:
        running += duration
        assert done == running

    output = render_timing(result, "wss", colors=PLAIN)
    total = int(re.search(r"Total:(\d+)ms", output).group(1))
    assert total == sum(duration for _, duration, _ in rows)


def test_burst_labels_switch_to_mean():
    mode = Burst(count=5, inner=Ping())
    result = secure_result(message_rtt=ms(50), message_count=5)
    output = render_timing(result, "wss", labels=timing_labels(mode), colors=PLAIN)
    assert "Mean Message RTT" in output
    assert "Messages sent: 5" in output
    assert "Total:125ms" in output
    duration_row = output.splitlines()[2]
    assert duration_row.rstrip().endswith("10ms  |")
    assert output.rstrip("\n").endswith("Total covers all 5 messages; the RTT column shows the mean per message.")
    assert "Total covers" not in render_timing(secure_result(), "wss", colors=PLAIN)

    basic = render_basic_timing(result, labels=timing_labels(mode), colors=PLAIN)
    assert "Total time: 125ms" in basic
    assert "Mean message RTT: 10ms" in basic
    assert "Messages sent: 5" in basic


def test_basic_timing_without_burst_only_prints_total():
    output = render_basic_timing(secure_result(), colors=PLAIN)
    assert output.strip() == "Total time: 80ms"


def test_rendering_is_idempotent():
    result = secure_result()
    assert render_timing(result, "wss") == render_timing(result, "wss")
    assert render_request_details(result, "verbose") == render_request_details(result, "verbose")


def test_colors_wrap_values_when_enabled():
    output = render_timing(secure_result(), "wss", colors=Colors(enabled=True))
    assert "\033[38;2;255;102;0m" in output
    assert "\033[38;2;211;249;181m" in output
    assert "\033[" not in render_timing(secure_result(), "wss", colors=PLAIN)


def test_padding_helpers():
    assert format_pad_left(42) == "     42ms"
    assert format_pad_right(42) == "42ms    "
    assert format_pad_right(123456789) == "123456789ms"


def test_request_details_levels():
    result = secure_result()

    basic = render_request_details(result, "basic", colors=PLAIN)
    assert "URL: example.org" in basic
    assert "IP:  93.184.216.34" in basic
    assert "2606" not in basic

    standard = render_request_details(result, "standard", colors=PLAIN)
    assert "Target: example.org" in standard
    assert "IP: 2606:2800:220:1:248:1893:25c8:1946" in standard
    assert "WS version: 13" in standard
    assert "TLS version: TLSv1.3" in standard

    verbose = render_request_details(result, "verbose", colors=PLAIN)
    assert "Cipher Suite: TLS_AES_256_GCM_SHA384" in verbose
    assert "Certificate: 1" in verbose
    assert "Subject: commonName=example.org" in verbose
    assert "Issuer: commonName=Example CA" in verbose
    assert "Not After: Jan  1 00:00:00 2026 GMT" in verbose
    assert "Request headers" in verbose
    assert "Sec-WebSocket-Version: 13" in verbose
    assert "Response headers" in verbose
    assert "Upgrade: websocket" in verbose


def test_request_details_without_tls():
    verbose = render_request_details(insecure_result(), "verbose", colors=PLAIN)
    assert "TLS" not in verbose
    standard = render_request_details(insecure_result(), "standard", colors=PLAIN)
    assert "TLS version" not in standard
    assert "WS version" not in standard
