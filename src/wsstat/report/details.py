# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Connection detail rendering (target, addresses, TLS session, headers)."""

from __future__ import annotations

from urllib.parse import urlsplit

from ..probe.headers import grouped_headers
from ..probe.models import Result
from .colors import Colors


def _hostname(result: Result) -> str:
    return urlsplit(result.url).hostname or result.url


def _basic(result: Result, colors: Colors) -> list[str]:
    lines = [f"{colors.tea_green('URL')}: {_hostname(result)}"]
    if result.ips:
        lines.append(f"{colors.tea_green('IP')}:  {result.ips[0]}")
    return lines


def _verbose(result: Result, colors: Colors) -> list[str]:
    lines = [colors.ws_orange("Target"), f"  {colors.tea_green('URL')}:  {_hostname(result)}"]
    for ip in result.ips:
        lines.append(f"  {colors.tea_green('IP')}: {ip}")
    lines.append("")

    tls = result.tls_state
    if tls is not None:
        lines.append(colors.ws_orange("TLS"))
        lines.append(f"  {colors.tea_green('Version')}: {tls.version}")
        lines.append(f"  {colors.tea_green('Cipher Suite')}: {tls.cipher_suite}")
        for index, cert in enumerate(tls.peer_certificates, start=1):
            lines.append(f"  {colors.tea_green('Certificate')}: {index}")
            lines.append(f"    Subject: {cert.subject}")
            lines.append(f"    Issuer: {cert.issuer}")
            lines.append(f"    Not Before: {cert.not_before}")
            lines.append(f"    Not After: {cert.not_after}")
        lines.append("")

    lines.append(colors.ws_orange("Request headers"))
    for name, values in grouped_headers(result.request_headers):
        lines.append(f"  {colors.tea_green(name)}: {', '.join(values)}")
    lines.append(colors.ws_orange("Response headers"))
    for name, values in grouped_headers(result.response_headers):
        lines.append(f"  {colors.tea_green(name)}: {', '.join(values)}")
    return lines


def _standard(result: Result, colors: Colors) -> list[str]:
    lines = [f"{colors.ws_orange('Target')}: {_hostname(result)}"]
    for ip in result.ips:
        lines.append(f"{colors.ws_orange('IP')}: {ip}")
    ws_versions = result.request_headers.get_list("Sec-WebSocket-Version")
    if ws_versions:
        lines.append(f"{colors.ws_orange('WS version')}: {', '.join(ws_versions)}")
    if result.tls_state is not None:
        lines.append(f"{colors.ws_orange('TLS version')}: {result.tls_state.version}")
    return lines


def render_request_details(result: Result, verbosity: str = "standard", *, colors: Colors | None = None) -> str:
    """Render the block printed above the timing diagram; ``verbosity`` is basic, standard or verbose."""
    colors = colors or Colors()
    if verbosity == "basic":
        lines = _basic(result, colors)
    elif verbosity == "verbose":
        lines = _verbose(result, colors)
    else:
        lines = _standard(result, colors)
    return "\n" + "\n".join(lines) + "\n"


__all__ = ["render_request_details"]
