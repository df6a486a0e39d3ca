# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Assemble the full terminal report for a successful measurement."""

from __future__ import annotations

from ..config import OutputOptions
from ..measure.selector import timing_labels
from ..models.mode import MeasurementMode, expects_response
from ..models.response import Response
from ..probe.models import Result
from ..probe.url import Target
from .colors import Colors
from .details import render_request_details
from .response import render_response
from .timing import render_basic_timing, render_timing


def build_report(
    result: Result,
    response: Response | None,
    target: Target,
    mode: MeasurementMode,
    options: OutputOptions | None = None,
) -> str:
    """
    Details and timings first, then the response.

    Quiet output, and response-only output when a response is expected, keep just the response.
    """
    options = options or OutputOptions()
    colors = Colors(enabled=options.color)
    labels = timing_labels(mode)

    parts: list[str] = []
    show_framing = not options.quiet and not (options.response_only and expects_response(mode))
    if show_framing:
        parts.append(render_request_details(result, options.verbosity, colors=colors))
        if options.basic:
            parts.append(render_basic_timing(result, labels=labels, colors=colors))
        else:
            parts.append(render_timing(result, target.scheme, labels=labels, colors=colors))

    rendered_response = render_response(response, mode, options, colors=colors)
    if rendered_response is not None:
        parts.append(rendered_response)
    return "".join(parts)


__all__ = ["build_report"]
