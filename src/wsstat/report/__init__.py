# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Terminal report rendering."""

from .builder import build_report
from .colors import Colors, custom_color
from .details import render_request_details
from .response import format_response_value, render_response
from .timing import render_basic_timing, render_timing, timeline

__all__ = [
    "Colors",
    "build_report",
    "custom_color",
    "format_response_value",
    "render_basic_timing",
    "render_request_details",
    "render_response",
    "render_timing",
    "timeline",
]
