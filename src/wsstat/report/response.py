# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response payload rendering."""

from __future__ import annotations

import json

from ..config import OutputOptions
from ..errors import InternalError
from ..models.mode import MeasurementMode, is_json_mode
from ..models.response import AbsentResponse, ObjectResponse, Response, source_text
from .colors import Colors


def format_response_value(response: Response, mode: MeasurementMode, *, raw: bool = False) -> str:
    """Pick the presentation for a response payload (without any framing)."""
    if raw:
        return source_text(response)
    if isinstance(response, ObjectResponse) and (is_json_mode(mode) or response.is_jsonrpc):
        try:
            return json.dumps(response.items)
        except (TypeError, ValueError) as exc:
            raise InternalError(f"Could not marshal response to JSON. Response: {response.items}, error: {exc}") from exc
    return str(response.native())


def render_response(
    response: Response | None,
    mode: MeasurementMode,
    options: OutputOptions | None = None,
    *,
    colors: Colors | None = None,
) -> str | None:
    """Render the response block, or None when there is nothing to print."""
    if response is None or isinstance(response, AbsentResponse):
        return None
    options = options or OutputOptions()
    colors = colors or Colors(enabled=options.color)

    value = format_response_value(response, mode, raw=options.raw)
    if options.response_only or options.quiet:
        return value + "\n"
    return f"\n{colors.ws_orange('Response')}: {value}\n\n"


__all__ = ["format_response_value", "render_response"]
