# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""ANSI color decoration for terminal output."""

from __future__ import annotations

from dataclasses import dataclass


def custom_color(r: int, g: int, b: int, text: str) -> str:
    """Wrap ``text`` in a 24-bit foreground color escape."""
    return f"\033[38;2;{r};{g};{b}m{text}\033[0m"


@dataclass(frozen=True)
class Colors:
    enabled: bool = True

    def ws_orange(self, text: str) -> str:
        # #ff6600, from the WebSocket logo.
        return custom_color(255, 102, 0, text) if self.enabled else text

    def tea_green(self, text: str) -> str:
        # #d3f9b5
        return custom_color(211, 249, 181, text) if self.enabled else text


PLAIN = Colors(enabled=False)

__all__ = ["PLAIN", "Colors", "custom_color"]
