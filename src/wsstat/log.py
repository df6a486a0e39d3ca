# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for wsstat.

Phase progress and probe failures are logged at DEBUG. ``-debug`` or ``WSSTAT_LOG_LEVEL``
surfaces them on stderr, so the report on stdout stays clean.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "WSSTAT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# websockets logs every frame at DEBUG; keep it out of phase timing output.
_CHATTY_LOGGERS = ("websockets",)


def resolve_log_level(level: str | None = None, *, debug: bool = False) -> int:
    """``debug`` wins, then ``level``, then the env var; unknown names fall back to WARNING."""
    if debug:
        return logging.DEBUG
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None, *, debug: bool = False) -> int:
    """Configure logging for CLI/library use and return the level applied to ``wsstat``."""
    effective_level = resolve_log_level(level, debug=debug)
    logging.basicConfig(level=effective_level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("wsstat").setLevel(effective_level)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective_level, logging.INFO))
    return effective_level


__all__ = ["LOG_LEVEL_ENV", "resolve_log_level", "setup_logging"]
