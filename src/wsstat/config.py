# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for wsstat."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"wsstat/{__version__}"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ProbeSettings:
    """Probe backend defaults."""

    timeout: float = 10.0
    verify_ssl: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    compression: bool = False

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("WSSTAT_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            verify_ssl=_bool_env("WSSTAT_VERIFY_SSL", cls.verify_ssl),
            user_agent=os.getenv("WSSTAT_USER_AGENT", cls.user_agent),
            compression=_bool_env("WSSTAT_COMPRESSION", cls.compression),
        )


@dataclass(frozen=True)
class OutputOptions:
    """Output switches for a single invocation, built once from CLI arguments."""

    basic: bool = False
    verbose: bool = False
    quiet: bool = False
    response_only: bool = False
    raw: bool = False
    color: bool = True

    @property
    def verbosity(self) -> str:
        if self.basic:
            return "basic"
        if self.verbose:
            return "verbose"
        if self.quiet:
            return "quiet"
        return "standard"


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()


def color_enabled(default: bool = True) -> bool:
    """Honor the NO_COLOR convention (any non-empty value disables colors)."""
    if os.getenv("NO_COLOR"):
        return False
    return default
