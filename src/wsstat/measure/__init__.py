# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Mode selection and measurement orchestration."""

from .invoker import Measurement, MeasurementInvoker, build_probe_request
from .selector import TimingLabels, select_mode, timing_labels, validate_verbosity

__all__ = [
    "Measurement",
    "MeasurementInvoker",
    "TimingLabels",
    "build_probe_request",
    "select_mode",
    "timing_labels",
    "validate_verbosity",
]
