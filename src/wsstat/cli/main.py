from __future__ import annotations

"""
wsstat, WebSocket connection latency diagnostics.
Copyright (C) 2025  Theori Inc.

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published
by the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

"""wsstat CLI."""

import argparse
import logging
import sys

from ..config import OutputOptions, ProbeSettings, color_enabled, load_probe_settings
from ..errors import (
    InputError,
    InternalError,
    TLSExpectedButAbsentError,
    categorize_exception,
    classify_connection_error,
    error_category_to_reason,
)
from ..log import setup_logging
from ..measure.selector import select_mode, validate_verbosity
from ..probe import create_default_probe_client, parse_headers, parse_ws_uri
from ..report.builder import build_report
from ..runtime import WSStat
from ..version import __version__

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wsstat",
        usage="wsstat [options] <url>",
        description="Measure the latency of a WebSocket connection, phase by phase.",
    )
    parser.add_argument("url", help="Target host or WebSocket URI (ws:// or wss://)")

    inputs = parser.add_argument_group("input")
    inputs.add_argument(
        "-headers",
        "--headers",
        default="",
        help="A comma-separated list of headers to send in the connection establishing request, e.g. 'Origin:x,Auth:y'.",
    )
    inputs.add_argument("-json", "--json", dest="json_message", help="A JSON (RPC) message to send. Response will be printed.")
    inputs.add_argument(
        "-method",
        "--method",
        help="A JSON-RPC method to call without params. For methods requiring params, use -json. Response will be printed.",
    )
    inputs.add_argument("-text", "--text", help="A text message to send. Response will be printed.")
    inputs.add_argument(
        "-burst",
        "--burst",
        type=int,
        default=1,
        help="Send the probe this many times over one connection and report the mean round-trip time.",
    )

    protocol = parser.add_argument_group("protocol")
    protocol.add_argument(
        "-insecure",
        "--insecure",
        action="store_true",
        help="Open an insecure WS connection when the input URL has no scheme.",
    )

    output = parser.add_argument_group("output")
    output.add_argument("-b", "--basic", action="store_true", help="Print only basic output.")
    output.add_argument("-v", "--verbose", action="store_true", help="Print verbose output, including TLS details and headers.")
    output.add_argument("-q", "--quiet", action="store_true", help="Print nothing but the response.")
    output.add_argument(
        "-ro",
        "--response-only",
        dest="response_only",
        action="store_true",
        help="Response only; print only the response. Has no effect if there's no expected response.",
    )
    output.add_argument("-raw", "--raw", action="store_true", help="Print the response as received, without decoding.")
    output.add_argument("-no-color", "--no-color", dest="no_color", action="store_true", help="Disable colored output.")
    output.add_argument(
        "-debug",
        "--debug",
        action="store_true",
        help="Log probe phases and failures to stderr (same as WSSTAT_LOG_LEVEL=DEBUG).",
    )
    output.add_argument("-version", "--version", action="version", version=f"Version: {__version__}")
    return parser


def _usage_error(parser: argparse.ArgumentParser, message: str) -> int:
    sys.stderr.write(f"{message}\n\n")
    parser.print_help(sys.stderr)
    return InputError.exit_code


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(debug=args.debug)

    try:
        validate_verbosity(args.basic, args.verbose, args.quiet)
        mode = select_mode(
            text=args.text,
            json_message=args.json_message,
            method=args.method,
            burst=args.burst,
        )
        target = parse_ws_uri(args.url, insecure=args.insecure)
        headers = parse_headers(args.headers)
    except InputError as exc:
        return _usage_error(parser, str(exc))

    options = OutputOptions(
        basic=args.basic,
        verbose=args.verbose,
        quiet=args.quiet,
        response_only=args.response_only,
        raw=args.raw,
        color=color_enabled(not args.no_color),
    )

    settings: ProbeSettings = load_probe_settings()
    probe_client = create_default_probe_client(settings)

    with WSStat(probe_client=probe_client, settings=settings) as wsstat:
        measurement = wsstat.measure(target, headers, mode)

    if measurement.error is not None:
        error = classify_connection_error(measurement.error, target.url)
        category = categorize_exception(measurement.error)
        if isinstance(error, TLSExpectedButAbsentError):
            category = error.category
        logger.debug("Measurement failed: %s", category.value)
        sys.stderr.write(f"{error_category_to_reason(category)}: {error}\n")
        return error.exit_code

    try:
        report = build_report(measurement.result, measurement.response, target, mode, options)
    except InternalError as exc:
        sys.stderr.write(f"{exc}\n")
        return exc.exit_code

    sys.stdout.write(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
