"""Command-line entry point — ``kml-to-fgfp``.

This module is purely the wiring layer between the command line and
``kml_to_fgfp.runner``: argument parsing, logging setup, and mapping
errors to exit codes.

Exit codes:
    0: Converted (possibly with dropped waypoints).
    1: Conversion failed (unreadable input, unwritable output,
       malformed XML, bad airport code or configuration).
    2: Invalid invocation (reported by argparse).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from kml_to_fgfp import __version__
from kml_to_fgfp.core.config import ConverterConfig
from kml_to_fgfp.core.exceptions import ConversionError
from kml_to_fgfp.route import decode_airport
from kml_to_fgfp.runner import run

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("kml_to_fgfp.cli")

_handler: logging.Handler | None = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kml-to-fgfp",
        description="Convert a SimBrief route in KML to a FlightGear flight plan (.fgfp).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s route.kml route.fgfp                    Route only
  %(prog)s route.kml route.fgfp YSSY/34L SAEZ/11   With airports and runways
  %(prog)s route.kml route.fgfp YSSY SAEZ          Airports without runways

Environment:
  KML_TO_FGFP_INDENT             Indentation of the flight plan (default: tab)
  KML_TO_FGFP_ALTITUDE_STEP_FT   Round altitudes to this many feet (default: 100)
  KML_TO_FGFP_ROUTE_STYLE        styleUrl of route fixes (default: #FixMark)
        """,
    )
    parser.add_argument("input", type=Path, help="SimBrief KML file to read")
    parser.add_argument("output", type=Path, help="FlightGear flight plan to write (overwritten)")
    parser.add_argument(
        "departure", nargs="?", help="Departure airport as ICAO[/RUNWAY], e.g. YSSY/34L"
    )
    parser.add_argument(
        "destination", nargs="?", help="Destination airport as ICAO[/RUNWAY], e.g. SAEZ/11"
    )
    parser.add_argument("--report", type=Path, metavar="PATH", help="Write a JSON run report")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(*, verbose: bool = False) -> None:
    """Send the package's log records to stderr as bare messages."""
    global _handler

    package_logger = logging.getLogger("kml_to_fgfp")
    if _handler is not None:
        package_logger.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(_handler)
    package_logger.setLevel(logging.INFO if verbose else logging.WARNING)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    try:
        config = ConverterConfig.from_env()
        departure = decode_airport(args.departure) if args.departure else None
        destination = decode_airport(args.destination) if args.destination else None

        report = run(args.input, args.output, departure, destination, config=config)

        if args.report:
            args.report.write_text(report.to_json() + "\n", encoding="utf-8")
    except (ConversionError, OSError, ValueError) as exc:
        logger.error("error: %s", exc)
        return 1

    logger.info(
        "Flight plan written to %s (%d waypoint(s), status=%s)",
        args.output,
        report.waypoints_written + report.airports_written,
        report.status,
    )
    return 0
