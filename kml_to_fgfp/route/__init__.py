"""KML route → FlightGear flight plan — streaming pipeline.

The pipeline is split into focused stages:
- **_coordinates**: ``lon,lat[,alt]`` text → numbers, with typed errors
- **_extractor**: KML events → ``SourcePlacemark`` candidates
- **_validation**: candidate → enroute ``Waypoint`` or ``Discard``
- **_airports**: ``ICAO[/RUNWAY]`` decoding and airport waypoints
- **_assembler**: ``.fgfp`` skeleton and waypoint elements

Memory use is constant in the number of waypoints: one placemark is
read, validated and written before the next is looked at. A bad
placemark is dropped with a warning and never aborts the run.
"""

from __future__ import annotations

from kml_to_fgfp.route._airports import AirportCodeError, airport_waypoint, decode_airport
from kml_to_fgfp.route._assembler import RouteAssembler, convert
from kml_to_fgfp.route._coordinates import (
    CoordinateOutOfRangeError,
    CoordinateParseError,
    InvalidFloatError,
    MalformedFieldError,
    parse_coordinates,
)
from kml_to_fgfp.route._extractor import extract_placemarks
from kml_to_fgfp.route._validation import metres_to_feet, validate_placemark

__all__ = [
    "AirportCodeError",
    "CoordinateOutOfRangeError",
    "CoordinateParseError",
    "InvalidFloatError",
    "MalformedFieldError",
    "RouteAssembler",
    "airport_waypoint",
    "convert",
    "decode_airport",
    "extract_placemarks",
    "metres_to_feet",
    "parse_coordinates",
    "validate_placemark",
]
