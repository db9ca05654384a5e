"""KML coordinate field parsing.

A placemark's ``<coordinates>`` text is ``longitude,latitude[,altitude]``.
Parsing is pure; every failure raises a ``CoordinateParseError``
subclass whose ``reason`` is the short text shown in the drop
diagnostic.
"""

from __future__ import annotations

import math
import re

from kml_to_fgfp.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from kml_to_fgfp.core.exceptions import ValidationError

# Plain ASCII decimal: no digit separators, no non-ASCII digits, no inf/nan
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# ---------------------------------------------------------------------------
# Exceptions (public API, re-exported from __init__)
# ---------------------------------------------------------------------------


class CoordinateParseError(ValidationError):
    """Raised when a coordinate field cannot be turned into a position."""

    default_stage = "validate_waypoint"
    default_code = "COORDINATE_INVALID"
    #: Short reason used in the ``Dropping <NAME> waypoint: <reason>`` line.
    reason: str = "invalid coordinate"


class MalformedFieldError(CoordinateParseError):
    """The field does not have 2 or 3 comma-separated parts."""

    default_code = "COORDINATE_MALFORMED"
    reason = "malformed coordinate field"


class InvalidFloatError(CoordinateParseError):
    """A component is not a finite decimal number."""

    default_code = "COORDINATE_NOT_A_NUMBER"
    reason = "invalid float literal"


class CoordinateOutOfRangeError(CoordinateParseError):
    """Latitude or longitude is outside WGS 84 bounds."""

    default_code = "COORDINATE_OUT_OF_RANGE"
    reason = "value out of range"


def parse_coordinates(text: str) -> tuple[float, float, float]:
    """Parse ``lon,lat[,alt]`` into ``(latitude, longitude, altitude)``.

    Altitude is returned in the source unit (metres for KML) and
    defaults to ``0.0`` when absent.

    Raises:
        MalformedFieldError: Fewer than 2 or more than 3 parts.
        InvalidFloatError: A present part is not a finite number.
        CoordinateOutOfRangeError: Latitude or longitude out of bounds.
    """
    parts = [part.strip() for part in text.strip().split(",")]
    if len(parts) not in (2, 3):
        msg = f"Expected 'lon,lat[,alt]', got {len(parts)} part(s) in {text.strip()!r}"
        raise MalformedFieldError(msg)

    lon = _to_float(parts[0], "longitude")
    lat = _to_float(parts[1], "latitude")
    alt = _to_float(parts[2], "altitude") if len(parts) == 3 else 0.0

    if not (MIN_LATITUDE <= lat <= MAX_LATITUDE):
        msg = f"Latitude {lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}]"
        raise CoordinateOutOfRangeError(msg)
    if not (MIN_LONGITUDE <= lon <= MAX_LONGITUDE):
        msg = f"Longitude {lon} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}]"
        raise CoordinateOutOfRangeError(msg)

    return (lat, lon, alt)


def _to_float(value: str, component: str) -> float:
    if not _DECIMAL.fullmatch(value):
        msg = f"Cannot convert {component} {value!r} to float"
        raise InvalidFloatError(msg)
    number = float(value)
    if not math.isfinite(number):
        msg = f"{component.capitalize()} {value!r} is not a finite number"
        raise InvalidFloatError(msg)
    return number
