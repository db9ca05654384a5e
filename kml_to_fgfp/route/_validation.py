"""Placemark → waypoint validation.

Turns one ``SourcePlacemark`` into an enroute ``Waypoint``, or into a
``Discard`` when its coordinates cannot be used. One bad placemark
never stops the conversion.
"""

from __future__ import annotations

import math

from kml_to_fgfp.core.constants import DEFAULT_ALTITUDE_STEP_FT, FEET_PER_METRE
from kml_to_fgfp.models.waypoint import Discard, SourcePlacemark, Waypoint, WaypointKind
from kml_to_fgfp.route._coordinates import (
    CoordinateOutOfRangeError,
    CoordinateParseError,
    parse_coordinates,
)


def validate_placemark(
    placemark: SourcePlacemark, *, altitude_step_ft: int = DEFAULT_ALTITUDE_STEP_FT
) -> Waypoint | Discard:
    """Build an enroute waypoint from a placemark, or explain why not."""
    try:
        lat, lon, alt_m = parse_coordinates(placemark.coordinate_text)
        alt_ft = metres_to_feet(alt_m, step_ft=altitude_step_ft)
    except CoordinateParseError as exc:
        return Discard(name=placemark.name, reason=exc.reason)

    return Waypoint(
        identifier=placemark.name,
        kind=WaypointKind.ENROUTE,
        latitude=lat,
        longitude=lon,
        altitude_ft=alt_ft,
    )


def metres_to_feet(metres: float, *, step_ft: int = DEFAULT_ALTITUDE_STEP_FT) -> float:
    """Convert metres to feet, rounded half away from zero to ``step_ft``.

    Flight plans only need altitudes to the nearest hundred feet:
    823 m is 2700 ft, not 2700.13 ft. ``step_ft=0`` skips rounding.

    Raises:
        CoordinateOutOfRangeError: If the altitude in feet is not a
            finite float.
    """
    feet = _finite_feet(metres * FEET_PER_METRE, metres)
    if not step_ft:
        return feet
    rounded = _finite_feet(math.floor(abs(feet) / step_ft + 0.5) * float(step_ft), metres)
    return math.copysign(rounded, feet) if rounded else 0.0


def _finite_feet(feet: float, metres: float) -> float:
    if not math.isfinite(feet):
        msg = f"Altitude {metres} m is too large to express in feet"
        raise CoordinateOutOfRangeError(msg)
    return feet
