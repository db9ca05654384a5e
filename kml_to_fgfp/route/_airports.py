"""Departure and destination airport handling.

Airports come from the command line as ``ICAO[/RUNWAY]`` (for example
``YSSY/34L`` or ``SAEZ``). Their position is not looked up: the
identifier is enough for FlightGear to resolve the airport and runway.
"""

from __future__ import annotations

from kml_to_fgfp.core.exceptions import ConfigurationError
from kml_to_fgfp.models.waypoint import Airport, Waypoint, WaypointKind


class AirportCodeError(ConfigurationError):
    """Raised when an airport argument is not ``ICAO[/RUNWAY]``."""

    default_code = "AIRPORT_CODE_INVALID"


def decode_airport(code: str) -> Airport:
    """Decode ``ICAO[/RUNWAY]`` into an ``Airport``.

    Raises:
        AirportCodeError: If the code is empty, has an empty part around
            the ``/``, or more than one ``/``.
    """
    parts = [part.strip() for part in code.strip().split("/")]
    if len(parts) > 2:
        msg = f"Airport {code!r} must be ICAO or ICAO/RUNWAY"
        raise AirportCodeError(msg)
    if not all(parts):
        msg = f"Airport {code!r} has an empty ICAO code or runway"
        raise AirportCodeError(msg)

    ident = parts[0]
    runway = parts[1] if len(parts) == 2 else None
    return Airport(identifier=ident, runway=runway)


def airport_waypoint(airport: Airport | None, kind: WaypointKind) -> Waypoint | None:
    """Return the boundary waypoint for ``airport``, or ``None`` if absent."""
    if airport is None:
        return None
    return Waypoint(identifier=airport.waypoint_identifier, kind=kind)
