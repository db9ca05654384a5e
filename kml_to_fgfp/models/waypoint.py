"""Data model for the conversion: placemarks in, waypoints out.

A ``SourcePlacemark`` is what the extractor sees in the KML stream. A
``Waypoint`` is what the assembler writes into the flight plan. Only
valid waypoints are ever constructed; bad placemarks become a
``Discard`` instead.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class WaypointKind(enum.Enum):
    """Waypoint role; the value is written as the flight-plan ``type`` field."""

    DEPARTURE = "departure"
    DESTINATION = "destination"
    ENROUTE = "navaid"


@dataclass(frozen=True, slots=True)
class SourcePlacemark:
    """One waypoint candidate read from a KML ``<Placemark>``.

    Attributes:
        name: Text of the ``<name>`` element (e.g. ``"EZE11"``).
        coordinate_text: Raw ``lon,lat[,alt]`` text of ``<coordinates>``.
        style_url: Text of ``<styleUrl>``, or ``None`` if absent.
    """

    name: str
    coordinate_text: str
    style_url: str | None = None


@dataclass(frozen=True, slots=True)
class Waypoint:
    """A typed, validated waypoint written to the flight plan.

    Attributes:
        identifier: Fix name, or ``ICAO[/RUNWAY]`` for airports.
        kind: Departure, destination or enroute fix.
        latitude: WGS 84 latitude in degrees.
        longitude: WGS 84 longitude in degrees.
        altitude_ft: Altitude in feet, ``0`` if not applicable.
    """

    identifier: str
    kind: WaypointKind
    latitude: float = 0.0
    longitude: float = 0.0
    altitude_ft: float = 0.0

    @property
    def is_airport(self) -> bool:
        return self.kind is not WaypointKind.ENROUTE


@dataclass(frozen=True, slots=True)
class Airport:
    """Departure or destination airport supplied by the caller.

    Attributes:
        identifier: ICAO code (e.g. ``"YSSY"``).
        runway: Runway designator (e.g. ``"34L"``), or ``None``.
    """

    identifier: str
    runway: str | None = None

    @property
    def waypoint_identifier(self) -> str:
        """``ICAO/RUNWAY`` when a runway is known, else the bare code."""
        if self.runway:
            return f"{self.identifier}/{self.runway}"
        return self.identifier


@dataclass(frozen=True, slots=True)
class Discard:
    """A placemark dropped by validation, with the reason it was dropped."""

    name: str
    reason: str

    @property
    def message(self) -> str:
        return f"Dropping {self.name} waypoint: {self.reason}"
