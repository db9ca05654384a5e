"""Data models.

Defines the data structures used throughout the conversion:
- SourcePlacemark: Waypoint candidate read from the KML stream
- Waypoint: Validated, typed waypoint written to the flight plan
- Airport: Departure/destination airport with optional runway
- Discard: A placemark dropped by validation
- ConversionReport: Per-run summary (pydantic)
"""

from kml_to_fgfp.models.report import ConversionReport, DroppedWaypoint
from kml_to_fgfp.models.waypoint import (
    Airport,
    Discard,
    SourcePlacemark,
    Waypoint,
    WaypointKind,
)

__all__ = [
    "Airport",
    "ConversionReport",
    "Discard",
    "DroppedWaypoint",
    "SourcePlacemark",
    "Waypoint",
    "WaypointKind",
]
