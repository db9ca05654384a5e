"""Pydantic model for the per-run conversion report.

The report is the audit trail of one conversion: which files were
involved, which airports were injected, how many waypoints made it
into the flight plan and which placemarks were dropped and why. The
command line writes it as JSON with ``--report``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field

# Schema version for forward compatibility
SCHEMA_VERSION = "fgfp-conversion-v1"


class DroppedWaypoint(BaseModel):
    """A placemark that failed validation.

    Attributes:
        name: Placemark name.
        reason: Short reason (e.g. ``"invalid float literal"``).
    """

    name: str
    reason: str


class ConversionReport(BaseModel):
    """Summary of one KML → FlightGear conversion.

    Attributes:
        schema_version: Report schema identifier.
        source: Source KML path (empty for in-memory streams).
        target: Target flight-plan path (empty for in-memory streams).
        departure: Departure waypoint identifier, if one was injected.
        destination: Destination waypoint identifier, if one was injected.
        waypoints_written: Enroute waypoints written to the route.
        airports_written: Airport waypoints written to the route.
        skipped: Placemarks ignored on purpose (other styles, airport fixes).
        dropped: Placemarks dropped because their coordinates were invalid.
    """

    schema_version: str = SCHEMA_VERSION
    source: str = ""
    target: str = ""
    departure: str | None = None
    destination: str | None = None
    waypoints_written: int = 0
    airports_written: int = 0
    skipped: int = 0
    dropped: list[DroppedWaypoint] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> str:
        """``"partial"`` if any placemark was dropped, else ``"success"``."""
        return "partial" if self.dropped else "success"

    def to_json(self) -> str:
        """Serialise to indented JSON, including the derived status."""
        return self.model_dump_json(indent=2)
