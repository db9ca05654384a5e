"""FlightGear flight-plan assembly.

Writes the ``.fgfp`` ``PropertyList`` skeleton and streams the route
into it. The four steps must run in this order:

1. ``write_start_of_tree`` — root, fixed header, opens ``<route>``.
2. ``write_airports`` — the departure waypoint, first in the route.
3. ``transform_route`` — one ``<wp>`` per valid placemark, then the
   destination waypoint, last in the route.
4. ``close_tree`` — closes ``<route>`` and the root.

``convert`` runs all four.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_to_fgfp.core.config import ConverterConfig
from kml_to_fgfp.core.constants import (
    FGFP_HEADER,
    FGFP_ROOT,
    FGFP_ROUTE,
    FGFP_WAYPOINT,
)
from kml_to_fgfp.events import Characters, EndElement, StartElement
from kml_to_fgfp.models.report import ConversionReport, DroppedWaypoint
from kml_to_fgfp.models.waypoint import Discard, WaypointKind
from kml_to_fgfp.route._airports import airport_waypoint
from kml_to_fgfp.route._extractor import extract_placemarks
from kml_to_fgfp.route._validation import validate_placemark

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kml_to_fgfp.events import EventWriter, XmlEvent
    from kml_to_fgfp.models.waypoint import Airport, SourcePlacemark, Waypoint

logger = logging.getLogger("kml_to_fgfp.route")


class RouteAssembler:
    """Writes one flight plan to an event sink.

    Holds the running ``<wp n="...">`` index across the airport and
    route steps, and the ``ConversionReport`` they fill in.
    """

    def __init__(self, writer: EventWriter, *, config: ConverterConfig | None = None) -> None:
        self._writer = writer
        self._config = config or ConverterConfig()
        self._next_index = 0
        self.report = ConversionReport()

    # -- Step 1 --------------------------------------------------------------

    def write_start_of_tree(
        self, departure: Airport | None = None, destination: Airport | None = None
    ) -> None:
        """Open the root, write the fixed header and open ``<route>``.

        The FlightGear ``<departure>``/``<destination>`` header blocks are
        written for the airports given here. Calling this twice produces
        a malformed document.
        """
        self._start(FGFP_ROOT)
        for name, value_type, value in FGFP_HEADER:
            self._field(name, value_type, value)

        for name, airport in (("departure", departure), ("destination", destination)):
            if airport is None:
                continue
            self._start(name)
            self._airport_details(airport)
            self._end(name)

        self._start(FGFP_ROUTE)

    # -- Step 2 --------------------------------------------------------------

    def write_airports(self, departure: Airport | None, destination: Airport | None) -> None:
        """Write the departure waypoint.

        The destination is only recorded here; ``transform_route`` writes
        it after the last enroute waypoint.
        """
        waypoint = airport_waypoint(departure, WaypointKind.DEPARTURE)
        if waypoint is not None:
            self._write_waypoint(waypoint, airport=departure)
            self.report.departure = waypoint.identifier
        if destination is not None:
            self.report.destination = destination.waypoint_identifier

    # -- Step 3 --------------------------------------------------------------

    def transform_route(
        self,
        events: Iterable[XmlEvent],
        departure: Airport | None = None,
        destination: Airport | None = None,
    ) -> ConversionReport:
        """Stream placemarks into ``<wp>`` elements, then the destination.

        Placemarks with unusable coordinates are dropped with a warning
        ``Dropping <NAME> waypoint: <reason>``; the conversion continues.
        """
        airport_codes = {a.identifier for a in (departure, destination) if a is not None}

        for placemark in extract_placemarks(events):
            if self._skip(placemark, airport_codes):
                self.report.skipped += 1
                continue

            result = validate_placemark(
                placemark, altitude_step_ft=self._config.altitude_step_ft
            )
            if isinstance(result, Discard):
                logger.warning("%s", result.message)
                self.report.dropped.append(
                    DroppedWaypoint(name=result.name, reason=result.reason)
                )
                continue

            self._write_waypoint(result)

        waypoint = airport_waypoint(destination, WaypointKind.DESTINATION)
        if waypoint is not None:
            self._write_waypoint(waypoint, airport=destination)
            self.report.destination = waypoint.identifier

        logger.info(
            "Wrote %d enroute waypoint(s), dropped %d, skipped %d",
            self.report.waypoints_written,
            len(self.report.dropped),
            self.report.skipped,
        )
        return self.report

    # -- Step 4 --------------------------------------------------------------

    def close_tree(self) -> None:
        """Close ``<route>`` and the root element."""
        self._end(FGFP_ROUTE)
        self._end(FGFP_ROOT)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _skip(self, placemark: SourcePlacemark, airport_codes: set[str]) -> bool:
        style = self._config.route_style
        if style and placemark.style_url is not None and placemark.style_url != style:
            logger.debug(
                "Skipping %s: style %s is not a route fix", placemark.name, placemark.style_url
            )
            return True
        if placemark.name in airport_codes:
            logger.debug("Skipping %s: written as an airport waypoint", placemark.name)
            return True
        return False

    def _write_waypoint(self, waypoint: Waypoint, *, airport: Airport | None = None) -> None:
        self._start(FGFP_WAYPOINT, {"n": str(self._next_index)})
        self._field("type", "string", waypoint.kind.value)
        self._field("ident", "string", waypoint.identifier)
        if airport is not None:
            self._airport_details(airport, airport_tag="icao")
        self._field("lat", "double", repr(waypoint.latitude))
        self._field("lon", "double", repr(waypoint.longitude))
        self._field("altitude-ft", "int", f"{waypoint.altitude_ft:.0f}")
        self._end(FGFP_WAYPOINT)
        self._next_index += 1
        if waypoint.is_airport:
            self.report.airports_written += 1
        else:
            self.report.waypoints_written += 1

    def _airport_details(self, airport: Airport, *, airport_tag: str = "airport") -> None:
        self._field(airport_tag, "string", airport.identifier)
        if airport.runway:
            self._field("runway", "string", airport.runway)

    def _field(self, name: str, value_type: str, value: str) -> None:
        self._start(name, {"type": value_type})
        self._writer.write(Characters(value))
        self._end(name)

    def _start(self, name: str, attributes: dict[str, str] | None = None) -> None:
        self._writer.write(StartElement(name, attributes or {}))

    def _end(self, name: str) -> None:
        self._writer.write(EndElement(name))


def convert(
    events: Iterable[XmlEvent],
    writer: EventWriter,
    departure: Airport | None = None,
    destination: Airport | None = None,
    *,
    config: ConverterConfig | None = None,
) -> ConversionReport:
    """Run the whole conversion from source events into ``writer``."""
    assembler = RouteAssembler(writer, config=config)
    assembler.write_start_of_tree(departure, destination)
    assembler.write_airports(departure, destination)
    report = assembler.transform_route(events, departure, destination)
    assembler.close_tree()
    return report
