"""Tests for flight-plan assembly.

Covers the end-to-end route properties:
- N valid placemarks → N enroute waypoints in source order
- One malformed placemark → N-1 waypoints and exactly one diagnostic
- Departure first, destination last, enroute in between
- No airports requested → no airport-typed waypoints
- Well-formed output for any input, including zero placemarks
- Style filtering and airport-named placemarks
"""

from __future__ import annotations

import io
import logging

import pytest
from lxml import etree

from kml_to_fgfp.core.config import ConverterConfig
from kml_to_fgfp.events import EndElement, StartElement, open_event_writer, read_events
from kml_to_fgfp.models.waypoint import Airport
from kml_to_fgfp.route import RouteAssembler

FIXES = [
    ("RIVET", "151.654167,-34.233333,3048"),
    ("WOL", "150.849167,-34.558333,6096"),
    ("EZE11", "-58.594239,-34.811897,823"),
]


class TestRouteOrder:
    """Enroute waypoints keep source order and count."""

    def test_all_valid_placemarks_written(self, make_kml, convert_kml, read_route) -> None:
        fgfp, report = convert_kml(make_kml(*FIXES))
        assert read_route(fgfp) == [("navaid", "RIVET"), ("navaid", "WOL"), ("navaid", "EZE11")]
        assert report.waypoints_written == 3
        assert report.dropped == []
        assert report.status == "success"

    def test_waypoint_fields(self, make_kml, convert_kml) -> None:
        fgfp, _ = convert_kml(make_kml(("EZE11", "-58.594239,-34.811897,823")))
        wp = etree.fromstring(fgfp).find("route/wp")
        assert wp.get("n") == "0"
        assert wp.find("type").get("type") == "string"
        assert float(wp.findtext("lat")) == pytest.approx(-34.811897)
        assert float(wp.findtext("lon")) == pytest.approx(-58.594239)
        assert wp.find("lat").get("type") == "double"
        assert wp.findtext("altitude-ft") == "2700"
        assert wp.find("altitude-ft").get("type") == "int"

    def test_index_runs_across_airports(self, make_kml, convert_kml) -> None:
        fgfp, _ = convert_kml(make_kml(*FIXES), Airport("YSSY", "34L"), Airport("SAEZ", "11"))
        indexes = [wp.get("n") for wp in etree.fromstring(fgfp).findall("route/wp")]
        assert indexes == ["0", "1", "2", "3", "4"]

    def test_source_without_namespace(self, make_kml, convert_kml, read_route) -> None:
        fgfp, _ = convert_kml(make_kml(*FIXES, namespace=""))
        assert [ident for _, ident in read_route(fgfp)] == ["RIVET", "WOL", "EZE11"]


class TestDiscards:
    """Malformed placemarks are dropped with one diagnostic each."""

    def test_single_malformed_placemark(
        self, make_kml, convert_kml, read_route, caplog: pytest.LogCaptureFixture
    ) -> None:
        kml = make_kml(FIXES[0], ("ARSOT", "not,a,number"), *FIXES[1:])
        with caplog.at_level(logging.WARNING, logger="kml_to_fgfp.route"):
            fgfp, report = convert_kml(kml)

        assert [ident for _, ident in read_route(fgfp)] == ["RIVET", "WOL", "EZE11"]
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert warnings == ["Dropping ARSOT waypoint: invalid float literal"]
        assert [(d.name, d.reason) for d in report.dropped] == [("ARSOT", "invalid float literal")]
        assert report.status == "partial"

    def test_every_kind_of_bad_coordinate(
        self, make_kml, convert_kml, caplog: pytest.LogCaptureFixture
    ) -> None:
        kml = make_kml(("A", "1"), ("B", "1,x"), ("C", "1,100"), ("OK", "1,2"))
        with caplog.at_level(logging.WARNING, logger="kml_to_fgfp.route"):
            fgfp, report = convert_kml(kml)

        assert report.waypoints_written == 1
        assert caplog.messages == [
            "Dropping A waypoint: malformed coordinate field",
            "Dropping B waypoint: invalid float literal",
            "Dropping C waypoint: value out of range",
        ]

    def test_altitude_overflow_drops_only_that_waypoint(
        self, make_kml, convert_kml, read_route, caplog: pytest.LogCaptureFixture
    ) -> None:
        kml = make_kml(("RIVET", "151.65,-34.23,1e308"), FIXES[1])
        with caplog.at_level(logging.WARNING, logger="kml_to_fgfp.route"):
            fgfp, report = convert_kml(kml)

        assert read_route(fgfp) == [("navaid", "WOL")]
        assert caplog.messages == ["Dropping RIVET waypoint: value out of range"]
        assert report.waypoints_written == 1

    def test_all_placemarks_bad_still_well_formed(self, make_kml, convert_kml) -> None:
        fgfp, report = convert_kml(make_kml(("A", "x,y"), ("B", "1")))
        root = etree.fromstring(fgfp)
        assert root.find("route") is not None
        assert root.findall("route/wp") == []
        assert len(report.dropped) == 2


class TestAirports:
    """Departure and destination placement."""

    def test_departure_first_destination_last(self, make_kml, convert_kml, read_route) -> None:
        fgfp, report = convert_kml(
            make_kml(*FIXES), Airport("YSSY", "34L"), Airport("SAEZ", "11")
        )
        assert read_route(fgfp) == [
            ("departure", "YSSY/34L"),
            ("navaid", "RIVET"),
            ("navaid", "WOL"),
            ("navaid", "EZE11"),
            ("destination", "SAEZ/11"),
        ]
        assert report.departure == "YSSY/34L"
        assert report.destination == "SAEZ/11"
        assert report.airports_written == 2
        assert report.waypoints_written == 3

    def test_no_airports_no_airport_waypoints(self, make_kml, convert_kml, read_route) -> None:
        fgfp, report = convert_kml(make_kml(*FIXES))
        assert {kind for kind, _ in read_route(fgfp)} == {"navaid"}
        root = etree.fromstring(fgfp)
        assert root.find("departure") is None
        assert root.find("destination") is None
        assert report.airports_written == 0

    def test_departure_only(self, make_kml, convert_kml, read_route) -> None:
        fgfp, _ = convert_kml(make_kml(*FIXES), Airport("YSSY"), None)
        route = read_route(fgfp)
        assert route[0] == ("departure", "YSSY")
        assert [kind for kind, _ in route[1:]] == ["navaid"] * 3

    def test_destination_only(self, make_kml, convert_kml, read_route) -> None:
        fgfp, _ = convert_kml(make_kml(*FIXES), None, Airport("SAEZ", "11"))
        assert read_route(fgfp)[-1] == ("destination", "SAEZ/11")
        assert len(read_route(fgfp)) == 4

    def test_airports_with_zero_placemarks(self, make_kml, convert_kml, read_route) -> None:
        fgfp, _ = convert_kml(make_kml(), Airport("YSSY", "34L"), Airport("SAEZ", "11"))
        assert read_route(fgfp) == [("departure", "YSSY/34L"), ("destination", "SAEZ/11")]

    def test_airport_waypoint_details(self, make_kml, convert_kml) -> None:
        fgfp, _ = convert_kml(make_kml(), Airport("YSSY", "34L"), Airport("SAEZ"))
        departure, destination = etree.fromstring(fgfp).findall("route/wp")
        assert departure.findtext("icao") == "YSSY"
        assert departure.findtext("runway") == "34L"
        assert departure.findtext("lat") == "0.0"
        assert departure.findtext("altitude-ft") == "0"
        assert destination.findtext("icao") == "SAEZ"
        assert destination.find("runway") is None

    def test_header_airport_blocks(self, make_kml, convert_kml) -> None:
        fgfp, _ = convert_kml(make_kml(), Airport("YSSY", "34L"), Airport("SAEZ"))
        root = etree.fromstring(fgfp)
        assert root.findtext("departure/airport") == "YSSY"
        assert root.findtext("departure/runway") == "34L"
        assert root.findtext("destination/airport") == "SAEZ"
        assert root.find("destination/runway") is None

    def test_airport_named_placemarks_skipped(self, make_kml, convert_kml, read_route) -> None:
        """Placemarks for the airports themselves are replaced by airport waypoints."""
        kml = make_kml(("YSSY", "151.177,-33.946,6"), *FIXES, ("SAEZ", "-58.535,-34.822,20"))
        fgfp, report = convert_kml(kml, Airport("YSSY", "34L"), Airport("SAEZ", "11"))
        idents = [ident for _, ident in read_route(fgfp)]
        assert idents == ["YSSY/34L", "RIVET", "WOL", "EZE11", "SAEZ/11"]
        assert report.skipped == 2

    def test_airport_named_placemarks_kept_without_airports(
        self, make_kml, convert_kml, read_route
    ) -> None:
        kml = make_kml(("YSSY", "151.177,-33.946,6"), *FIXES)
        fgfp, _ = convert_kml(kml)
        assert read_route(fgfp)[0] == ("navaid", "YSSY")


class TestStyleFilter:
    """Only route-fix styles become waypoints."""

    def test_other_styles_skipped(self, make_kml, convert_kml, read_route) -> None:
        kml = make_kml(
            ("RIVET", "151.65,-34.23", "#FixMark"),
            ("Route line", "1,2,3 4,5,6", "#RouteMark"),
            ("EZE11", "-58.59,-34.81", "#FixMark"),
        )
        fgfp, report = convert_kml(kml)
        assert [ident for _, ident in read_route(fgfp)] == ["RIVET", "EZE11"]
        assert report.skipped == 1
        assert report.dropped == []

    def test_unstyled_placemarks_accepted(self, make_kml, convert_kml, read_route) -> None:
        fgfp, _ = convert_kml(make_kml(("RIVET", "151.65,-34.23")))
        assert read_route(fgfp) == [("navaid", "RIVET")]

    def test_empty_route_style_disables_filter(self, make_kml, convert_kml, read_route) -> None:
        kml = make_kml(("LABEL", "1,2", "#LabelMark"))
        fgfp, _ = convert_kml(kml, config=ConverterConfig(route_style=""))
        assert read_route(fgfp) == [("navaid", "LABEL")]


class TestSkeleton:
    """Document structure and step order."""

    def test_header(self, make_kml, convert_kml) -> None:
        root = etree.fromstring(convert_kml(make_kml())[0])
        assert root.tag == "PropertyList"
        assert root.findtext("version") == "2"
        assert root.find("version").get("type") == "int"
        assert root.findtext("flight-rules") == "V"
        assert root.findtext("flight-type") == "X"
        assert root.findtext("estimated-duration-minutes") == "0"
        assert root[-1].tag == "route"

    def test_zero_placemarks_well_formed(self, make_kml, convert_kml) -> None:
        root = etree.fromstring(convert_kml(make_kml())[0])
        assert root.findall("route/wp") == []

    def test_steps_called_individually(self, make_kml) -> None:
        """The four steps can be driven separately by a caller."""
        output = io.BytesIO()
        with open_event_writer(output) as writer:
            assembler = RouteAssembler(writer)
            assembler.write_start_of_tree()
            assembler.write_airports(Airport("YSSY"), Airport("SAEZ"))
            assert writer.depth == 2
            assembler.transform_route(
                read_events(io.BytesIO(make_kml(*FIXES))),
                Airport("YSSY"),
                Airport("SAEZ"),
            )
            assembler.close_tree()
            assert writer.depth == 0

        root = etree.fromstring(output.getvalue())
        assert len(root.findall("route/wp")) == 5

    def test_close_tree_closes_route_and_root(self) -> None:
        seen: list[object] = []

        class RecordingWriter:
            def write(self, event: object) -> None:
                seen.append(event)

        assembler = RouteAssembler(RecordingWriter())  # type: ignore[arg-type]
        assembler.close_tree()
        assert seen == [EndElement("route"), EndElement("PropertyList")]

    def test_start_of_tree_opens_root_then_route(self) -> None:
        seen: list[object] = []

        class RecordingWriter:
            def write(self, event: object) -> None:
                seen.append(event)

        RouteAssembler(RecordingWriter()).write_start_of_tree()  # type: ignore[arg-type]
        starts = [e for e in seen if isinstance(e, StartElement)]
        assert starts[0] == StartElement("PropertyList")
        assert starts[-1] == StartElement("route")


class TestIndentConfig:
    def test_indent_from_config(self, make_kml, convert_kml) -> None:
        fgfp, _ = convert_kml(make_kml(*FIXES), config=ConverterConfig(indent="  "))
        assert b'\n    <wp n="0">' in fgfp
