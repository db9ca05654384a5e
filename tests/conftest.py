"""Shared pytest fixtures for the kml-to-fgfp test suite."""

from __future__ import annotations

import io
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from lxml import etree

from kml_to_fgfp.core.config import ConverterConfig
from kml_to_fgfp.events import open_event_writer, read_events
from kml_to_fgfp.route import convert

if TYPE_CHECKING:
    from collections.abc import Callable

    from kml_to_fgfp.models.report import ConversionReport
    from kml_to_fgfp.models.waypoint import Airport

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def simbrief_kml(data_dir: Path) -> Path:
    """SimBrief YSSY → SAEZ export: 5 fixes (one malformed) and a route line."""
    return data_dir / "01_simbrief_route.kml"


@pytest.fixture()
def truncated_kml(data_dir: Path) -> Path:
    """KML cut off in the middle of its third placemark."""
    return data_dir / "02_truncated_route.kml"


@pytest.fixture()
def not_xml_kml(data_dir: Path) -> Path:
    """A file that is not XML at all."""
    return data_dir / "03_malformed_not_xml.kml"


@pytest.fixture()
def empty_document_kml(data_dir: Path) -> Path:
    """Valid KML with a Document and no placemarks."""
    return data_dir / "04_empty_document.kml"


# ---------------------------------------------------------------------------
# In-memory KML and conversion helpers
# ---------------------------------------------------------------------------


def build_kml(*placemarks: tuple[str, ...], namespace: str = KML_NAMESPACE) -> bytes:
    """Build a KML document from ``(name, coordinates[, style_url])`` tuples."""
    body = []
    for placemark in placemarks:
        name, coordinates = placemark[0], placemark[1]
        style = f"<styleUrl>{placemark[2]}</styleUrl>" if len(placemark) > 2 else ""
        body.append(
            f"<Placemark><name>{name}</name>{style}"
            f"<Point><coordinates>{coordinates}</coordinates></Point></Placemark>"
        )
    xmlns = f' xmlns="{namespace}"' if namespace else ""
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>\n<kml{xmlns}><Document>'
        f"<name>Test route</name>{''.join(body)}</Document></kml>"
    ).encode()


def convert_bytes(
    kml: bytes,
    departure: Airport | None = None,
    destination: Airport | None = None,
    *,
    config: ConverterConfig | None = None,
) -> tuple[bytes, ConversionReport]:
    """Convert KML bytes in memory; return the flight-plan bytes and report."""
    config = config or ConverterConfig()
    output = io.BytesIO()
    with open_event_writer(output, indent=config.indent) as writer:
        report = convert(
            read_events(io.BytesIO(kml), chunk_size=config.read_chunk_size),
            writer,
            departure,
            destination,
            config=config,
        )
    return output.getvalue(), report


def route_of(fgfp: bytes) -> list[tuple[str, str]]:
    """Return ``(type, ident)`` for every ``wp`` under ``route``, in order."""
    root = etree.fromstring(fgfp)
    return [(wp.findtext("type"), wp.findtext("ident")) for wp in root.findall("route/wp")]


@pytest.fixture()
def make_kml() -> Callable[..., bytes]:
    return build_kml


@pytest.fixture()
def convert_kml() -> Callable[..., tuple[bytes, ConversionReport]]:
    return convert_bytes


@pytest.fixture()
def read_route() -> Callable[[bytes], list[tuple[str, str]]]:
    return route_of
