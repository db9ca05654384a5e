"""Shared converter constants — single source of truth.

Element names on both sides of the conversion, coordinate bounds, and
the fixed FlightGear header values live here so no module carries its
own copy of a magic string.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Source (KML)
# ---------------------------------------------------------------------------

KML_PLACEMARK = "Placemark"
KML_NAME = "name"
KML_STYLE_URL = "styleUrl"
KML_COORDINATES = "coordinates"

DEFAULT_ROUTE_STYLE = "#FixMark"
"""SimBrief marks route fixes with this style; other styles draw the route line."""

# WGS 84 coordinate bounds
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0

FEET_PER_METRE = 3.280839895
DEFAULT_ALTITUDE_STEP_FT = 100

# ---------------------------------------------------------------------------
# Target (FlightGear .fgfp PropertyList)
# ---------------------------------------------------------------------------

FGFP_ROOT = "PropertyList"
FGFP_ROUTE = "route"
FGFP_WAYPOINT = "wp"

FGFP_HEADER: tuple[tuple[str, str, str], ...] = (
    ("version", "int", "2"),
    ("flight-rules", "string", "V"),
    ("flight-type", "string", "X"),
    ("estimated-duration-minutes", "int", "0"),
)
"""Fixed ``(element, type, value)`` header written after the root opens."""

DEFAULT_INDENT = "\t"
DEFAULT_READ_CHUNK_SIZE = 64 * 1024
