"""File-level conversion: open the KML, create the flight plan, convert.

This is the only module that touches the filesystem. The source is
opened before the target so a missing input never truncates an
existing output file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from kml_to_fgfp.core.config import ConverterConfig
from kml_to_fgfp.core.exceptions import InputReadError, OutputWriteError
from kml_to_fgfp.events import open_event_writer, read_events
from kml_to_fgfp.route import convert

if TYPE_CHECKING:
    from kml_to_fgfp.models.report import ConversionReport
    from kml_to_fgfp.models.waypoint import Airport

logger = logging.getLogger("kml_to_fgfp.runner")


def run(
    input_path: Path | str,
    output_path: Path | str,
    departure: Airport | None = None,
    destination: Airport | None = None,
    *,
    config: ConverterConfig | None = None,
) -> ConversionReport:
    """Convert the KML at ``input_path`` into a flight plan at ``output_path``.

    The output is overwritten if it exists. On a fatal error the
    partially written output is left on disk.

    Raises:
        InputReadError: If the KML file cannot be opened.
        OutputWriteError: If the flight plan cannot be created.
        KmlParseError: If the KML is not well-formed XML.
    """
    config = config or ConverterConfig()
    input_path = Path(input_path)
    output_path = Path(output_path)

    logger.info("Converting %s → %s", input_path, output_path)

    try:
        source = input_path.open("rb")
    except OSError as exc:
        msg = f"Cannot read KML file: {exc}"
        raise InputReadError(msg) from exc

    with source:
        try:
            target = output_path.open("wb")
        except OSError as exc:
            msg = f"Cannot create flight plan: {exc}"
            raise OutputWriteError(msg) from exc

        with target, open_event_writer(target, indent=config.indent) as writer:
            report = convert(
                read_events(source, chunk_size=config.read_chunk_size),
                writer,
                departure,
                destination,
                config=config,
            )

    report.source = str(input_path)
    report.target = str(output_path)
    return report
