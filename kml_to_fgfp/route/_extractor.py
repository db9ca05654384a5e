"""Waypoint candidate extraction from the KML event stream.

An example of the sequence the extractor looks for::

    <Placemark>
        <name>EZE11</name>
        <styleUrl>#FixMark</styleUrl>
        <Point><coordinates>-58.594239,-34.811897,823</coordinates></Point>
    </Placemark>

Only ``Placemark``, ``name``, ``styleUrl`` and ``coordinates`` are
interpreted; every other element (folders, styles, descriptions, the
``Point`` wrapper) is passed over without error.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

from kml_to_fgfp.core.constants import (
    KML_COORDINATES,
    KML_NAME,
    KML_PLACEMARK,
    KML_STYLE_URL,
)
from kml_to_fgfp.events import Characters, EndElement, StartElement
from kml_to_fgfp.models.waypoint import SourcePlacemark

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from kml_to_fgfp.events import XmlEvent

logger = logging.getLogger("kml_to_fgfp.route")


class _State(enum.Enum):
    IDLE = enum.auto()
    IN_PLACEMARK = enum.auto()
    IN_NAME = enum.auto()
    IN_STYLE = enum.auto()
    IN_COORDINATES = enum.auto()


# Text-bearing child element → state entered when it opens
_FIELD_STATES = {
    KML_NAME: _State.IN_NAME,
    KML_STYLE_URL: _State.IN_STYLE,
    KML_COORDINATES: _State.IN_COORDINATES,
}


class _Candidate:
    """Fields collected for the placemark currently open."""

    __slots__ = ("coordinates", "name", "style_url")

    def __init__(self) -> None:
        self.name: str | None = None
        self.style_url: str | None = None
        self.coordinates: str | None = None

    def assign(self, state: _State, text: str) -> None:
        if state is _State.IN_NAME:
            self.name = text
        elif state is _State.IN_STYLE:
            self.style_url = text
        elif state is _State.IN_COORDINATES:
            self.coordinates = text


def extract_placemarks(events: Iterable[XmlEvent]) -> Iterator[SourcePlacemark]:
    """Yield one ``SourcePlacemark`` per complete KML placemark, in order.

    Placemarks without a name or without coordinates are not waypoints
    and are skipped. If the events end inside a placemark, the partial
    placemark is discarded.
    """
    state = _State.IDLE
    candidate = _Candidate()
    text: list[str] = []

    for event in events:
        if isinstance(event, StartElement):
            if state is _State.IDLE and event.name == KML_PLACEMARK:
                state = _State.IN_PLACEMARK
                candidate = _Candidate()
            elif state is _State.IN_PLACEMARK and event.name in _FIELD_STATES:
                state = _FIELD_STATES[event.name]
                text = []

        elif isinstance(event, Characters):
            if state in (_State.IN_NAME, _State.IN_STYLE, _State.IN_COORDINATES):
                text.append(event.text)

        elif isinstance(event, EndElement):
            if _FIELD_STATES.get(event.name) is state:
                candidate.assign(state, "".join(text).strip())
                state = _State.IN_PLACEMARK
            elif state is _State.IN_PLACEMARK and event.name == KML_PLACEMARK:
                state = _State.IDLE
                placemark = _complete(candidate)
                if placemark is not None:
                    yield placemark

    if state is not _State.IDLE:
        logger.debug("Discarding truncated placemark %r at end of source", candidate.name)


def _complete(candidate: _Candidate) -> SourcePlacemark | None:
    if candidate.coordinates is None:
        logger.debug("Skipping placemark %r: no coordinates", candidate.name)
        return None
    if not candidate.name:
        logger.debug("Skipping unnamed placemark at %r", candidate.coordinates)
        return None
    return SourcePlacemark(
        name=candidate.name,
        coordinate_text=candidate.coordinates,
        style_url=candidate.style_url,
    )
