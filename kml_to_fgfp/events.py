"""Streaming XML events: pull from the KML source, push to the flight plan.

Both sides speak the same three event shapes (``StartElement``,
``Characters``, ``EndElement``) so the route assembler never touches an
element tree. Reading uses an lxml parser *target* fed in chunks;
writing uses ``lxml.etree.xmlfile``. Neither side holds more than the
currently open elements in memory.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, BinaryIO

from kml_to_fgfp.core.constants import DEFAULT_INDENT, DEFAULT_READ_CHUNK_SIZE
from kml_to_fgfp.core.exceptions import DocumentStructureError, KmlParseError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger("kml_to_fgfp.events")


@dataclass(frozen=True, slots=True)
class StartElement:
    """An element opens. ``name`` is the local name, without namespace."""

    name: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Characters:
    """Text content between tags."""

    text: str


@dataclass(frozen=True, slots=True)
class EndElement:
    """An element closes."""

    name: str


XmlEvent = StartElement | Characters | EndElement


def local_name(tag: str) -> str:
    """Strip the namespace: ``{http://www.opengis.net/kml/2.2}name`` → ``name``."""
    return tag.rpartition("}")[2]


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


class _EventCollector:
    """lxml parser target that queues events until the reader drains them.

    Adjacent ``data`` callbacks are merged, so one text node becomes one
    ``Characters`` event even when it spans feed chunks.
    """

    def __init__(self) -> None:
        self.depth = 0
        self._events: list[XmlEvent] = []
        self._text: list[str] = []

    def start(self, tag: str, attrib: dict[str, str], nsmap: object = None) -> None:
        self._flush_text()
        self.depth += 1
        attributes = {local_name(key): value for key, value in attrib.items()}
        self._events.append(StartElement(local_name(tag), attributes))

    def end(self, tag: str) -> None:
        self._flush_text()
        self.depth -= 1
        self._events.append(EndElement(local_name(tag)))

    def data(self, data: str) -> None:
        self._text.append(data)

    def close(self) -> None:
        self._flush_text()

    def drain(self) -> list[XmlEvent]:
        events, self._events = self._events, []
        return events

    def _flush_text(self) -> None:
        if self._text:
            self._events.append(Characters("".join(self._text)))
            self._text = []


def read_events(
    source: BinaryIO, *, chunk_size: int = DEFAULT_READ_CHUNK_SIZE
) -> Iterator[XmlEvent]:
    """Yield structural events from a binary XML stream, one forward pass.

    Events parsed before an error are always yielded first, so the
    caller has written everything up to the point of failure.

    If the input ends while elements are still open the stream just
    ends: a truncated track still converts up to its last complete
    placemark.

    Raises:
        KmlParseError: If the source is empty or not well-formed XML.
    """
    from lxml import etree  # type: ignore[attr-defined]

    collector = _EventCollector()
    parser = etree.XMLParser(
        target=collector, resolve_entities=False, no_network=True, huge_tree=False
    )

    received = 0
    while chunk := source.read(chunk_size):
        received += len(chunk)
        try:
            parser.feed(chunk)
        except etree.XMLSyntaxError as exc:
            yield from collector.drain()
            msg = f"Not valid XML: {exc}"
            raise KmlParseError(msg) from exc
        yield from collector.drain()

    if not received:
        msg = "KML file is empty"
        raise KmlParseError(msg)

    try:
        parser.close()
    except etree.XMLSyntaxError as exc:
        yield from collector.drain()
        if collector.depth <= 0 or exc.code == etree.ErrorTypes.ERR_TAG_NAME_MISMATCH:
            msg = f"Not valid XML: {exc}"
            raise KmlParseError(msg) from exc
        logger.warning(
            "Source ends with %d unclosed element(s), stopping there: %s",
            collector.depth,
            exc,
        )
        return

    yield from collector.drain()


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


class _OpenElement:
    __slots__ = ("context", "has_children", "name")

    def __init__(self, name: str, context: object) -> None:
        self.name = name
        self.context = context
        self.has_children = False


class EventWriter:
    """Push sink that turns events into XML on an ``lxml.etree.xmlfile``.

    Elements that contain other elements get their children on indented
    lines; text-only elements stay on one line. An empty ``indent``
    writes the whole document without whitespace.
    """

    def __init__(self, xf: object, *, indent: str = DEFAULT_INDENT) -> None:
        self._xf = xf
        self._indent = indent
        self._open: list[_OpenElement] = []

    @property
    def depth(self) -> int:
        """Number of elements currently open."""
        return len(self._open)

    def write(self, event: XmlEvent) -> None:
        """Write one event.

        Raises:
            DocumentStructureError: If an ``EndElement`` does not close the
                innermost open element.
            TypeError: If ``event`` is not one of the three event types.
        """
        if isinstance(event, StartElement):
            self._start(event)
        elif isinstance(event, Characters):
            self._xf.write(event.text)  # type: ignore[attr-defined]
        elif isinstance(event, EndElement):
            self._end(event)
        else:
            msg = f"Unsupported XML event: {event!r}"
            raise TypeError(msg)

    def _start(self, event: StartElement) -> None:
        if self._open:
            self._open[-1].has_children = True
            self._newline(len(self._open))
        context = self._xf.element(event.name, event.attributes)  # type: ignore[attr-defined]
        context.__enter__()
        self._open.append(_OpenElement(event.name, context))

    def _end(self, event: EndElement) -> None:
        if not self._open:
            msg = f"Cannot close <{event.name}>: no element is open"
            raise DocumentStructureError(msg)
        if self._open[-1].name != event.name:
            msg = f"Cannot close <{event.name}>: innermost open element is <{self._open[-1].name}>"
            raise DocumentStructureError(msg)

        element = self._open.pop()
        if element.has_children:
            self._newline(len(self._open))
        element.context.__exit__(None, None, None)  # type: ignore[attr-defined]

    def _newline(self, depth: int) -> None:
        if self._indent:
            self._xf.write("\n" + self._indent * depth)  # type: ignore[attr-defined]


@contextmanager
def open_event_writer(stream: BinaryIO, *, indent: str = DEFAULT_INDENT) -> Iterator[EventWriter]:
    """Open an ``EventWriter`` on a binary stream.

    Writes the UTF-8 XML declaration on entry and flushes on exit. The
    caller must have closed every element it opened before leaving the
    block normally.
    """
    from lxml import etree  # type: ignore[attr-defined]

    with etree.xmlfile(stream, encoding="utf-8") as xf:
        xf.write_declaration()
        yield EventWriter(xf, indent=indent)

    if indent:
        stream.write(b"\n")
