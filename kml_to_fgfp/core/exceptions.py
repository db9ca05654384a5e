"""Unified conversion exception taxonomy.

Every error raised by the converter inherits from ``ConversionError`` and
carries structured context fields (stage, code) so the command line can
report a single actionable line and callers can branch on the category.

Taxonomy categories
-------------------
- ``ValidationError``     — bad data in one placemark. Recovered locally:
  the waypoint is dropped and the conversion continues.
- ``ConfigurationError``  — bad invocation or configuration values. Fatal.
- ``InputError``          — the source KML cannot be read or parsed. Fatal.
- ``OutputError``         — the target flight plan cannot be written. Fatal.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging and the JSON run report.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base exception for all converter errors.

    Attributes:
        message: Human-readable error description.
        stage: Conversion stage where the error occurred
            (e.g. ``"read_kml"``, ``"write_fgfp"``).
        code: Machine-readable error code (e.g. ``"KML_PARSE_FAILED"``).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(self, message: str = "", *, stage: str = "", code: str = "") -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, ConfigurationError):
            return "configuration"
        if isinstance(self, InputError):
            return "input"
        if isinstance(self, OutputError):
            return "output"
        return "conversion"

    @property
    def fatal(self) -> bool:
        """Whether the error aborts the whole conversion."""
        return not isinstance(self, ValidationError)

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "fatal": self.fatal,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(ConversionError):
    """Per-waypoint data failure. Never aborts the conversion."""


class ConfigurationError(ConversionError):
    """Invalid invocation or configuration value."""

    default_stage = "config"


class InputError(ConversionError):
    """The source document cannot be read."""

    default_stage = "read_kml"


class OutputError(ConversionError):
    """The target document cannot be written."""

    default_stage = "write_fgfp"


# ---------------------------------------------------------------------------
# Concrete I/O errors
# ---------------------------------------------------------------------------


class InputReadError(InputError):
    """Raised when the source file cannot be opened or read."""

    default_code = "INPUT_READ_FAILED"


class KmlParseError(InputError):
    """Raised when the source is not well-formed XML."""

    default_code = "KML_PARSE_FAILED"


class OutputWriteError(OutputError):
    """Raised when the target file cannot be created or written."""

    default_code = "OUTPUT_WRITE_FAILED"


class DocumentStructureError(OutputError):
    """Raised when a closing event does not match the open element stack."""

    default_code = "DOCUMENT_STRUCTURE_INVALID"
