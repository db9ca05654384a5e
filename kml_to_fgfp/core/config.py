"""Converter configuration loaded from environment variables.

All values have defaults matching SimBrief KML exports and FlightGear's
own flight-plan files, so the command line works with no environment set.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range, before any file is opened.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from kml_to_fgfp.core.constants import (
    DEFAULT_ALTITUDE_STEP_FT,
    DEFAULT_INDENT,
    DEFAULT_READ_CHUNK_SIZE,
    DEFAULT_ROUTE_STYLE,
)
from kml_to_fgfp.core.exceptions import ConfigurationError


class ConfigValidationError(ConfigurationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ConverterConfig:
    """Immutable converter configuration.

    Attributes:
        indent: Indentation unit for the written flight plan. Empty
            string writes everything on one line.
        altitude_step_ft: Altitudes are rounded to a multiple of this many
            feet. ``0`` keeps the exact converted value.
        route_style: ``styleUrl`` that marks a placemark as a route fix.
            Empty string accepts every placemark.
        read_chunk_size: Bytes fed to the XML parser per read.
    """

    indent: str = DEFAULT_INDENT
    altitude_step_ft: int = DEFAULT_ALTITUDE_STEP_FT
    route_style: str = DEFAULT_ROUTE_STYLE
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE

    @classmethod
    def from_env(cls) -> ConverterConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``KML_TO_FGFP_ALTITUDE_STEP_FT=abc``).
        """
        config = cls(
            indent=os.getenv("KML_TO_FGFP_INDENT", DEFAULT_INDENT),
            altitude_step_ft=int(
                os.getenv("KML_TO_FGFP_ALTITUDE_STEP_FT", str(DEFAULT_ALTITUDE_STEP_FT))
            ),
            route_style=os.getenv("KML_TO_FGFP_ROUTE_STYLE", DEFAULT_ROUTE_STYLE),
            read_chunk_size=int(
                os.getenv("KML_TO_FGFP_READ_CHUNK_SIZE", str(DEFAULT_READ_CHUNK_SIZE))
            ),
        )
        _validate(config)
        return config


def _validate(config: ConverterConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.indent.strip():
        raise ConfigValidationError(
            "KML_TO_FGFP_INDENT",
            config.indent,
            "must contain only whitespace",
        )

    if config.altitude_step_ft < 0:
        raise ConfigValidationError(
            "KML_TO_FGFP_ALTITUDE_STEP_FT",
            config.altitude_step_ft,
            "must be >= 0 (feet)",
        )

    if config.read_chunk_size <= 0:
        raise ConfigValidationError(
            "KML_TO_FGFP_READ_CHUNK_SIZE",
            config.read_chunk_size,
            "must be > 0 (bytes)",
        )
