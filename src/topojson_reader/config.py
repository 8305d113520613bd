"""
Configuration for conversions and the command line.
"""

import logging
import os
from dataclasses import dataclass

DEFAULT_PRECISION: int | None = None
"""Decimal places kept in output coordinates; None writes decoded values unrounded."""

LOG_LEVEL_ENV = "TOPOJSON_READER_LOG_LEVEL"
PRECISION_ENV = "TOPOJSON_READER_PRECISION"


@dataclass
class ConversionOptions:
    """Options for converting a Topology object to GeoJSON."""

    object_name: str | None = None
    precision: int | None = DEFAULT_PRECISION
    pretty: bool = False

    def __post_init__(self) -> None:
        """Validate options after initialization."""
        if self.precision is not None and self.precision < 0:
            raise ValueError(f"precision must be non-negative, got {self.precision}")
        if self.object_name == "":
            self.object_name = None


@dataclass
class Settings:
    """Process-wide settings, usually read from the environment."""

    log_level: str = "WARNING"
    precision: int | None = DEFAULT_PRECISION

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        if self.precision is not None and self.precision < 0:
            raise ValueError(f"precision must be non-negative, got {self.precision}")

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Reads TOPOJSON_READER_LOG_LEVEL and TOPOJSON_READER_PRECISION.
        """
        precision = os.environ.get(PRECISION_ENV)
        try:
            precision_value = int(precision) if precision else DEFAULT_PRECISION
        except ValueError as e:
            raise ValueError(f"{PRECISION_ENV} must be an integer, got {precision!r}") from e

        return cls(
            log_level=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
            precision=precision_value,
        )

    def configure_logging(self) -> None:
        """Install a basic stderr handler at the configured level."""
        logging.basicConfig(
            level=self.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
