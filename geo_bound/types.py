"""Type definitions for the geo bound application."""

import math
from dataclasses import dataclass, field
from typing import TypedDict

from .constants import Constants
from .exceptions import ConfigurationError

RationalSextuple = tuple[int, int, int, int, int, int]


@dataclass(frozen=True)
class GeoCoordinate:
    """A decimal-degree position. Missing coordinates are represented as None, never (0, 0)."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundingRectangle:
    """
    Axis-aligned latitude/longitude rectangle.

    The map is oriented north up with the Greenwich meridian centered, so the
    top-left corner is the north-west corner and the bottom-right corner is the
    south-east one. Rectangles crossing the antimeridian are not supported.
    """
    lat_top_left: float
    lon_top_left: float
    lat_bottom_right: float
    lon_bottom_right: float

    def validate(self) -> None:
        """Raise ConfigurationError unless the corners form a non-degenerate rectangle."""
        for name, value, (low, high) in (
            ("latitude", self.lat_top_left, Constants.LATITUDE_RANGE),
            ("longitude", self.lon_top_left, Constants.LONGITUDE_RANGE),
            ("latitude", self.lat_bottom_right, Constants.LATITUDE_RANGE),
            ("longitude", self.lon_bottom_right, Constants.LONGITUDE_RANGE),
        ):
            if not math.isfinite(value):
                raise ConfigurationError(f"invalid floating point parameter: {value}")
            if value < low or value > high:
                raise ConfigurationError(f"{name} parameter out of range: {value}")

        if self.lat_top_left <= self.lat_bottom_right or self.lon_top_left >= self.lon_bottom_right:
            raise ConfigurationError(
                "deformed bounding rectangle defined: top-left "
                f"({self.lat_top_left}, {self.lon_top_left}) must be north-west of bottom-right "
                f"({self.lat_bottom_right}, {self.lon_bottom_right})"
            )

    @property
    def center(self) -> tuple[float, float]:
        return (
            (self.lat_top_left + self.lat_bottom_right) / 2,
            (self.lon_top_left + self.lon_bottom_right) / 2,
        )


# Tag decoder results


@dataclass(frozen=True)
class TagPresent:
    """A tag that was found and read."""
    value: object


@dataclass(frozen=True)
class TagAbsent:
    """A tag that the metadata does not contain."""


@dataclass(frozen=True)
class TagReadError:
    """A tag that exists but could not be read."""
    reason: str


TagLookupResult = TagPresent | TagAbsent | TagReadError


@dataclass(frozen=True)
class DecodeFailed:
    """The file has no readable EXIF metadata at all."""
    reason: str


class ImageData(TypedDict):
    """Type definition for a matched image."""
    filename: str
    path: str
    latitude: float
    longitude: float


@dataclass
class BoundResult:
    """Outcome of one filter run."""
    scanned: int = 0
    matched: list[ImageData] = field(default_factory=list)
    copied: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def copied_count(self) -> int:
        return len(self.copied)


# Configuration


@dataclass
class BoundsConfig:
    """Bounding rectangle parameters as given by the user."""
    lat_top_left: float | None = None
    lon_top_left: float | None = None
    lat_bottom_right: float | None = None
    lon_bottom_right: float | None = None

    def to_rectangle(self) -> BoundingRectangle:
        """Build a validated BoundingRectangle."""
        values = (self.lat_top_left, self.lon_top_left, self.lat_bottom_right, self.lon_bottom_right)
        if any(value is None for value in values):
            raise ConfigurationError("some bounding coords are missing")
        rectangle = BoundingRectangle(*values)
        rectangle.validate()
        return rectangle


@dataclass
class DirectoryConfig:
    """Directory configuration parameters."""
    source: str | None = None
    destination: str | None = None
    find_only: bool = False


@dataclass
class OutputConfig:
    """Output configuration parameters."""
    verbose: bool = False
    export_csv: str | None = None
    export_kml: str | None = None


@dataclass
class ProcessingConfig:
    """Processing configuration parameters."""
    workers: int = Constants.DEFAULT_WORKERS


@dataclass
class ApplicationConfig:
    """Complete, validated configuration for one run."""
    rectangle: BoundingRectangle
    directory: DirectoryConfig
    output: OutputConfig = field(default_factory=OutputConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
