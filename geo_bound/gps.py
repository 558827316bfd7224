"""GPS data processing and image metadata extraction."""

import logging
import math
from collections.abc import Sequence

from .constants import Constants
from .decoder import ExifTagDecoder
from .exceptions import GPSDataError
from .types import DecodeFailed, GeoCoordinate, RationalSextuple, TagPresent


def _ratio(numerator: int, denominator: int) -> float:
    """Divide with IEEE semantics: a zero denominator gives inf or nan instead of raising."""
    if denominator == 0:
        if numerator == 0:
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def convert_dms(rationals: Sequence[int], hemisphere: str) -> float:
    """
    Convert degrees, minutes, seconds in rational form to decimal degrees.

    Args:
        rationals: Six integers, (numerator, denominator) pairs for degrees,
            minutes and seconds
        hemisphere: 'N' or 'E' keep the sign, anything else negates it

    Returns:
        Decimal degrees relative to NE. No range check is applied, and a zero
        denominator yields a non-finite value.
    """
    if len(rationals) != 6:
        raise GPSDataError(f"Expected 6 rational values, got {len(rationals)}")

    degrees = _ratio(rationals[0], rationals[1])
    degrees += _ratio(rationals[2], rationals[3]) / 60
    degrees += _ratio(rationals[4], rationals[5]) / 3600

    return degrees if hemisphere in ("N", "E") else -degrees


def rationals_from_dms(dms: Sequence) -> RationalSextuple:
    """
    Flatten [degrees, minutes, seconds] into a RationalSextuple.

    The exif library exposes RATIONAL tags as floats; as_integer_ratio()
    recovers an exact fraction for each, so the conversion is lossless.
    """
    if dms is None or len(dms) != 3:
        raise GPSDataError(f"Expected degrees, minutes and seconds, got {dms!r}")

    rationals: list[int] = []
    for component in dms:
        try:
            numerator, denominator = float(component).as_integer_ratio()
        except (TypeError, ValueError, OverflowError) as e:
            raise GPSDataError(f"Invalid DMS component {component!r}: {e}") from e
        rationals.extend((numerator, denominator))
    return tuple(rationals)  # type: ignore[return-value]


def normalize_hemisphere(ref) -> str | None:
    """Return the single upper-case hemisphere letter of a GPS ref tag, or None."""
    if isinstance(ref, bytes):
        ref = ref.decode("ascii", errors="replace")
    if not isinstance(ref, str):
        return None
    ref = ref.strip().strip("\x00").upper()
    return ref if len(ref) == 1 else None


class GPSCoordinateExtractor:
    """Handles GPS coordinate extraction from image files."""

    def __init__(self, logger: logging.Logger, decoder: ExifTagDecoder | None = None):
        self.logger = logger
        self.decoder = decoder or ExifTagDecoder(logger)

    def extract(self, path: str) -> GeoCoordinate | None:
        """
        Extract the GPS position of a single file.

        A file without EXIF data, with any of the four GPS tags missing or
        unreadable, or with malformed values yields None. That is the expected
        outcome for most files and is never raised as an error.

        Args:
            path: Full path to the file

        Returns:
            GeoCoordinate, or None when no usable position is available
        """
        table = self.decoder.decode_tags(path)
        if isinstance(table, DecodeFailed):
            return None

        values = {}
        for tag in Constants.GPS_TAGS:
            result = table.lookup(tag)
            if not isinstance(result, TagPresent):
                self.logger.debug(f"{path}: {tag} unavailable ({result})")
                return None
            values[tag] = result.value

        lat_ref = normalize_hemisphere(values[Constants.GPS_LATITUDE_REF])
        lon_ref = normalize_hemisphere(values[Constants.GPS_LONGITUDE_REF])
        if lat_ref not in Constants.NORTH_SOUTH or lon_ref not in Constants.EAST_WEST:
            self.logger.debug(
                f"{path}: invalid hemisphere refs "
                f"{values[Constants.GPS_LATITUDE_REF]!r}/{values[Constants.GPS_LONGITUDE_REF]!r}"
            )
            return None

        try:
            latitude = convert_dms(rationals_from_dms(values[Constants.GPS_LATITUDE]), lat_ref)
            longitude = convert_dms(rationals_from_dms(values[Constants.GPS_LONGITUDE]), lon_ref)
        except (GPSDataError, TypeError) as e:
            self.logger.debug(f"{path}: malformed GPS data: {e}")
            return None

        if not self._in_range(latitude, Constants.LATITUDE_RANGE) or not self._in_range(
            longitude, Constants.LONGITUDE_RANGE
        ):
            self.logger.debug(f"{path}: GPS position out of range ({latitude}, {longitude})")
            return None

        return GeoCoordinate(latitude=latitude, longitude=longitude)

    @staticmethod
    def _in_range(value: float, bounds: tuple[float, float]) -> bool:
        return math.isfinite(value) and bounds[0] <= value <= bounds[1]
