"""Bounding rectangle evaluation."""

import logging

from geopy.distance import distance

from .types import BoundingRectangle, GeoCoordinate


def in_bounds(coord: GeoCoordinate | None, rect: BoundingRectangle) -> bool:
    """
    Check whether a coordinate lies inside a bounding rectangle.

    All four edges are inclusive. A missing coordinate is never in bounds.
    """
    if coord is None:
        return False

    return (
        coord.latitude <= rect.lat_top_left
        and coord.longitude >= rect.lon_top_left
        and coord.latitude >= rect.lat_bottom_right
        and coord.longitude <= rect.lon_bottom_right
    )


class BoundsEvaluator:
    """Tests image positions against a bounding rectangle."""

    def __init__(self, rectangle: BoundingRectangle, logger: logging.Logger):
        self.rectangle = rectangle
        self.logger = logger

    def contains(self, coord: GeoCoordinate | None) -> bool:
        return in_bounds(coord, self.rectangle)

    def span_miles(self) -> tuple[float, float]:
        """
        Return the (north-south, east-west) extent of the rectangle in miles.

        The east-west extent is measured along the rectangle's middle latitude.
        """
        rect = self.rectangle
        mid_lat = (rect.lat_top_left + rect.lat_bottom_right) / 2
        height = distance(
            (rect.lat_top_left, rect.lon_top_left), (rect.lat_bottom_right, rect.lon_top_left)
        ).miles
        width = distance((mid_lat, rect.lon_top_left), (mid_lat, rect.lon_bottom_right)).miles
        return height, width

    def log_summary(self) -> None:
        rect = self.rectangle
        self.logger.info(
            f"Bounding rectangle: top-left ({rect.lat_top_left}, {rect.lon_top_left}), "
            f"bottom-right ({rect.lat_bottom_right}, {rect.lon_bottom_right})"
        )
        height, width = self.span_miles()
        self.logger.info(f"Rectangle spans {height:.2f} miles north-south, {width:.2f} miles east-west")
