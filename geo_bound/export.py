"""Export of matched images to CSV and KML manifests."""

import csv
import logging
from pathlib import Path

try:
    from fastkml.kml import KML
    from fastkml.containers import Document, Folder
    from fastkml.views import LookAt
    from fastkml.features import Placemark
    from pygeoif.geometry import Point, Polygon
    KML_AVAILABLE = True
except ImportError:
    KML_AVAILABLE = False
    KML = None
    Document = None
    Folder = None
    LookAt = None
    Placemark = None
    Point = None
    Polygon = None

from .constants import Constants
from .exceptions import FileOperationError
from .types import BoundingRectangle, ImageData
from .utils import PathNormalizer


class ExportManager:
    """Base class for export functionality."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.path_normalizer = PathNormalizer()


class CSVExporter(ExportManager):
    """Handles CSV export functionality."""

    FIELDNAMES = ["filename", "path", "latitude", "longitude"]

    def export_matches(self, images: list[ImageData], csv_path: str | Path) -> bool:
        """
        Write one row per matched image.

        Returns:
            True if a file was written, False when there was nothing to export

        Raises:
            FileOperationError: If the file cannot be written
        """
        if not images:
            self.logger.info("No matched images for CSV export.")
            return False

        rows = [
            {**image, "path": self.path_normalizer.normalize_path(image["path"])}
            for image in images
        ]
        try:
            with open(csv_path, "w", newline="", encoding="utf-8") as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=self.FIELDNAMES)
                writer.writeheader()
                writer.writerows(rows)
        except (OSError, IOError) as e:
            raise FileOperationError(f"Error writing CSV file {csv_path}: {e}") from e

        self.logger.info(f"Exported {len(rows)} matched images to {csv_path}")
        return True


class KMLExporter(ExportManager):
    """Handles KML export functionality."""

    def __init__(self, logger: logging.Logger):
        super().__init__(logger)
        if not KML_AVAILABLE:
            self.logger.warning("KML export not available. Install 'fastkml' and 'pygeoif' packages.")

    def build_kml(
        self,
        images: list[ImageData],
        rectangle: BoundingRectangle,
        folder_name: str = "Images",
    ) -> str:
        """
        Build KML content showing the bounding rectangle and every matched image.

        Args:
            images: Matched images
            rectangle: The rectangle images were tested against
            folder_name: Name for the KML folder holding the image placemarks

        Returns:
            KML content as string
        """
        if not KML_AVAILABLE:
            raise ImportError("KML export not available. Install 'fastkml' and 'pygeoif' packages.")

        k = KML()
        doc = Document(
            id=self.path_normalizer.sanitize_folder_name(f"geo_bound_{folder_name}"),
            name="Geo Bound Results",
            description=f"{len(images)} images inside the bounding rectangle",
        )
        k.append(doc)

        # Rectangle outline, closed ring in (lon, lat) order
        ring = [
            (rectangle.lon_top_left, rectangle.lat_top_left),
            (rectangle.lon_bottom_right, rectangle.lat_top_left),
            (rectangle.lon_bottom_right, rectangle.lat_bottom_right),
            (rectangle.lon_top_left, rectangle.lat_bottom_right),
            (rectangle.lon_top_left, rectangle.lat_top_left),
        ]
        center_lat, center_lon = rectangle.center
        doc.append(
            Placemark(
                name="Bounding Rectangle",
                description=(
                    f"Top-left {rectangle.lat_top_left:.6f}, {rectangle.lon_top_left:.6f}; "
                    f"bottom-right {rectangle.lat_bottom_right:.6f}, {rectangle.lon_bottom_right:.6f}"
                ),
                geometry=Polygon(ring),
                view=LookAt(latitude=center_lat, longitude=center_lon),
            )
        )

        images_folder = Folder(name=folder_name, description=f"Found {len(images)} images")
        doc.append(images_folder)

        for img_data in images:
            lati = float(img_data["latitude"])
            longi = float(img_data["longitude"])
            images_folder.append(
                Placemark(
                    name=img_data["filename"],
                    description=self.path_normalizer.get_kml_image_path(img_data["path"]),
                    geometry=Point(longi, lati, 0),
                    view=LookAt(range=Constants.KML_POINT_VIEW_RANGE, latitude=lati, longitude=longi),
                )
            )

        return k.to_string(prettyprint=True)

    def export_kml(
        self, images: list[ImageData], rectangle: BoundingRectangle, kml_path: str | Path
    ) -> bool:
        """Write the KML manifest. Returns False if KML support or matches are missing."""
        if not KML_AVAILABLE:
            self.logger.warning("Skipping KML export: fastkml is not installed.")
            return False
        if not images:
            self.logger.info("No matched images for KML export.")
            return False

        kml_content = self.build_kml(images, rectangle, folder_name=Path(kml_path).stem)
        try:
            with open(kml_path, "w", encoding="utf-8") as f:
                f.write(kml_content)
        except (OSError, IOError) as e:
            raise FileOperationError(f"Error writing KML file {kml_path}: {e}") from e

        self.logger.info(f"Exported {len(images)} matched images to {kml_path}")
        return True
