"""
Geo Bound - copy the images of a directory whose GPS geotag lies inside a rectangle.

This package provides functionality to:
- Read the EXIF GPS position of image files
- Test positions against a latitude/longitude bounding rectangle
- Copy matching images to a destination directory
- Export the matches to CSV and KML manifests
"""

__version__ = "1.0.0"
__author__ = "stbrie"

from .main import main

__all__ = ["main"]
