"""EXIF tag decoding backed by the exif library."""

import logging

from exif import Image

from .types import DecodeFailed, TagAbsent, TagLookupResult, TagPresent, TagReadError


class TagTable:
    """
    Read access to the tags of one decoded image.

    Wraps an exif.Image so callers only ever see TagPresent, TagAbsent or
    TagReadError instead of attribute errors raised from inside the library.
    """

    def __init__(self, image):
        self._image = image

    def lookup(self, tag_name: str) -> TagLookupResult:
        """Look up a tag by its exif attribute name (e.g. 'gps_latitude')."""
        try:
            value = getattr(self._image, tag_name)
        except AttributeError:
            return TagAbsent()
        except Exception as e:  # pylint: disable=broad-exception-caught
            # exif unpacks tag values lazily, so corrupt entries surface here
            return TagReadError(f"{type(e).__name__}: {e}")

        if value is None:
            return TagAbsent()
        return TagPresent(value)


class ExifTagDecoder:
    """Decodes image files into TagTables."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def decode_tags(self, path: str) -> TagTable | DecodeFailed:
        """
        Decode the EXIF segment of the file at path.

        Args:
            path: Full path to the file

        Returns:
            TagTable on success, DecodeFailed when the file is unreadable, is not
            an image, or carries no EXIF segment
        """
        try:
            with open(path, "rb") as img_file:
                image = Image(img_file)
        except (OSError, IOError) as e:
            return self._failed(path, f"could not read file: {e}")
        except Exception as e:  # pylint: disable=broad-exception-caught
            # non-JPEG input and corrupt headers raise from the binary unpacker
            return self._failed(path, f"invalid image format: {e}")

        try:
            has_exif = image.has_exif
        except Exception as e:  # pylint: disable=broad-exception-caught
            return self._failed(path, f"corrupt EXIF header: {e}")

        if not has_exif:
            return self._failed(path, "no EXIF segment")
        return TagTable(image)

    def _failed(self, path: str, reason: str) -> DecodeFailed:
        self.logger.debug(f"No EXIF data for {path}: {reason}")
        return DecodeFailed(reason)
