"""Utility classes for the geo bound application."""

import logging
import os
import re
import shutil
from pathlib import Path

from .exceptions import ConfigurationError, FileOperationError


class LoggingSetup:
    """Handles logging configuration."""

    @staticmethod
    def setup_logging(level: int = logging.INFO) -> logging.Logger:
        """Set up logging configuration."""
        logging.basicConfig(
            level=level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        return logging.getLogger("geo_bound")


class PathNormalizer:
    """Handles path validation and normalization across different platforms."""

    @staticmethod
    def normalize_path(path: str) -> str:
        """Normalize a file path for the current platform."""
        if not path:
            return path
        return str(Path(path).resolve())

    @staticmethod
    def has_trailing_separator(path: str) -> bool:
        """Check if a path string ends with a directory separator."""
        separators = [os.sep]
        if os.altsep:
            separators.append(os.altsep)
        return any(path.endswith(sep) for sep in separators)

    @classmethod
    def validate_directory(cls, path: str | None, role: str) -> Path:
        """
        Validate a directory argument.

        Args:
            path: Path as given by the user
            role: 'source' or 'destination', used in the error message

        Raises:
            ConfigurationError: If the path is missing, is not an existing
                directory, or ends with a separator
        """
        if not path:
            raise ConfigurationError(f"no {role} path provided")
        if cls.has_trailing_separator(path):
            raise ConfigurationError(f"provided {role} path has a trailing separator: {path}")
        if not os.path.isdir(path):
            raise ConfigurationError(f"provided {role} path was invalid: {path}")
        return Path(path)

    @staticmethod
    def get_kml_image_path(image_path: str) -> str:
        """Get the proper image path format for KML files."""
        # KML expects forward slashes and file:// URLs
        normalized = image_path.replace('\\', '/')
        if not normalized.startswith('/'):
            normalized = '/' + normalized
        return f"file://{normalized}"

    @staticmethod
    def sanitize_folder_name(folder_name: str) -> str:
        """Sanitize a folder name for use in file names."""
        sanitized = re.sub(r'[<>:"/\\|?*]', '_', folder_name)
        sanitized = sanitized.strip('. ')
        return sanitized if sanitized else 'images'


class FileOperationManager:
    """Handles copying matched images into the destination directory."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def copy_image(self, source_path: str | Path, destination_directory: str | Path) -> Path:
        """
        Copy a file into destination_directory under its original name.

        An existing file with the same name is overwritten. Paths are handed
        to shutil directly, never through a shell.

        Returns:
            The destination path

        Raises:
            FileOperationError: If the copy fails
        """
        source_path = Path(source_path)
        dest_path = Path(destination_directory) / source_path.name
        try:
            shutil.copy2(source_path, dest_path)
        except (OSError, shutil.Error) as e:
            raise FileOperationError(f"Failed to copy {source_path.name}: {e}") from e

        self.logger.debug(f"Copied: {source_path} -> {dest_path}")
        return dest_path
