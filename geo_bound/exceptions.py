"""Custom exceptions for the geo bound application."""


class GeoBoundError(Exception):
    """Base exception for geo bound operations."""
    pass


class ConfigurationError(GeoBoundError):
    """Raised when arguments, paths or the bounding rectangle are invalid."""
    pass


class GPSDataError(GeoBoundError):
    """Raised when there are GPS data processing errors."""
    pass


class FileOperationError(GeoBoundError):
    """Raised when file operations fail."""
    pass
