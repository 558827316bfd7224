"""Constants and error codes for the geo bound application."""


class Constants:
    """
    Constants used throughout the geo_bound application.

    Attributes:
        GPS_TAGS (tuple): EXIF attribute names read for coordinate extraction.
        NORTH_SOUTH (frozenset): Valid latitude hemisphere indicators.
        EAST_WEST (frozenset): Valid longitude hemisphere indicators.
        LATITUDE_RANGE (tuple): Inclusive (min, max) for decimal latitude.
        LONGITUDE_RANGE (tuple): Inclusive (min, max) for decimal longitude.
        DEFAULT_WORKERS (int): Number of worker threads when none is configured.
        DEFAULT_CONFIG_FILE (str): Name of the configuration file in the working directory.
        CSV_MANIFEST_FILE (str): Default CSV manifest name when exporting matches.
        KML_MANIFEST_FILE (str): Default KML manifest name when exporting matches.
        KML_POINT_VIEW_RANGE (int): Default view range for KML points in meters.

    Classes:
        ErrorCodes: Application exit codes.
    """

    GPS_LATITUDE = "gps_latitude"
    GPS_LONGITUDE = "gps_longitude"
    GPS_LATITUDE_REF = "gps_latitude_ref"
    GPS_LONGITUDE_REF = "gps_longitude_ref"
    GPS_TAGS = (GPS_LATITUDE, GPS_LONGITUDE, GPS_LATITUDE_REF, GPS_LONGITUDE_REF)

    NORTH_SOUTH = frozenset({"N", "S"})
    EAST_WEST = frozenset({"E", "W"})

    LATITUDE_RANGE = (-90.0, 90.0)
    LONGITUDE_RANGE = (-180.0, 180.0)

    DEFAULT_WORKERS = 1
    DEFAULT_CONFIG_FILE = "geo_bound.toml"

    CSV_MANIFEST_FILE = "bound_matches.csv"
    KML_MANIFEST_FILE = "bound_matches.kml"

    # KML view ranges in meters
    KML_POINT_VIEW_RANGE = 50

    class ErrorCodes:
        """
        ErrorCodes

        Integer exit codes returned by the bound command.

        Attributes:
            SUCCESS (int): Run completed, including runs with zero matches.
            CONFIGURATION_ERROR (int): Bad arguments, paths or bounding rectangle.
            FILE_OPERATION_ERROR (int): At least one matched file could not be copied.
            GENERAL_ERROR (int): Unexpected failure.
            INTERRUPTED (int): Run interrupted by the user.
        """

        SUCCESS = 0
        CONFIGURATION_ERROR = 1
        FILE_OPERATION_ERROR = 2
        GENERAL_ERROR = 3
        INTERRUPTED = 130
