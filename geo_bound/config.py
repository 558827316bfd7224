"""Configuration management for the geo bound application."""

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import NoReturn

import tomllib

from .constants import Constants
from .exceptions import ConfigurationError, FileOperationError
from .types import (
    ApplicationConfig,
    BoundsConfig,
    DirectoryConfig,
    OutputConfig,
    ProcessingConfig,
)
from .utils import PathNormalizer


class BoundArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors as ConfigurationError instead of exiting with 2."""

    def error(self, message: str) -> NoReturn:
        raise ConfigurationError(message)


class ConfigurationManager:
    """
    Builds the application configuration from the command line and an optional
    TOML configuration file.

    Responsibilities:
        - Parse command-line arguments using argparse.
        - Load configuration from TOML files, supporting multiple standard locations.
        - Merge configuration file values with command-line arguments, prioritizing
            explicit arguments.
        - Validate directories and the bounding rectangle before any file is touched.

    Exceptions:
        Raises ConfigurationError for invalid or missing configuration.
        Raises FileOperationError when a sample config file cannot be written.
    """

    # (toml_section, arg_name, toml_field)
    FIELD_MAPPINGS = [
        ("directories", "source", "source"),
        ("directories", "destination", "destination"),
        ("directories", "find_only", "find_only"),
        ("bounds", "lat_top_left", "lat_top_left"),
        ("bounds", "lon_top_left", "lon_top_left"),
        ("bounds", "lat_bottom_right", "lat_bottom_right"),
        ("bounds", "lon_bottom_right", "lon_bottom_right"),
        ("output", "verbose", "verbose"),
        ("output", "export_csv", "export_csv"),
        ("output", "export_kml", "export_kml"),
        ("processing", "workers", "workers"),
    ]

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.path_normalizer = PathNormalizer()

    def parse_arguments_and_config(self, argv: list[str] | None = None) -> ApplicationConfig:
        """
        Parse command line arguments and configuration file into an ApplicationConfig.

        Steps:
        1. Parse command line arguments.
        2. Handle early exit if a sample configuration file was requested.
        3. Load and merge the TOML configuration file, if any.
        4. Validate source and destination directories.
        5. Parse and validate the bounding rectangle.

        Raises:
            ConfigurationError: If arguments are missing or invalid.

        Returns:
            ApplicationConfig: The validated configuration.
        """
        args = self._create_argument_parser().parse_args(argv)

        if args.create_config:
            self._create_sample_config(args.create_config)
            sys.exit(Constants.ErrorCodes.SUCCESS)

        config_data = self._load_config_file(args.config)
        if config_data:
            self._merge_config_with_args(config_data, args)

        # Same order as the positional arguments, so the first problem is reported
        self.path_normalizer.validate_directory(args.source, "source")
        self.path_normalizer.validate_directory(args.destination, "destination")

        bounds_config = self._parse_bounds(args)
        rectangle = bounds_config.to_rectangle()

        directory_config = DirectoryConfig(
            source=args.source,
            destination=args.destination,
            find_only=bool(args.find_only),
        )
        output_config = OutputConfig(
            verbose=bool(args.verbose),
            export_csv=args.export_csv,
            export_kml=args.export_kml,
        )
        processing_config = ProcessingConfig(workers=self._parse_workers(args.workers))

        return ApplicationConfig(
            rectangle=rectangle,
            directory=directory_config,
            output=output_config,
            processing=processing_config,
        )

    def _create_argument_parser(self) -> argparse.ArgumentParser:
        """
        Creates the argument parser for the bound command.

        Coordinates are taken as strings and converted later so that invalid
        values get the same diagnostics whether they come from the command line
        or the configuration file. Negative coordinates are accepted as
        positionals.
        """
        parser = BoundArgumentParser(
            prog="bound",
            description=(
                "Copies the images of a source directory whose EXIF GPS position lies "
                "inside a bounding rectangle into a destination directory."
            ),
            epilog="Examples:\n"
            "  %(prog)s photos nyc 40.0 -75.0 39.0 -74.0\n"
            "  %(prog)s photos nyc 40.0 -75.0 39.0 -74.0 --find-only -v\n"
            "  %(prog)s --config trip.toml --export-kml\n"
            "  %(prog)s --create-config  # Create sample config file\n\n"
            "The rectangle is given by its north-west (top-left) and south-east\n"
            "(bottom-right) corners in decimal degrees.\n\n"
            "Configuration files (TOML format) are searched in this order:\n"
            f"  1. Path specified with --config\n"
            f"  2. ./{Constants.DEFAULT_CONFIG_FILE}\n"
            "  3. ~/.config/geo_bound/config.toml\n"
            "  4. ~/.geo_bound.toml",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument("source", nargs="?", help="directory of images to filter")
        parser.add_argument("destination", nargs="?", help="directory to copy matching images to")
        parser.add_argument("lat_top_left", nargs="?", help="latitude of the top-left corner")
        parser.add_argument("lon_top_left", nargs="?", help="longitude of the top-left corner")
        parser.add_argument("lat_bottom_right", nargs="?", help="latitude of the bottom-right corner")
        parser.add_argument("lon_bottom_right", nargs="?", help="longitude of the bottom-right corner")

        parser.add_argument(
            "-v", "--verbose", action="store_true", help="print additional information"
        )
        parser.add_argument(
            "-f",
            "--find-only",
            dest="find_only",
            action="store_true",
            help="report matching images without copying them",
        )
        parser.add_argument(
            "-w",
            "--workers",
            type=str,
            help=f"number of files processed in parallel (default {Constants.DEFAULT_WORKERS})",
        )
        parser.add_argument(
            "--export-csv",
            type=str,
            nargs="?",
            const=Constants.CSV_MANIFEST_FILE,
            help="write matched images to a CSV file (optionally specify path)",
        )
        parser.add_argument(
            "--export-kml",
            type=str,
            nargs="?",
            const=Constants.KML_MANIFEST_FILE,
            help="write matched images and the rectangle to a KML file (optionally specify path)",
        )
        parser.add_argument(
            "--config",
            type=str,
            help="Path to TOML configuration file (optional)",
        )
        parser.add_argument(
            "--create-config",
            type=str,
            nargs="?",
            const=Constants.DEFAULT_CONFIG_FILE,
            help="Create a sample configuration file and exit (optionally specify path)",
        )

        return parser

    def _load_config_file(self, config_path: str | Path | None = None) -> dict:
        """
        Loads configuration data from a TOML file.

        An explicitly requested file that cannot be loaded is a configuration
        error; problems with the standard locations are logged and skipped.

        Returns:
            dict: The loaded configuration, or an empty dict if no file was found.
        """
        if config_path:
            config_file = Path(config_path)
            if not config_file.exists():
                raise ConfigurationError(f"Config file not found: {config_file}")
            try:
                return self._read_toml(config_file)
            except (OSError, tomllib.TOMLDecodeError) as e:
                raise ConfigurationError(f"Could not load config file {config_file}: {e}") from e

        config_locations = [
            Path.cwd() / Constants.DEFAULT_CONFIG_FILE,
            Path.home() / ".config" / "geo_bound" / "config.toml",
            Path.home() / ".geo_bound.toml",
        ]

        for config_file in config_locations:
            if config_file.exists():
                try:
                    return self._read_toml(config_file)
                except (OSError, IOError) as e:
                    self.logger.warning(f"Could not load config file {config_file}: {e}")
                except tomllib.TOMLDecodeError as e:
                    self.logger.warning(f"Could not parse config file {config_file}: {e}")

        return {}

    def _read_toml(self, config_file: Path) -> dict:
        with open(config_file, "rb") as f:
            config_data = tomllib.load(f)
        self.logger.info(f"Loaded configuration from: {config_file}")
        return config_data

    def _merge_config_with_args(self, config_data: dict, args: argparse.Namespace) -> None:
        """Fill arguments not given on the command line from the configuration file."""
        for toml_section, arg_name, toml_field in self.FIELD_MAPPINGS:
            section_data = config_data.get(toml_section, {})
            if toml_field not in section_data:
                continue
            current = getattr(args, arg_name, None)
            if current is None or current is False:
                setattr(args, arg_name, section_data[toml_field])

    def _parse_bounds(self, args: argparse.Namespace) -> BoundsConfig:
        """Convert the four rectangle arguments to floats."""
        names = ("lat_top_left", "lon_top_left", "lat_bottom_right", "lon_bottom_right")
        raw_values = [getattr(args, name) for name in names]
        if any(value is None for value in raw_values):
            raise ConfigurationError("some bounding coords are missing")

        return BoundsConfig(*(self._parse_coordinate(value) for value in raw_values))

    @staticmethod
    def _parse_coordinate(value) -> float:
        if isinstance(value, bool):
            raise ConfigurationError(f"invalid floating point parameter: {value!r}")
        try:
            parsed = float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"invalid floating point parameter: {value!r}") from e
        if not math.isfinite(parsed):
            raise ConfigurationError(f"invalid floating point parameter: {value!r}")
        return parsed

    @staticmethod
    def _parse_workers(value) -> int:
        if value is None:
            return Constants.DEFAULT_WORKERS
        try:
            workers = int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"invalid worker count: {value!r}") from e
        if isinstance(value, bool) or workers < 1:
            raise ConfigurationError(f"invalid worker count: {value!r}")
        return workers

    def _create_sample_config(self, output_path: str | Path | None = None) -> None:
        """
        Creates a sample configuration file in TOML format.

        Raises:
            FileOperationError: If the configuration file cannot be created.
        """
        if not output_path:
            output_path = Path.cwd() / Constants.DEFAULT_CONFIG_FILE
        else:
            output_path = Path(output_path)

        sample_config = """# Geo Bound Configuration File
# Save this as geo_bound.toml in your working directory,
# ~/.config/geo_bound/config.toml, or ~/.geo_bound.toml
# Command-line arguments always take precedence.

[directories]
source = "/path/to/photos"       # Directory of images to filter (no trailing slash)
destination = "/path/to/matches" # Directory matching images are copied to
find_only = false                # Only report matches, don't copy them

[bounds]
# Decimal degrees. Top-left is the north-west corner, bottom-right the south-east.
lat_top_left = 40.0
lon_top_left = -75.0
lat_bottom_right = 39.0
lon_bottom_right = -74.0

[output]
verbose = false
# export_csv = "bound_matches.csv"  # Write matched images to CSV
# export_kml = "bound_matches.kml"  # Write matched images and the rectangle to KML

[processing]
workers = 1              # Files processed in parallel
"""

        try:
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(sample_config)
            self.logger.info(f"Sample configuration file created: {output_path}")
            self.logger.info("Edit this file with your preferred settings.")
        except (OSError, IOError) as e:
            self.logger.error(f"Error creating sample config file: {e}")
            raise FileOperationError(f"Could not create config file: {e}") from e
