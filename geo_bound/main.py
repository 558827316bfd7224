"""Main application module for geo bound."""

import logging
import os
import sys
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from .bounds import BoundsEvaluator
from .config import ConfigurationManager
from .constants import Constants
from .exceptions import ConfigurationError, FileOperationError
from .export import CSVExporter, KMLExporter
from .gps import GPSCoordinateExtractor
from .types import ApplicationConfig, BoundResult, ImageData
from .utils import FileOperationManager, LoggingSetup


@dataclass
class _FileOutcome:
    """Result of processing one source file."""
    name: str
    image_data: ImageData | None = None
    copied: bool = False
    error: str | None = None


class BoundWorkflow:
    """Orchestrates the directory filter and copy workflow."""

    def __init__(
        self,
        logger: logging.Logger,
        extractor: GPSCoordinateExtractor | None = None,
        file_manager: FileOperationManager | None = None,
        on_copied: Callable[[str], None] | None = None,
    ):
        self.logger = logger
        self.extractor = extractor or GPSCoordinateExtractor(logger)
        self.file_manager = file_manager or FileOperationManager(logger)
        self.on_copied = on_copied
        self.bounds_evaluator: BoundsEvaluator | None = None

    def run(self, app_config: ApplicationConfig) -> BoundResult:
        """Run the filter over the source directory and return the run report."""
        self.bounds_evaluator = BoundsEvaluator(app_config.rectangle, self.logger)
        self.bounds_evaluator.log_summary()

        source = Path(app_config.directory.source)
        destination = Path(app_config.directory.destination)
        copy_files = not app_config.directory.find_only
        workers = app_config.processing.workers

        self.logger.info(f"Scanning directory: {source}")
        if not copy_files:
            self.logger.info("Find-only mode: matching images will not be copied")

        result = BoundResult()
        with os.scandir(source) as entries:
            files = self._regular_files(entries)
            if workers > 1:
                with ThreadPoolExecutor(max_workers=workers) as executor:
                    outcomes = executor.map(
                        lambda entry: self._process_file(entry, destination, copy_files), files
                    )
                    for outcome in outcomes:
                        self._record(result, outcome)
            else:
                for entry in files:
                    self._record(result, self._process_file(entry, destination, copy_files))

        self.logger.info(
            f"Scanned {result.scanned} files, {len(result.matched)} inside the rectangle"
        )
        if copy_files:
            self.logger.info(f"Copied {result.copied_count} images to {destination}")
        if result.failed:
            self.logger.error(f"Failed to copy {len(result.failed)} images")

        self._handle_exports(result, app_config)
        return result

    def _regular_files(self, entries) -> Iterator[os.DirEntry]:
        """Yield regular files only. Directories, symlinks and special files are skipped."""
        for entry in entries:
            try:
                if entry.is_file(follow_symlinks=False):
                    yield entry
            except OSError as e:
                self.logger.debug(f"Skipping {entry.name}: {e}")

    def _process_file(self, entry: os.DirEntry, destination: Path, copy_files: bool) -> _FileOutcome:
        """Extract, test and copy a single file."""
        assert self.bounds_evaluator is not None, "Bounds evaluator must be initialized first"
        outcome = _FileOutcome(name=entry.name)

        coord = self.extractor.extract(entry.path)
        if not self.bounds_evaluator.contains(coord):
            return outcome

        outcome.image_data = ImageData(
            filename=entry.name,
            path=entry.path,
            latitude=coord.latitude,
            longitude=coord.longitude,
        )
        if not copy_files:
            self.logger.info(f"match: {entry.name}")
            return outcome

        try:
            self.file_manager.copy_image(entry.path, destination)
        except FileOperationError as e:
            self.logger.error(str(e))
            outcome.error = str(e)
            return outcome

        outcome.copied = True
        self.logger.info(f"copied: {entry.name}")
        if self.on_copied:
            self.on_copied(entry.name)
        return outcome

    @staticmethod
    def _record(result: BoundResult, outcome: _FileOutcome) -> None:
        result.scanned += 1
        if outcome.image_data is not None:
            result.matched.append(outcome.image_data)
        if outcome.copied:
            result.copied.append(outcome.name)
        if outcome.error is not None:
            result.failed[outcome.name] = outcome.error

    def _handle_exports(self, result: BoundResult, app_config: ApplicationConfig) -> None:
        """Handle CSV and KML exports."""
        output_config = app_config.output
        if output_config.export_csv:
            CSVExporter(self.logger).export_matches(result.matched, output_config.export_csv)
        if output_config.export_kml:
            KMLExporter(self.logger).export_kml(
                result.matched, app_config.rectangle, output_config.export_kml
            )


def main(argv: list[str] | None = None) -> None:
    """Main execution function."""
    logger = LoggingSetup().setup_logging()

    try:
        config_manager = ConfigurationManager(logger)
        app_config = config_manager.parse_arguments_and_config(argv)

        if app_config.output.verbose:
            logger.setLevel(logging.DEBUG)

        workflow = BoundWorkflow(logger)
        result = workflow.run(app_config)

    except KeyboardInterrupt:
        logger.info("Run interrupted by user")
        sys.exit(Constants.ErrorCodes.INTERRUPTED)
    except ConfigurationError as e:
        logger.error(f"bound: fatal error: {e}")
        sys.exit(Constants.ErrorCodes.CONFIGURATION_ERROR)
    except FileOperationError as e:
        logger.error(f"File operation error: {e}")
        sys.exit(Constants.ErrorCodes.FILE_OPERATION_ERROR)
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error(f"Unexpected error: {e}")
        sys.exit(Constants.ErrorCodes.GENERAL_ERROR)

    if result.failed:
        sys.exit(Constants.ErrorCodes.FILE_OPERATION_ERROR)
    sys.exit(Constants.ErrorCodes.SUCCESS)


if __name__ == "__main__":
    main()
