"""Tests for the utils module.

These tests verify logging setup, directory validation and the copy primitive.
"""

import logging
import os
from pathlib import Path
from unittest.mock import Mock
import pytest

from geo_bound.exceptions import ConfigurationError, FileOperationError
from geo_bound.utils import FileOperationManager, LoggingSetup, PathNormalizer


class TestLoggingSetup:
    """Test suite for LoggingSetup utility."""

    @pytest.mark.unit
    def test_basic_logging_setup(self):
        logger = LoggingSetup().setup_logging()

        assert isinstance(logger, logging.Logger)
        assert logger.name == "geo_bound"


class TestPathNormalizer:
    """Test suite for PathNormalizer utility."""

    @pytest.mark.unit
    def test_normalize_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert PathNormalizer.normalize_path("photo.jpg") == str((tmp_path / "photo.jpg").resolve())
        assert PathNormalizer.normalize_path("") == ""

    @pytest.mark.unit
    def test_has_trailing_separator(self):
        assert PathNormalizer.has_trailing_separator("photos" + os.sep) is True
        assert PathNormalizer.has_trailing_separator("photos") is False

    @pytest.mark.unit
    def test_validate_directory_ok(self, tmp_path):
        assert PathNormalizer.validate_directory(str(tmp_path), "source") == tmp_path

    @pytest.mark.unit
    def test_validate_directory_missing(self):
        with pytest.raises(ConfigurationError) as exc_info:
            PathNormalizer.validate_directory(None, "source")

        assert "no source path provided" in str(exc_info.value)

    @pytest.mark.unit
    def test_validate_directory_trailing_separator(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            PathNormalizer.validate_directory(str(tmp_path) + os.sep, "destination")

        assert "trailing separator" in str(exc_info.value)

    @pytest.mark.unit
    def test_validate_directory_not_a_directory(self, tmp_path):
        file_path = tmp_path / "file.jpg"
        file_path.write_bytes(b"x")

        with pytest.raises(ConfigurationError):
            PathNormalizer.validate_directory(str(file_path), "source")
        with pytest.raises(ConfigurationError):
            PathNormalizer.validate_directory(str(tmp_path / "nope"), "source")

    @pytest.mark.unit
    def test_get_kml_image_path(self):
        assert PathNormalizer.get_kml_image_path("/photos/a.jpg") == "file:///photos/a.jpg"
        assert PathNormalizer.get_kml_image_path("C:\\photos\\a.jpg") == "file:///C:/photos/a.jpg"

    @pytest.mark.unit
    def test_sanitize_folder_name(self):
        assert PathNormalizer.sanitize_folder_name('trip: "NYC"') == "trip_ _NYC_"
        assert PathNormalizer.sanitize_folder_name("...") == "images"


class TestFileOperationManager:
    """Test suite for FileOperationManager."""

    def setup_method(self):
        """Set up test fixtures."""
        self.mock_logger = Mock()
        self.manager = FileOperationManager(self.mock_logger)

    @pytest.mark.unit
    def test_copy_image(self, source_dir, destination_dir):
        source = source_dir / "photo.jpg"
        source.write_bytes(b"\xff\xd8payload\xff\xd9")

        dest = self.manager.copy_image(source, destination_dir)

        assert dest == destination_dir / "photo.jpg"
        assert dest.read_bytes() == source.read_bytes()
        assert source.exists()

    @pytest.mark.unit
    def test_copy_overwrites_existing(self, source_dir, destination_dir):
        source = source_dir / "photo.jpg"
        source.write_bytes(b"new")
        (destination_dir / "photo.jpg").write_bytes(b"old contents")

        self.manager.copy_image(str(source), str(destination_dir))

        assert (destination_dir / "photo.jpg").read_bytes() == b"new"
        assert sorted(os.listdir(destination_dir)) == ["photo.jpg"]

    @pytest.mark.unit
    def test_copy_names_with_shell_characters(self, source_dir, destination_dir):
        """File names are passed as paths, never interpreted by a shell."""
        name = 'a"; touch pwned; echo ".jpg'
        source = source_dir / name
        source.write_bytes(b"x")

        self.manager.copy_image(source, destination_dir)

        assert (destination_dir / name).read_bytes() == b"x"
        assert not Path("pwned").exists()

    @pytest.mark.unit
    def test_copy_missing_source(self, source_dir, destination_dir):
        with pytest.raises(FileOperationError) as exc_info:
            self.manager.copy_image(source_dir / "gone.jpg", destination_dir)

        assert "gone.jpg" in str(exc_info.value)

    @pytest.mark.unit
    def test_copy_to_missing_directory(self, source_dir, tmp_path):
        source = source_dir / "photo.jpg"
        source.write_bytes(b"x")

        with pytest.raises(FileOperationError):
            self.manager.copy_image(source, tmp_path / "no" / "such" / "dir")
