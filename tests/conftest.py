"""Pytest configuration and shared fixtures for geo_bound tests."""

import os
from pathlib import Path
from unittest.mock import Mock
import pytest

from geo_bound.constants import Constants
from geo_bound.types import (
    ApplicationConfig, BoundingRectangle, DecodeFailed, DirectoryConfig,
    OutputConfig, ProcessingConfig, TagAbsent, TagPresent, TagReadError,
)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: tests that run the whole workflow on disk")


# =============================================================================
# Fake tag decoder
# =============================================================================

def gps_tags(latitude: float, longitude: float) -> dict:
    """EXIF GPS attributes the way the exif library reports them, for a decimal position."""
    return {
        Constants.GPS_LATITUDE: (abs(latitude), 0.0, 0.0),
        Constants.GPS_LATITUDE_REF: "N" if latitude >= 0 else "S",
        Constants.GPS_LONGITUDE: (abs(longitude), 0.0, 0.0),
        Constants.GPS_LONGITUDE_REF: "E" if longitude >= 0 else "W",
    }


class FakeTagTable:
    """TagTable stand-in backed by a dict. Values may be TagLookupResult instances."""

    def __init__(self, tags: dict):
        self.tags = tags

    def lookup(self, tag_name):
        if tag_name not in self.tags:
            return TagAbsent()
        value = self.tags[tag_name]
        if isinstance(value, (TagAbsent, TagPresent, TagReadError)):
            return value
        return TagPresent(value)


class FakeTagDecoder:
    """Decoder keyed by file name. Unknown files have no EXIF segment."""

    def __init__(self, tags_by_name: dict | None = None):
        self.tags_by_name = tags_by_name or {}
        self.requested: list[str] = []

    def decode_tags(self, path):
        self.requested.append(str(path))
        name = os.path.basename(path)
        if name not in self.tags_by_name:
            return DecodeFailed("no EXIF segment")
        return FakeTagTable(self.tags_by_name[name])


@pytest.fixture
def fake_decoder():
    return FakeTagDecoder()


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def mock_logger():
    """Mock logger for testing."""
    logger = Mock()
    logger.info = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.debug = Mock()
    return logger


@pytest.fixture
def nyc_rectangle():
    """Box around the New York City area."""
    return BoundingRectangle(
        lat_top_left=40.0,
        lon_top_left=-75.0,
        lat_bottom_right=39.0,
        lon_bottom_right=-74.0,
    )


@pytest.fixture
def source_dir(tmp_path):
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def destination_dir(tmp_path):
    path = tmp_path / "destination"
    path.mkdir()
    return path


@pytest.fixture
def make_app_config(nyc_rectangle, source_dir, destination_dir):
    """Factory for ApplicationConfig objects pointing at the temporary directories."""

    def _make(rectangle=None, find_only=False, workers=1, export_csv=None, export_kml=None):
        return ApplicationConfig(
            rectangle=rectangle or nyc_rectangle,
            directory=DirectoryConfig(
                source=str(source_dir),
                destination=str(destination_dir),
                find_only=find_only,
            ),
            output=OutputConfig(verbose=False, export_csv=export_csv, export_kml=export_kml),
            processing=ProcessingConfig(workers=workers),
        )

    return _make


@pytest.fixture
def isolated_config_locations(tmp_path, monkeypatch):
    """Keep configuration lookup away from the real working and home directories."""
    work = tmp_path / "work"
    home = tmp_path / "home"
    work.mkdir()
    home.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setenv("HOME", str(home))
    return work


# =============================================================================
# Test Utilities
# =============================================================================

class TestUtils:
    """Utility functions for tests."""

    @staticmethod
    def create_image_file(file_path: Path, payload: bytes = b"") -> Path:
        """Create a small JPEG-like file. Only its bytes matter, the decoder is faked."""
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "wb") as f:
            f.write(b"\xff\xd8\xff\xe0")  # JPEG SOI and APP0 markers
            f.write(payload or file_path.name.encode())
            f.write(b"\xff\xd9")  # JPEG EOI marker
        return file_path


@pytest.fixture
def test_utils():
    """Test utilities fixture."""
    return TestUtils
