"""Setup script for geo_bound package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README").read_text()

setup(
    name="geo-bound",
    version="1.0.0",
    author="stbrie",
    description="Copy the images of a directory whose GPS geotag lies inside a bounding rectangle",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "exif>=1.3.0",
        "geopy>=2.0.0",
    ],
    extras_require={
        "kml": ["fastkml>=1.0", "pygeoif>=1.0"],
        "test": ["pytest>=7.0"],
        "all": ["fastkml>=1.0", "pygeoif>=1.0"],
    },
    entry_points={
        "console_scripts": [
            "bound=geo_bound.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Graphics",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    keywords="gps exif image filter bounding box geotag kml",
)
