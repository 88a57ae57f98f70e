# ABOUTME: Package initialization for pkgarchive package archiving tool
# ABOUTME: Defines version, public exports, and package-level logging configuration
"""pkgarchive - Build distributable archives of versioned packages"""

__version__ = "0.1.0"

# Set up logging for the package
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from pkgarchive.archivers import Archiver, TarArchiver, ZipArchiver
from pkgarchive.exceptions import (
    ArchiverError,
    DownloadError,
    InvalidArgumentError,
    PkgArchiveError,
    UnsupportedFormatError,
)
from pkgarchive.filename import package_filename
from pkgarchive.manager import ArchiveManager
from pkgarchive.models import Package, PreparedSource, RootPackage

__all__ = [
    "ArchiveManager",
    "Archiver",
    "ZipArchiver",
    "TarArchiver",
    "Package",
    "RootPackage",
    "PreparedSource",
    "package_filename",
    "PkgArchiveError",
    "InvalidArgumentError",
    "UnsupportedFormatError",
    "DownloadError",
    "ArchiverError",
    "__version__",
]
