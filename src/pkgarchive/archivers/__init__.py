# ABOUTME: Archiver backends that write a source tree into an archive format
# ABOUTME: Exports the Archiver interface, the files finder, and zip/tar implementations
from pkgarchive.archivers.base import Archiver
from pkgarchive.archivers.finder import ArchivableFilesFinder
from pkgarchive.archivers.tar import TarArchiver
from pkgarchive.archivers.zip import ZipArchiver

__all__ = ["Archiver", "ArchivableFilesFinder", "TarArchiver", "ZipArchiver"]
