# ABOUTME: Zip archiver backend built on the standard library zipfile module
# ABOUTME: Writes filtered source trees into deflate-compressed zip archives
import logging
import zipfile
from pathlib import Path

from pkgarchive.archivers.base import Archiver
from pkgarchive.archivers.finder import ArchivableFilesFinder
from pkgarchive.exceptions import ArchiverError

logger = logging.getLogger(__name__)


class ZipArchiver(Archiver):
    """Write zip archives for packages of any source type."""

    formats = frozenset({"zip"})

    def supports(self, format: str, source_type: str | None) -> bool:
        return format in self.formats

    def archive(self, sources, target, format, excludes=None, ignore_filters=False) -> Path:
        sources = Path(sources)
        target = Path(target)
        if not sources.is_dir():
            raise ArchiverError(f"Cannot archive {sources}: not a directory")

        count = 0
        try:
            with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                for relative, path in ArchivableFilesFinder(sources, excludes, ignore_filters):
                    if path.is_dir() and not path.is_symlink():
                        zf.writestr(zipfile.ZipInfo(relative + "/"), b"")
                    else:
                        zf.write(path, relative)
                    count += 1
        except (OSError, zipfile.BadZipFile) as e:
            raise ArchiverError(
                f"Failed to write zip archive {target}: {e}",
                recovery_hint="Check disk space and permissions",
            ) from e

        logger.debug(f"Wrote {count} entries to {target}")
        return target
