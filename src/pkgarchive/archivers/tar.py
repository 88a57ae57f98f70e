# ABOUTME: Tar archiver backend built on the standard library tarfile module
# ABOUTME: Writes plain, gzip, or bzip2 compressed tarballs from filtered source trees
import logging
import tarfile
from pathlib import Path

from pkgarchive.archivers.base import Archiver
from pkgarchive.archivers.finder import ArchivableFilesFinder
from pkgarchive.exceptions import ArchiverError

logger = logging.getLogger(__name__)

WRITE_MODES = {
    "tar": "w",
    "tar.gz": "w:gz",
    "tgz": "w:gz",
    "tar.bz2": "w:bz2",
}


class TarArchiver(Archiver):
    """Write tar archives for packages of any source type."""

    formats = frozenset(WRITE_MODES)

    def supports(self, format: str, source_type: str | None) -> bool:
        return format in self.formats

    def archive(self, sources, target, format, excludes=None, ignore_filters=False) -> Path:
        sources = Path(sources)
        target = Path(target)
        if not sources.is_dir():
            raise ArchiverError(f"Cannot archive {sources}: not a directory")
        if format not in WRITE_MODES:
            raise ArchiverError(f"Unsupported tar format: {format}")

        count = 0
        try:
            with tarfile.open(target, WRITE_MODES[format]) as tf:
                for relative, path in ArchivableFilesFinder(sources, excludes, ignore_filters):
                    tf.add(path, arcname=relative, recursive=False)
                    count += 1
        except (OSError, tarfile.TarError) as e:
            raise ArchiverError(
                f"Failed to write tar archive {target}: {e}",
                recovery_hint="Check disk space and permissions",
            ) from e

        logger.debug(f"Wrote {count} entries to {target}")
        return target
