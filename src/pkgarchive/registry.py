# ABOUTME: Ordered registry of archiver backends with first-match selection
# ABOUTME: Registration order is priority when several archivers support a format
import logging
from collections.abc import Iterator

from pkgarchive.archivers.base import Archiver
from pkgarchive.exceptions import UnsupportedFormatError

logger = logging.getLogger(__name__)


class ArchiverRegistry:
    """Hold archivers in registration order."""

    def __init__(self, archivers: list[Archiver] | None = None):
        self._archivers: list[Archiver] = list(archivers or [])

    def add(self, archiver: Archiver) -> None:
        self._archivers.append(archiver)

    def __iter__(self) -> Iterator[Archiver]:
        return iter(self._archivers)

    def __len__(self) -> int:
        return len(self._archivers)

    def find(self, format: str, source_type: str | None) -> Archiver | None:
        """Return the first archiver supporting (format, source_type), or None."""
        for archiver in self._archivers:
            if archiver.supports(format, source_type):
                return archiver
        return None

    def select(self, format: str, source_type: str | None) -> Archiver:
        """
        Return the first archiver supporting (format, source_type).

        Raises:
            UnsupportedFormatError: If no registered archiver matches
        """
        archiver = self.find(format, source_type)
        if archiver is None:
            raise UnsupportedFormatError(format, source_type)
        logger.debug(f"Selected {archiver!r} for {format} ({source_type})")
        return archiver

    def formats(self) -> list[str]:
        return sorted({fmt for archiver in self._archivers for fmt in archiver.formats})
