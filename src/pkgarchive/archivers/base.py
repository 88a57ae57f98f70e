# ABOUTME: Abstract interface implemented by every archiver backend
# ABOUTME: Declares the capability check and the archive operation
from abc import ABC, abstractmethod
from pathlib import Path


class Archiver(ABC):
    """Writes a source directory into an archive file."""

    #: Formats this archiver can write
    formats: frozenset[str] = frozenset()

    @abstractmethod
    def supports(self, format: str, source_type: str | None) -> bool:
        """Return True if this archiver can write ``format`` for ``source_type``."""

    @abstractmethod
    def archive(
        self,
        sources: str | Path,
        target: str | Path,
        format: str,
        excludes: list[str] | None = None,
        ignore_filters: bool = False,
    ) -> Path:
        """
        Create an archive of ``sources`` at ``target``.

        Args:
            sources: Directory whose contents are archived
            target: Path of the archive to write
            format: Archive format
            excludes: Exclude patterns to apply
            ignore_filters: Skip exclude rules (VCS directories are still skipped)

        Returns:
            Path of the written archive
        """

    def __repr__(self):
        return f"{type(self).__name__}(formats={sorted(self.formats)})"
