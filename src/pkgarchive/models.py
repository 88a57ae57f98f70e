# ABOUTME: Data models for packages, the root project package, and prepared sources
# ABOUTME: Provides dataclasses describing package identity, dist/source references, and excludes
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pkgarchive.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass
class Package:
    """A versioned package that can be archived.

    ``archive_excludes`` is intentionally mutable: source resolution replaces it
    with the exclude list declared by the downloaded package descriptor.
    """

    name: str
    pretty_version: str
    version: str | None = None
    dist_type: str | None = None
    dist_url: str | None = None
    dist_reference: str | None = None
    source_type: str | None = None
    source_url: str | None = None
    source_reference: str | None = None
    archive_excludes: list[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate after initialization"""
        if not self.name:
            raise InvalidArgumentError("Package name cannot be empty")
        if self.version is None:
            self.version = self.pretty_version

    def set_archive_excludes(self, excludes: list[str]) -> None:
        self.archive_excludes = list(excludes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "pretty_version": self.pretty_version,
            "dist": {
                "type": self.dist_type,
                "url": self.dist_url,
                "reference": self.dist_reference,
            },
            "source": {
                "type": self.source_type,
                "url": self.source_url,
                "reference": self.source_reference,
            },
            "archive": {"exclude": list(self.archive_excludes)},
        }

    @classmethod
    def from_descriptor(cls, data: dict[str, Any]) -> "Package":
        """Build a package from a parsed descriptor mapping.

        Accepts the ``name``/``version``/``dist``/``source``/``archive`` layout
        used by project descriptor files.
        """
        dist = data.get("dist") or {}
        source = data.get("source") or {}
        archive = data.get("archive") or {}
        pretty_version = data.get("version") or "dev-main"
        return cls(
            name=data.get("name", ""),
            pretty_version=pretty_version,
            dist_type=dist.get("type"),
            dist_url=dist.get("url"),
            dist_reference=dist.get("reference"),
            source_type=source.get("type"),
            source_url=source.get("url"),
            source_reference=source.get("reference"),
            archive_excludes=list(archive.get("exclude") or []),
        )


@dataclass
class RootPackage(Package):
    """The project package itself, whose source is the working tree"""

    pass


@dataclass(frozen=True)
class PreparedSource:
    """Result of resolving a package's source ahead of archiving.

    When ``already_built`` is true, ``source_path`` and ``target_path`` are both
    the existing archive and no dump step should follow.
    """

    source_path: Path
    target_path: Path
    already_built: bool = False
