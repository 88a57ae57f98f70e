# ABOUTME: Download service that fetches package sources into a directory
# ABOUTME: Routes packages to local-path or git downloaders by dist/source type
"""Package source downloaders"""

import logging
import shutil
import subprocess
from pathlib import Path

from pkgarchive.exceptions import DownloadError
from pkgarchive.models import Package

logger = logging.getLogger(__name__)


class PathDownloader:
    """Copy a package from a local directory."""

    def download(self, package: Package, destination: Path, url: str, reference: str | None = None):
        source = Path(url).expanduser()
        if not source.is_dir():
            raise DownloadError(
                f"Source directory for {package.name} does not exist: {source}",
                recovery_hint="Check the package url points at a local directory",
            )

        logger.debug(f"Copying {source} to {destination}")
        shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)


class GitDownloader:
    """Clone a package with the git executable and check out its reference."""

    def __init__(self, timeout: int = 300, executable: str = "git"):
        self.timeout = timeout
        self.executable = executable

    def _run(self, args: list[str], package: Package) -> None:
        cmd = [self.executable, *args]
        try:
            proc = subprocess.run(
                cmd, capture_output=True, text=True, check=False, timeout=self.timeout
            )
        except FileNotFoundError as e:
            raise DownloadError(
                f"git executable not found while downloading {package.name}",
                recovery_hint="Install git or use a path source",
            ) from e
        except subprocess.TimeoutExpired as e:
            raise DownloadError(
                f"git timed out after {self.timeout}s while downloading {package.name}",
                recovery_hint="Increase download.git_timeout in the config",
            ) from e

        if proc.returncode != 0:
            output = ((proc.stdout or "") + (proc.stderr or "")).strip()
            raise DownloadError(f"Failed to execute {' '.join(cmd)}\n{output}")

    def download(self, package: Package, destination: Path, url: str, reference: str | None = None):
        logger.debug(f"Cloning {url} into {destination}")
        self._run(["clone", "--quiet", url, str(destination)], package)
        if reference:
            self._run(["-C", str(destination), "checkout", "--quiet", reference], package)


class DownloadManager:
    """
    Dispatch downloads to the downloader registered for a package's type.

    Dist downloads are preferred when the package has a dist url and a
    downloader for its dist type, unless ``prefer_source`` is set.
    """

    def __init__(self, prefer_source: bool = False):
        self.prefer_source = prefer_source
        self.downloaders: dict[str, object] = {}

    def set_downloader(self, type: str, downloader) -> "DownloadManager":
        self.downloaders[type] = downloader
        return self

    def _installation_source(self, package: Package) -> tuple[str, str, str | None]:
        dist = (package.dist_type, package.dist_url, package.dist_reference)
        source = (package.source_type, package.source_url, package.source_reference)

        candidates = [source, dist] if self.prefer_source else [dist, source]
        for type, url, reference in candidates:
            if type and url and type in self.downloaders:
                return type, url, reference

        raise DownloadError(
            f"No downloader available for {package.name} "
            f"(dist: {package.dist_type}, source: {package.source_type})",
            recovery_hint="Supported types: " + ", ".join(sorted(self.downloaders)),
        )

    def download(self, package: Package, destination: str | Path) -> None:
        """
        Download the package's source into ``destination``.

        Raises:
            DownloadError: If no downloader matches or retrieval fails
        """
        type, url, reference = self._installation_source(package)
        logger.info(f"Downloading {package.name} ({package.pretty_version}) from {type} {url}")
        self.downloaders[type].download(package, Path(destination), url, reference)


def create_download_manager(prefer_source: bool = False, git_timeout: int = 300) -> DownloadManager:
    """Build a DownloadManager with the bundled downloaders registered."""
    manager = DownloadManager(prefer_source=prefer_source)
    manager.set_downloader("path", PathDownloader())
    manager.set_downloader("git", GitDownloader(timeout=git_timeout))
    return manager
