# ABOUTME: Archive orchestration for a single package: resolve source, select archiver, dump
# ABOUTME: Guarantees atomic placement of the final archive and cleanup of every temp resource
"""Archive manager"""

import logging
from pathlib import Path

from pkgarchive.archivers.base import Archiver
from pkgarchive.exceptions import InvalidArgumentError
from pkgarchive.filename import package_filename
from pkgarchive.filesystem import Filesystem
from pkgarchive.metadata import JsonMetadataReader
from pkgarchive.models import Package, PreparedSource, RootPackage
from pkgarchive.registry import ArchiverRegistry

logger = logging.getLogger(__name__)


class ArchiveManager:
    """
    Create archives of packages.

    Args:
        download_manager: Object with ``download(package, destination)`` used to
            fetch non-root package sources
        filesystem: Filesystem helper (defaults to the system temp directory)
        metadata_reader: Reader for the descriptor found in downloaded sources
        project_root: Directory used as the source of root packages
            (defaults to the current working directory at call time)
    """

    def __init__(
        self,
        download_manager,
        filesystem: Filesystem | None = None,
        metadata_reader: JsonMetadataReader | None = None,
        project_root: str | Path | None = None,
    ):
        self.download_manager = download_manager
        self.filesystem = filesystem or Filesystem()
        self.metadata_reader = metadata_reader or JsonMetadataReader()
        self.project_root = Path(project_root) if project_root else None
        self.archivers = ArchiverRegistry()
        self.overwrite_files = True

    def add_archiver(self, archiver: Archiver) -> None:
        self.archivers.add(archiver)

    def set_overwrite_files(self, overwrite_files: bool) -> "ArchiveManager":
        """Set whether existing archives should be overwritten"""
        self.overwrite_files = overwrite_files
        return self

    def package_filename(self, package: Package) -> str:
        return package_filename(package)

    def archive(
        self,
        package: Package,
        format: str,
        target_dir: str | Path,
        file_name: str | None = None,
        ignore_filters: bool = False,
    ) -> Path:
        """
        Create an archive of the specified package.

        Args:
            package: The package to archive
            format: The format of the archive (zip, tar, ...)
            target_dir: The directory where to build the archive
            file_name: Relative file name to use instead of the generated
                package name; the format is appended to it
            ignore_filters: Ignore exclude rules when collecting files

        Returns:
            Path of the created archive

        Raises:
            InvalidArgumentError: If no format is given
            UnsupportedFormatError: If no archiver supports the format
        """
        if not format:
            raise InvalidArgumentError("Format must be specified")

        prepared = self.prepare(package, format, target_dir, file_name)
        if prepared.already_built:
            return prepared.target_path

        return self.dump(package, format, target_dir, prepared.source_path, ignore_filters, file_name)

    def prepare(
        self,
        package: Package,
        format: str,
        target_dir: str | Path,
        file_name: str | None = None,
    ) -> PreparedSource:
        """
        Resolve the source directory of a package ahead of :meth:`dump`.

        Non-root packages are downloaded into a fresh temporary directory, which
        :meth:`dump` removes. If the downloaded descriptor declares
        ``archive.exclude``, that list replaces ``package.archive_excludes``
        on the caller's object.

        When overwriting is disabled and the archive already exists, the result
        has ``already_built`` set and points at the existing archive; :meth:`dump`
        must not be called in that case.
        """
        target = self._target_path(package, format, target_dir, file_name)

        if not self.overwrite_files and target.exists():
            logger.info(f"Archive {target} already exists, skipping {package.name}")
            return PreparedSource(source_path=target, target_path=target, already_built=True)

        if isinstance(package, RootPackage):
            source_path = (self.project_root or Path.cwd()).resolve()
            logger.debug(f"Using project directory {source_path} for {package.name}")
            return PreparedSource(source_path=source_path, target_path=target)

        source_path = self.filesystem.make_temp_directory()
        try:
            self.download_manager.download(package, source_path)

            excludes = self.metadata_reader.archive_excludes(source_path)
            if excludes:
                package.set_archive_excludes(excludes)
        except BaseException:
            self._cleanup(source_path)
            raise

        return PreparedSource(source_path=source_path, target_path=target)

    def dump(
        self,
        package: Package,
        format: str,
        target_dir: str | Path,
        source_path: str | Path,
        ignore_filters: bool = False,
        file_name: str | None = None,
    ) -> Path:
        """
        Write the archive for a source prepared by :meth:`prepare`.

        The archiver writes to a temporary file that is then moved onto the
        target in one atomic step. The temporary file and, for non-root
        packages, ``source_path`` are removed whether or not this succeeds.

        Returns:
            Path of the created archive
        """
        source_path = Path(source_path)
        temp_target = None
        archive_path = None
        target = None

        try:
            archiver = self.archivers.select(format, package.source_type)
            target = self._target_path(package, format, target_dir, file_name)

            temp_target = self.filesystem.make_temp_file(suffix=f".{format}")
            archive_path = Path(
                archiver.archive(
                    source_path, temp_target, format, list(package.archive_excludes), ignore_filters
                )
            )
            self.filesystem.rename(archive_path, target)
        finally:
            for leftover in {temp_target, archive_path} - {None, target}:
                self._cleanup(leftover)
            if not isinstance(package, RootPackage):
                self._cleanup(source_path)

        logger.info(f"Created {format} archive of {package.name} at {target}")
        return target

    def _target_path(
        self, package: Package, format: str, target_dir: str | Path, file_name: str | None
    ) -> Path:
        name = file_name if file_name is not None else package_filename(package)
        target_dir = self.filesystem.ensure_directory_exists(target_dir).resolve()
        target = target_dir / f"{name}.{format}"
        self.filesystem.ensure_directory_exists(target.parent)
        return target

    def _cleanup(self, path: Path) -> None:
        """Remove a temporary path, logging instead of raising on failure."""
        try:
            self.filesystem.remove(path)
        except OSError as e:
            logger.warning(f"Failed to clean up {path}: {e}")
