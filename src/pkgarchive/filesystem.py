# ABOUTME: Filesystem primitives for directory creation, removal, and atomic moves
# ABOUTME: Provides unique temp paths and cross-device safe atomic rename
"""Filesystem helpers for pkgarchive"""

import errno
import logging
import os
import shutil
import tempfile
from contextlib import suppress
from pathlib import Path

logger = logging.getLogger(__name__)

TEMP_PREFIX = "pkgarchive"


class Filesystem:
    """Filesystem operations used while building archives.

    Args:
        temp_dir: Base directory for temporary sources and artifacts
            (defaults to the system temp directory)
    """

    def __init__(self, temp_dir: str | Path | None = None):
        self.temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())

    def ensure_directory_exists(self, path: str | Path) -> Path:
        path = Path(path)
        if path.exists() and not path.is_dir():
            raise NotADirectoryError(f"{path} exists and is not a directory")
        path.mkdir(parents=True, exist_ok=True)
        return path

    def make_temp_directory(self) -> Path:
        """Create a uniquely named temporary directory."""
        self.ensure_directory_exists(self.temp_dir)
        path = Path(tempfile.mkdtemp(prefix=f"{TEMP_PREFIX}-src-", dir=self.temp_dir))
        logger.debug(f"Created temporary directory {path}")
        return path

    def make_temp_file(self, suffix: str = "") -> Path:
        """Reserve a uniquely named temporary file and return its path."""
        self.ensure_directory_exists(self.temp_dir)
        fd, temp_path = tempfile.mkstemp(prefix=f"{TEMP_PREFIX}-", suffix=suffix, dir=self.temp_dir)
        os.close(fd)
        return Path(temp_path)

    def remove(self, path: str | Path) -> bool:
        """Remove a file, symlink, or directory tree. Returns False if nothing was there."""
        path = Path(path)
        if path.is_symlink() or path.is_file():
            path.unlink()
            return True
        if path.is_dir():
            return self.remove_directory(path)
        return False

    def remove_directory(self, path: str | Path) -> bool:
        """Recursively delete a directory. Returns False if it did not exist."""
        path = Path(path)
        if not path.exists():
            return False
        shutil.rmtree(path)
        logger.debug(f"Removed directory {path}")
        return True

    def rename(self, source: str | Path, target: str | Path) -> Path:
        """
        Atomically move ``source`` onto ``target``, replacing any existing file.

        Across filesystems the file is first copied to a temp file beside the
        target, so the target name only ever points at a complete file.
        """
        source = Path(source)
        target = Path(target)
        self.ensure_directory_exists(target.parent)

        try:
            os.replace(source, target)
            return target
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise

        fd, staging = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
        os.close(fd)
        try:
            shutil.copyfile(source, staging)
            os.replace(staging, target)
        except Exception:
            with suppress(OSError):
                os.unlink(staging)
            raise

        source.unlink()
        return target
