# ABOUTME: Pytest fixtures for pkgarchive tests
# ABOUTME: Provides config, source trees, fake downloaders, and stub archivers
import shutil
import tempfile
from pathlib import Path

import pytest

from pkgarchive.archivers.base import Archiver
from pkgarchive.config import Config
from pkgarchive.filesystem import Filesystem
from pkgarchive.manager import ArchiveManager


class FakeDownloader:
    """Download service that copies a template tree or raises a given error."""

    def __init__(self, template: Path | None = None, error: Exception | None = None):
        self.template = template
        self.error = error
        self.calls = []

    def download(self, package, destination):
        self.calls.append((package, Path(destination)))
        if self.template is not None:
            shutil.copytree(self.template, destination, dirs_exist_ok=True)
        if self.error is not None:
            (Path(destination) / "partial.txt").write_text("half")
            raise self.error


class StubArchiver(Archiver):
    """Archiver that records calls and writes a marker file."""

    def __init__(
        self,
        formats=("zip",),
        source_types=None,
        error: Exception | None = None,
        output_suffix: str | None = None,
    ):
        self.formats = frozenset(formats)
        self.source_types = source_types
        self.error = error
        self.output_suffix = output_suffix
        self.calls = []

    def supports(self, format, source_type):
        if format not in self.formats:
            return False
        return self.source_types is None or source_type in self.source_types

    def archive(self, sources, target, format, excludes=None, ignore_filters=False):
        self.calls.append(
            {
                "sources": Path(sources),
                "target": Path(target),
                "format": format,
                "excludes": excludes,
                "ignore_filters": ignore_filters,
            }
        )
        if self.error is not None:
            raise self.error
        output = Path(target)
        if self.output_suffix:
            output = output.with_suffix(self.output_suffix)
        output.write_bytes(b"archive of " + str(sources).encode())
        return output


@pytest.fixture
def temp_config_dir():
    """Create a temporary config directory for tests"""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir)


@pytest.fixture
def test_config(temp_config_dir):
    """Create a test config instance"""
    return Config(config_dir=temp_config_dir)


@pytest.fixture
def source_tree(tmp_path):
    """Create a package source tree with a descriptor and VCS metadata.

    Returns:
        Path to the source tree
    """
    root = tmp_path / "source"
    (root / "src").mkdir(parents=True)
    (root / "src" / "Widget.php").write_text("<?php class Widget {}")
    (root / "tests").mkdir()
    (root / "tests" / "WidgetTest.php").write_text("<?php")
    (root / "docs").mkdir()
    (root / "docs" / "index.md").write_text("# Widget")
    (root / ".git").mkdir()
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main")
    (root / "README.md").write_text("widget")
    (root / "composer.json").write_text(
        '{"name": "acme/widget", "version": "1.2.0", "archive": {"exclude": ["/tests"]}}'
    )
    return root


@pytest.fixture
def temp_root(tmp_path):
    """Directory used as the temp location for sources and artifacts."""
    path = tmp_path / "tmp"
    path.mkdir()
    return path


@pytest.fixture
def target_dir(tmp_path):
    return tmp_path / "dist"


@pytest.fixture
def make_manager(temp_root):
    """Factory for ArchiveManager instances using an isolated temp directory."""

    def _make(downloader=None, archivers=(), project_root=None):
        manager = ArchiveManager(
            downloader or FakeDownloader(),
            filesystem=Filesystem(temp_root),
            project_root=project_root,
        )
        for archiver in archivers:
            manager.add_archiver(archiver)
        return manager

    return _make
