# ABOUTME: Tests for filesystem primitives used during archiving
# ABOUTME: Validates temp path uniqueness, removal, and atomic cross-device rename
import errno
import os
from unittest.mock import patch

import pytest

from pkgarchive.filesystem import Filesystem


class TestFilesystem:
    def test_temp_directories_are_unique(self, tmp_path):
        fs = Filesystem(tmp_path)

        first = fs.make_temp_directory()
        second = fs.make_temp_directory()

        assert first != second
        assert first.is_dir() and second.is_dir()
        assert first.parent == tmp_path

    def test_temp_file_reserved_with_suffix(self, tmp_path):
        path = Filesystem(tmp_path).make_temp_file(suffix=".tar.gz")

        assert path.exists()
        assert path.name.endswith(".tar.gz")

    def test_ensure_directory_exists(self, tmp_path):
        fs = Filesystem(tmp_path)

        path = fs.ensure_directory_exists(tmp_path / "a" / "b")

        assert path.is_dir()
        fs.ensure_directory_exists(path)

    def test_ensure_directory_rejects_file(self, tmp_path):
        (tmp_path / "file").write_text("x")

        with pytest.raises(NotADirectoryError):
            Filesystem(tmp_path).ensure_directory_exists(tmp_path / "file")

    def test_remove_file_and_directory(self, tmp_path):
        fs = Filesystem(tmp_path)
        (tmp_path / "f.txt").write_text("x")
        (tmp_path / "d" / "nested").mkdir(parents=True)

        assert fs.remove(tmp_path / "f.txt") is True
        assert fs.remove(tmp_path / "d") is True
        assert fs.remove(tmp_path / "missing") is False
        assert list(tmp_path.iterdir()) == []

    def test_rename_replaces_target(self, tmp_path):
        source = tmp_path / "src.zip"
        target = tmp_path / "out" / "target.zip"
        source.write_bytes(b"new")
        target.parent.mkdir()
        target.write_bytes(b"old")

        Filesystem(tmp_path).rename(source, target)

        assert target.read_bytes() == b"new"
        assert not source.exists()

    def test_rename_across_devices_stages_beside_target(self, tmp_path):
        source = tmp_path / "src.zip"
        target = tmp_path / "out" / "target.zip"
        source.write_bytes(b"data")
        real_replace = os.replace
        calls = []

        def fake_replace(src, dst):
            calls.append((str(src), str(dst)))
            if len(calls) == 1:
                raise OSError(errno.EXDEV, "Invalid cross-device link")
            return real_replace(src, dst)

        with patch("pkgarchive.filesystem.os.replace", side_effect=fake_replace):
            Filesystem(tmp_path).rename(source, target)

        assert target.read_bytes() == b"data"
        assert not source.exists()
        staging = calls[1][0]
        assert os.path.dirname(staging) == str(target.parent)
        assert list(target.parent.iterdir()) == [target]

    def test_rename_propagates_other_errors(self, tmp_path):
        source = tmp_path / "src.zip"
        source.write_bytes(b"data")

        with patch("pkgarchive.filesystem.os.replace", side_effect=PermissionError("denied")):
            with pytest.raises(PermissionError):
                Filesystem(tmp_path).rename(source, tmp_path / "target.zip")
