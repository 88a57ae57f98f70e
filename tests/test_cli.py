# ABOUTME: Tests for the pkgarchive command-line interface
# ABOUTME: Validates archive, formats, and filename commands and error exits
import logging
import zipfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from pkgarchive.cli import cli


@pytest.fixture
def runner(temp_config_dir, monkeypatch):
    monkeypatch.setenv("PKGARCHIVE_CONFIG_DIR", temp_config_dir)
    return CliRunner()


class TestArchiveCommand:
    def test_archive_path_package(self, runner, source_tree, tmp_path):
        out_dir = tmp_path / "dist"

        result = runner.invoke(
            cli,
            [
                "archive",
                "acme/widget",
                "1.2.0",
                "--source-type",
                "path",
                "--source-url",
                str(source_tree),
                "--dist-ref",
                "v1.2.0",
                "--dir",
                str(out_dir),
            ],
        )

        assert result.exit_code == 0, result.output
        archive = out_dir / "acme-widget-1.2.0-v1.2.0.zip"
        assert archive.exists()
        assert "Created archive" in result.output
        with zipfile.ZipFile(archive) as zf:
            assert "tests/WidgetTest.php" not in zf.namelist()
        assert source_tree.exists()

    def test_archive_root_project(self, runner, source_tree, tmp_path):
        out_dir = tmp_path / "dist"

        result = runner.invoke(
            cli,
            [
                "archive",
                "--project-dir",
                str(source_tree),
                "--format",
                "tar.gz",
                "--dir",
                str(out_dir),
                "--file-name",
                "widget",
            ],
        )

        assert result.exit_code == 0, result.output
        assert (out_dir / "widget.tar.gz").exists()
        assert (source_tree / "src" / "Widget.php").exists()

    def test_unsupported_format(self, runner, source_tree, tmp_path):
        result = runner.invoke(
            cli,
            [
                "archive",
                "--project-dir",
                str(source_tree),
                "--format",
                "rar",
                "--dir",
                str(tmp_path / "dist"),
            ],
        )

        assert result.exit_code == 1
        assert "No archiver found to support rar format" in result.output

    def test_missing_source(self, runner, tmp_path):
        result = runner.invoke(
            cli,
            [
                "archive",
                "acme/widget",
                "1.0.0",
                "--source-type",
                "path",
                "--source-url",
                str(tmp_path / "missing"),
                "--dir",
                str(tmp_path / "dist"),
            ],
        )

        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_no_overwrite(self, runner, source_tree, tmp_path):
        out_dir = tmp_path / "dist"
        out_dir.mkdir()
        (out_dir / "widget.zip").write_bytes(b"old")

        result = runner.invoke(
            cli,
            [
                "archive",
                "--project-dir",
                str(source_tree),
                "--dir",
                str(out_dir),
                "--file-name",
                "widget",
                "--no-overwrite",
            ],
        )

        assert result.exit_code == 0, result.output
        assert (out_dir / "widget.zip").read_bytes() == b"old"


class TestOtherCommands:
    def test_formats(self, runner):
        result = runner.invoke(cli, ["formats"])

        assert result.exit_code == 0
        assert "ZipArchiver" in result.output
        assert "TarArchiver" in result.output

    def test_filename(self, runner):
        result = runner.invoke(cli, ["filename", "vendor/pkg name", "1.0.0", "--dist-ref", "abc"])

        assert result.exit_code == 0
        assert result.output.strip() == "vendor-pkg-name-1.0.0-abc"


class TestLogging:
    def test_log_file_written_under_state_logs(self, runner, source_tree, temp_config_dir, tmp_path):
        result = runner.invoke(
            cli,
            [
                "archive",
                "--project-dir",
                str(source_tree),
                "--format",
                "rar",
                "--dir",
                str(tmp_path / "dist"),
            ],
        )

        log_path = Path(temp_config_dir) / "state" / "logs" / "pkgarchive.log"
        assert result.exit_code == 1
        assert log_path.exists()
        for handler in logging.getLogger("pkgarchive").handlers:
            handler.flush()
        assert "No archiver found to support rar format" in log_path.read_text()

    def test_custom_log_file_name(self, runner, temp_config_dir):
        result = runner.invoke(cli, ["--log-file", "custom.log", "formats"])

        assert result.exit_code == 0
        assert (Path(temp_config_dir) / "state" / "logs" / "custom.log").exists()
