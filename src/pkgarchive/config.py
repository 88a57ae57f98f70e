# ABOUTME: Configuration management using XDG Base Directory specification
# ABOUTME: Handles config file defaults, validation, state/log dirs, and manager wiring
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class Config:
    """
    Configuration management for pkgarchive using XDG Base Directory specification.

    Directories (following XDG standard):
    - Config: $XDG_CONFIG_HOME/pkgarchive (default: ~/.config/pkgarchive)
    - State: $XDG_STATE_HOME/pkgarchive (default: ~/.local/state/pkgarchive)
    """

    REQUIRED_SECTIONS = ("archive", "metadata", "download")

    def __init__(self, config_dir: str | Path | None = None):
        if config_dir is None:
            xdg_config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
            config_dir = os.path.join(xdg_config_home, "pkgarchive")
            logger.debug(f"Using XDG config directory: {config_dir}")

            xdg_state_home = os.environ.get("XDG_STATE_HOME", os.path.expanduser("~/.local/state"))
            self.state_dir = Path(xdg_state_home) / "pkgarchive"
        else:
            # Explicit config_dir (e.g. tests): keep everything beneath it
            logger.debug(f"Using custom config directory: {config_dir}")
            self.state_dir = Path(config_dir) / "state"

        self.config_dir = Path(config_dir).resolve()

        self._ensure_directories()
        self._load_config()

    def _ensure_directories(self):
        """Create necessary XDG directories"""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True, mode=0o700)
            self.state_dir.mkdir(parents=True, exist_ok=True, mode=0o700)
            (self.state_dir / "logs").mkdir(exist_ok=True, mode=0o700)
        except Exception as e:
            logger.error(f"Failed to create directories: {e}")
            raise

    def _validate_config_structure(self, settings: Any) -> bool:
        """Validate that loaded config has required structure."""
        if not isinstance(settings, dict):
            logger.error("Config root must be an object")
            return False

        for key in self.REQUIRED_SECTIONS:
            if key not in settings:
                logger.error(f"Config missing required key: {key}")
                return False
            if not isinstance(settings[key], dict):
                logger.error(f"Config key {key} has wrong type: {type(settings[key])}")
                return False

        return True

    def _backup_invalid(self, config_file: Path) -> Path:
        ts = datetime.now().strftime("%Y%m%d%H%M%S")
        backup_path = config_file.parent / f"config.json.invalid_{ts}"
        config_file.rename(backup_path)
        logger.warning(f"Invalid config backed up to {backup_path}, using defaults")
        return backup_path

    def _load_config(self):
        """Load configuration with structure validation"""
        config_file = self.config_dir / "config.json"
        if not config_file.exists():
            self.settings = self._default_settings()
            self.save_config()
            return

        try:
            with open(config_file) as f:
                loaded_settings = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}")
            self._backup_invalid(config_file)
            self.settings = self._default_settings()
            self.save_config()
            return

        if not self._validate_config_structure(loaded_settings):
            self._backup_invalid(config_file)
            self.settings = self._default_settings()
            self.save_config()
            return

        self.settings = self._merge_defaults(loaded_settings)
        self._validate_settings()

    def _default_settings(self) -> dict[str, Any]:
        """Default configuration settings"""
        return {
            "archive": {
                "format": "zip",
                "target_dir": ".",
                "overwrite_files": True,
                "temp_dir": None,  # None: system temp directory
            },
            "metadata": {"file": "composer.json"},
            "download": {
                "prefer_source": False,
                "git_timeout": 300,  # seconds
            },
        }

    def _merge_defaults(self, loaded: dict[str, Any]) -> dict[str, Any]:
        settings = self._default_settings()
        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(settings.get(section), dict):
                settings[section].update(values)
            else:
                settings[section] = values
        return settings

    def _validate_settings(self):
        """Validate settings are within acceptable ranges"""
        from pkgarchive.archivers import TarArchiver, ZipArchiver

        archive_settings = self.settings["archive"]
        known_formats = ZipArchiver.formats | TarArchiver.formats
        if archive_settings.get("format") not in known_formats:
            logger.warning(
                f"Unknown archive format '{archive_settings.get('format')}', defaulting to 'zip'. "
                f"Valid options: {', '.join(sorted(known_formats))}"
            )
            archive_settings["format"] = "zip"

        download_settings = self.settings["download"]
        timeout = download_settings.get("git_timeout")
        if not isinstance(timeout, int) or timeout <= 0:
            logger.warning(f"Invalid git_timeout {timeout!r}, defaulting to 300")
            download_settings["git_timeout"] = 300

        if not self.settings["metadata"].get("file"):
            self.settings["metadata"]["file"] = "composer.json"

    def save_config(self):
        """Save configuration to disk"""
        config_file = self.config_dir / "config.json"
        try:
            with open(config_file, "w") as f:
                json.dump(self.settings, f, indent=2, sort_keys=True)
            logger.debug("Configuration saved")
        except Exception as e:
            logger.error(f"Failed to save config: {e}")

    def get_log_dir(self) -> Path:
        return self.state_dir / "logs"

    def build_manager(self, project_root: str | Path | None = None):
        """Create an ArchiveManager wired with the bundled downloaders and archivers."""
        from pkgarchive.archivers import TarArchiver, ZipArchiver
        from pkgarchive.downloaders import create_download_manager
        from pkgarchive.filesystem import Filesystem
        from pkgarchive.manager import ArchiveManager
        from pkgarchive.metadata import JsonMetadataReader

        download = self.settings["download"]
        manager = ArchiveManager(
            create_download_manager(
                prefer_source=download["prefer_source"], git_timeout=download["git_timeout"]
            ),
            filesystem=Filesystem(self.settings["archive"].get("temp_dir")),
            metadata_reader=JsonMetadataReader(self.settings["metadata"]["file"]),
            project_root=project_root,
        )
        manager.add_archiver(ZipArchiver())
        manager.add_archiver(TarArchiver())
        manager.set_overwrite_files(self.settings["archive"]["overwrite_files"])
        return manager
