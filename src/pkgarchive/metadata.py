# ABOUTME: Reader for project descriptor files (composer.json style)
# ABOUTME: Loads JSON descriptors, validates them, and extracts archive exclude rules
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from pkgarchive.exceptions import MetadataError
from pkgarchive.models import RootPackage
from pkgarchive.schema import PackageDescriptor, validate_descriptor

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTOR = "composer.json"


class JsonMetadataReader:
    """Read package descriptors from JSON files."""

    def __init__(self, filename: str = DEFAULT_DESCRIPTOR):
        self.filename = filename

    def descriptor_path(self, directory: str | Path) -> Path:
        return Path(directory) / self.filename

    def read(self, path: str | Path) -> dict[str, Any]:
        """
        Read a descriptor file into a mapping.

        Args:
            path: Descriptor file path

        Returns:
            Parsed mapping, or an empty dict if the file does not exist

        Raises:
            MetadataError: If the file is not valid JSON or not an object
        """
        path = Path(path)
        if not path.exists():
            return {}

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise MetadataError(
                f"Invalid JSON in {path}: {e}",
                recovery_hint="Fix the descriptor syntax",
            ) from e
        except OSError as e:
            raise MetadataError(f"Failed to read {path}: {e}") from e

        if not isinstance(data, dict):
            raise MetadataError(f"Descriptor {path} must contain a JSON object")
        return data

    def read_descriptor(self, path: str | Path) -> PackageDescriptor:
        """Read and validate a descriptor file."""
        data = self.read(path)
        try:
            return validate_descriptor(data)
        except PydanticValidationError as e:
            raise MetadataError(
                f"Invalid descriptor {path}: {e}",
                recovery_hint="Check the name, version, and archive.exclude fields",
            ) from e

    def archive_excludes(self, directory: str | Path) -> list[str]:
        """Return the archive.exclude list declared in ``directory``, if any.

        Only ``archive.exclude`` is checked; other descriptor fields are ignored.

        Raises:
            MetadataError: If archive.exclude is not a string or a list of strings
        """
        path = self.descriptor_path(directory)
        archive = self.read(path).get("archive")
        if not isinstance(archive, dict):
            return []

        excludes = archive.get("exclude")
        if excludes is None:
            return []
        if isinstance(excludes, str):
            return [excludes]
        if isinstance(excludes, list) and all(isinstance(e, str) for e in excludes):
            return list(excludes)

        raise MetadataError(
            f"Invalid archive.exclude in {path}: expected a list of patterns",
            recovery_hint="Declare archive.exclude as a list of strings",
        )

    def load_root_package(self, directory: str | Path) -> RootPackage:
        """Build the root package from the descriptor in a project directory.

        Raises:
            MetadataError: If there is no descriptor or it has no name
        """
        path = self.descriptor_path(directory)
        if not path.exists():
            raise MetadataError(
                f"No {self.filename} found in {directory}",
                recovery_hint="Run from the project root or pass a package name",
            )

        descriptor = self.read_descriptor(path)
        if not descriptor.name:
            raise MetadataError(f"Descriptor {path} does not declare a package name")

        return RootPackage.from_descriptor(descriptor.model_dump())
