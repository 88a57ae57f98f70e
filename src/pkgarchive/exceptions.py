# ABOUTME: Custom exception hierarchy for pkgarchive error handling
# ABOUTME: Provides specialized exceptions with recovery hints for each component
"""Custom exceptions for pkgarchive"""


class PkgArchiveError(Exception):
    """Base exception for all pkgarchive errors"""

    def __init__(self, message: str, recovery_hint: str | None = None):
        super().__init__(message)
        self.message = message
        self.recovery_hint = recovery_hint

    def __str__(self):
        base = super().__str__()
        if self.recovery_hint:
            return f"{base}\nHint: {self.recovery_hint}"
        return base


class InvalidArgumentError(PkgArchiveError, ValueError):
    """Invalid argument passed to an archive operation"""

    pass


class UnsupportedFormatError(PkgArchiveError):
    """No registered archiver accepts the requested format"""

    def __init__(self, format: str, source_type: str | None = None):
        super().__init__(
            f"No archiver found to support {format} format",
            recovery_hint="List available formats with: pkgarchive formats",
        )
        self.format = format
        self.source_type = source_type


class DownloadError(PkgArchiveError):
    """Package source retrieval errors"""

    pass


class ArchiverError(PkgArchiveError):
    """Archive production errors"""

    pass


class MetadataError(PkgArchiveError):
    """Package descriptor read/validation errors"""

    pass


class ConfigError(PkgArchiveError):
    """Configuration related errors"""

    pass
