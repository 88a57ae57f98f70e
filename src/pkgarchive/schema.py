# ABOUTME: Pydantic models for package descriptor validation
# ABOUTME: Defines the name, version, dist/source references, and archive section of a descriptor

from pydantic import BaseModel, Field, field_validator


class ReferenceMetadata(BaseModel):
    """Dist or source location of a package."""
    type: str | None = None
    url: str | None = None
    reference: str | None = None


class ArchiveMetadata(BaseModel):
    """Archive settings declared by a package."""
    exclude: list[str] = Field(default_factory=list)

    @field_validator('exclude', mode='before')
    @classmethod
    def coerce_single_pattern(cls, v):
        """Allow a single pattern string in place of a list."""
        if isinstance(v, str):
            return [v]
        if v is None:
            return []
        return v


class PackageDescriptor(BaseModel):
    """Subset of a project descriptor file used for archiving.

    Unknown keys are ignored.
    """
    name: str | None = Field(None, min_length=1)
    version: str | None = None
    dist: ReferenceMetadata | None = None
    source: ReferenceMetadata | None = None
    archive: ArchiveMetadata = Field(default_factory=ArchiveMetadata)


def validate_descriptor(data: dict) -> PackageDescriptor:
    """Validate descriptor data against schema.

    Args:
        data: Dictionary to validate

    Returns:
        Validated PackageDescriptor model

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return PackageDescriptor.model_validate(data)
