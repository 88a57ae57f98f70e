# ABOUTME: Deterministic archive base-name generation for packages
# ABOUTME: Sanitizes package names and appends version, dist and source disambiguators
import hashlib
import re

from pkgarchive.models import Package

COMMIT_HASH_RE = re.compile(r"^[a-f0-9]{40}$")


def sanitize_package_name(name: str) -> str:
    """Replace every character outside [A-Za-z0-9-_] with '-'."""
    return re.sub(r"[^a-z0-9\-_]", "-", name, flags=re.IGNORECASE)


def short_hash(value: str, length: int = 6) -> str:
    """Return the first ``length`` hex characters of the SHA-1 of ``value``."""
    return hashlib.sha1(value.encode("utf-8")).hexdigest()[:length]


def package_filename(package: Package) -> str:
    """Generate a distinct filename for a particular version of a package.

    Args:
        package: The package to get a name for

    Returns:
        A filename without an extension
    """
    name_parts = [sanitize_package_name(package.name)]

    dist_reference = package.dist_reference or ""
    if COMMIT_HASH_RE.match(dist_reference):
        name_parts.extend([dist_reference, package.dist_type])
    else:
        name_parts.extend([package.pretty_version, dist_reference])

    if package.source_reference:
        name_parts.append(short_hash(package.source_reference))

    name = "-".join(part for part in name_parts if part)
    return name.replace("/", "-")
