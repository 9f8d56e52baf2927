"""Core data models for npm_license_checker.

This module defines the dependency record that flows through the
resolution pipeline, the recognised dependency kinds, and the marker
strings used in place of a license when resolution does not produce one.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional

# Registry answered successfully but declares no license.
BLANK_MARKER = "[BLANK]"


def error_marker(status: object, status_text: object) -> str:
    """Build the marker stored for a failed registry lookup."""
    return f"[ERROR: {status}: {status_text}]"


def skipped_marker(specifier: str) -> str:
    """Build the marker stored for a dependency that is not on the registry."""
    return f"[SKIPPED: {specifier}]"


def is_marker(license_value: str) -> bool:
    """Return True if a license value is an error, skip or blank marker."""
    return license_value.startswith("[")


class DependencyKind(str, Enum):
    """Dependency sections recognised in a package.json manifest."""

    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    PEER_DEPENDENCIES = "peerDependencies"
    OPTIONAL_DEPENDENCIES = "optionalDependencies"

    def __str__(self) -> str:
        return self.value


@dataclass
class DependencyRecord:
    """One declared dependency of one manifest.

    Created during extraction with no license, and assigned a license
    exactly once during resolution.

    Attributes:
        project_name: Name of the source manifest (file name without extension).
        package_name: npm package name (e.g., "left-pad" or "@scope/pkg").
        package_version: Normalized version, or the raw specifier when it
            could not be normalized.
        package_license: Resolved license identifier or marker string.
    """

    project_name: str
    package_name: str
    package_version: str
    package_license: Optional[str] = None

    @classmethod
    def field_names(cls) -> list[str]:
        """Return the record field names in declaration order."""
        return [f.name for f in fields(cls)]

    def values(self) -> list[str]:
        """Return the field values in declaration order."""
        return [
            "" if getattr(self, name) is None else str(getattr(self, name))
            for name in self.field_names()
        ]

    @property
    def is_resolved(self) -> bool:
        """True once a non-marker license has been assigned."""
        return bool(self.package_license) and not is_marker(self.package_license)
