"""Base interface for manifest scanners.

Scanners extract declared dependencies from manifest files without
installing anything.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from npm_license_checker.models import DependencyKind


class BaseScanner(ABC):
    """Abstract base class for manifest scanners.

    Attributes:
        source_path: Path to the manifest being scanned.
    """

    def __init__(self, source_path: Path) -> None:
        """Initialize the scanner.

        Args:
            source_path: Path to the manifest file.
        """
        self.source_path = source_path

    @property
    def project_name(self) -> str:
        """Return the project name reported for this manifest.

        Returns:
            The manifest file name without its extension.
        """
        return self.source_path.stem

    @abstractmethod
    def scan(self, kind: DependencyKind) -> Optional[list[tuple[str, str]]]:
        """Extract the dependencies of one kind, in declaration order.

        Args:
            kind: Dependency section to read.

        Returns:
            List of (package name, raw version specifier) pairs, or None
            if the manifest has no such section.

        Raises:
            FileNotFoundError: If the manifest does not exist.
            ManifestError: If the manifest format is invalid.
        """
        ...

    @classmethod
    @abstractmethod
    def can_handle(cls, path: Path) -> bool:
        """Check if this scanner can handle the given file.

        Args:
            path: Path to check.

        Returns:
            True if this scanner can process the file, False otherwise.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable name for this scanner's source type.

        Returns:
            Name like "package.json".
        """
        ...
