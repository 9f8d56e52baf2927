"""Scanner for package.json manifests.

This module parses npm-style manifests (any ``*.json`` file holding a
package.json object) and extracts the dependency sections.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from npm_license_checker.exceptions import ManifestError
from npm_license_checker.models import DependencyKind
from npm_license_checker.scanners.base import BaseScanner

logger = logging.getLogger(__name__)


class PackageJsonScanner(BaseScanner):
    """Scanner for package.json manifests.

    The file is parsed once, on first use. Dependency sections map package
    names to version specifiers and are returned in declaration order.
    """

    def __init__(self, source_path: Path) -> None:
        super().__init__(source_path)
        self._data: Optional[dict[str, Any]] = None

    def _load(self) -> dict[str, Any]:
        """Read and parse the manifest.

        Returns:
            The manifest as a dictionary.

        Raises:
            FileNotFoundError: If the manifest does not exist.
            ManifestError: If the manifest is not a JSON object.
        """
        if self._data is not None:
            return self._data

        if not self.source_path.exists():
            raise FileNotFoundError(f"Manifest not found: {self.source_path}")

        try:
            with open(self.source_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid JSON in {self.source_path}: {e}") from e

        if not isinstance(data, dict):
            raise ManifestError(
                f"Manifest {self.source_path} must contain a JSON object"
            )

        self._data = data
        return data

    def scan(self, kind: DependencyKind) -> Optional[list[tuple[str, str]]]:
        """Extract the dependencies of one kind from the manifest.

        Args:
            kind: Dependency section to read.

        Returns:
            List of (package name, raw version specifier) pairs in
            declaration order, or None if the section is missing. A version
            that is not a string is given as its JSON text.

        Raises:
            FileNotFoundError: If the manifest does not exist.
            ManifestError: If the manifest is invalid.
        """
        section = self._load().get(str(kind))
        if section is None:
            return None

        if not isinstance(section, dict):
            logger.warning(
                'Ignoring "%s" in "%s": expected an object of package versions',
                kind,
                self.source_path.name,
            )
            return None

        dependencies: list[tuple[str, str]] = []
        for package_name, specifier in section.items():
            if not isinstance(specifier, str):
                specifier = json.dumps(specifier)
                logger.warning(
                    'Version of "%s" in "%s" is not a string: %s',
                    package_name,
                    self.source_path.name,
                    specifier,
                )
            dependencies.append((package_name, specifier))

        return dependencies

    @classmethod
    def can_handle(cls, path: Path) -> bool:
        """Check if this scanner can handle the given file.

        Args:
            path: Path to check.

        Returns:
            True for regular files with a ``.json`` extension.
        """
        return path.is_file() and path.suffix.lower() == ".json"

    @property
    def source_name(self) -> str:
        """Return a human-readable name for this scanner's source type.

        Returns:
            The string "package.json".
        """
        return "package.json"
