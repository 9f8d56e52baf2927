"""Manifest discovery within a directory."""

import logging
from pathlib import Path
from typing import Optional

from npm_license_checker.scanners.package_json import PackageJsonScanner

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_DIR = Path("packageJsons")


class ManifestDirectory:
    """A directory of package.json manifests, one per project.

    Manifests are enumerated by file name so that the order of the report
    is stable between runs. Files that are not JSON and sub-directories are
    ignored.

    Attributes:
        path: Directory holding the manifests.
    """

    def __init__(self, path: Path = DEFAULT_MANIFEST_DIR) -> None:
        self.path = path
        self._scanners: Optional[list[PackageJsonScanner]] = None

    def manifests(self) -> list[Path]:
        """List the manifest files in the directory.

        Returns:
            Manifest paths sorted by file name.

        Raises:
            FileNotFoundError: If the directory does not exist.
        """
        if not self.path.is_dir():
            raise FileNotFoundError(f"Manifest directory not found: {self.path}")

        paths = sorted(
            (p for p in self.path.iterdir() if PackageJsonScanner.can_handle(p)),
            key=lambda p: p.name,
        )
        logger.debug("Found %d manifest(s) in %s", len(paths), self.path)
        return paths

    def scanners(self) -> list[PackageJsonScanner]:
        """Return one scanner per manifest, in enumeration order.

        Scanners are created once so that each manifest is parsed only once
        across dependency kinds.
        """
        if self._scanners is None:
            self._scanners = [PackageJsonScanner(p) for p in self.manifests()]
        return self._scanners
