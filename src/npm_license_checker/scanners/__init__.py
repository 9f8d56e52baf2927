"""Manifest scanners.

This module provides the scanner for package.json manifests and the
directory source that enumerates them.
"""

from npm_license_checker.scanners.base import BaseScanner
from npm_license_checker.scanners.directory import DEFAULT_MANIFEST_DIR, ManifestDirectory
from npm_license_checker.scanners.package_json import PackageJsonScanner

__all__ = [
    "BaseScanner",
    "DEFAULT_MANIFEST_DIR",
    "ManifestDirectory",
    "PackageJsonScanner",
]
