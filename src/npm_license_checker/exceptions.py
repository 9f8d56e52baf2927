"""Custom exceptions for npm-license-checker."""

from typing import Any


class LicenseCheckerError(Exception):
    """Base exception for all npm-license-checker errors."""

    pass


class ManifestError(LicenseCheckerError):
    """Exception raised when a manifest file cannot be read or parsed."""

    pass


class UnsupportedLicenseError(LicenseCheckerError):
    """Exception raised when a license value has a shape that cannot be read.

    This aborts the whole run: reporting a guessed license would be worse
    than reporting none.

    Attributes:
        package_name: Package whose license could not be interpreted.
        package_version: Version that was looked up.
        descriptor: The raw license value returned by the registry.
    """

    def __init__(self, package_name: str, package_version: str, descriptor: Any) -> None:
        self.package_name = package_name
        self.package_version = package_version
        self.descriptor = descriptor
        super().__init__(
            f"Unsupported license value for {package_name}@{package_version}: "
            f"{descriptor!r}"
        )


class ReportWriteError(LicenseCheckerError):
    """Exception raised when a report file cannot be written."""

    pass
