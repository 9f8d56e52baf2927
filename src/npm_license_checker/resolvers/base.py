"""Base interface for license resolvers.

Resolvers are responsible for fetching the declared license of a package
version from a package registry.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseResolver(ABC):
    """Abstract base class for license resolvers.

    Resolvers never raise for per-package failures: a failed lookup is
    reported as a marker string. The only exception a resolver lets
    escape is
    :class:`~npm_license_checker.exceptions.UnsupportedLicenseError`.
    """

    @abstractmethod
    async def resolve(self, package_name: str, package_version: str) -> Any:
        """Resolve the license of a package version.

        Args:
            package_name: Package name.
            package_version: Normalized version or raw specifier.

        Returns:
            License identifier or marker string. Resolvers that return a
            structured license object leave it to the caller to flatten.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the resolver name for logging/debugging.

        Returns:
            Name like "npm".
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the resolver."""
