"""In-memory cache layer for license resolution results.

This module provides a run-scoped cache to avoid repeated registry calls
when the same package version is declared by several manifests.
"""

from typing import Optional


class LicenseCache:
    """Process-lifetime cache of resolved licenses.

    Entries are keyed by ``name@version`` and never expire: the license
    published for a given package version does not change, and a cache
    lives only as long as one run. Only final outcomes (licenses, blank
    and skip markers) should be stored; transient errors are left out so
    a later lookup retries them.

    Not safe for concurrent writers. Lookups are resolved one at a time.
    """

    def __init__(self) -> None:
        """Initialize an empty license cache."""
        self._entries: dict[str, str] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key(name: str, version: str) -> str:
        """Build the cache key for a package version.

        Args:
            name: Package name.
            version: Package version.

        Returns:
            Key in the form ``name@version``.
        """
        return f"{name}@{version}"

    def get(self, name: str, version: str) -> Optional[str]:
        """Retrieve the cached license for a package version.

        Args:
            name: Package name.
            version: Package version.

        Returns:
            Cached license string, or None on a cache miss.
        """
        value = self._entries.get(self.key(name, version))
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def set(self, name: str, version: str, license_value: str) -> None:
        """Store the license for a package version.

        Args:
            name: Package name.
            version: Package version.
            license_value: Resolved license or marker string.
        """
        self._entries[self.key(name, version)] = license_value

    def clear(self) -> None:
        """Remove all entries and reset the counters."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def info(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache information:
                - count: Number of cached entries
                - hits: Number of lookups answered from the cache
                - misses: Number of lookups not in the cache
        """
        return {
            "count": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
        }

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
