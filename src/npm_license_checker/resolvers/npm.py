"""npm registry resolver for fetching declared licenses.

This resolver fetches the version document of a package from the npm
registry and extracts its ``license`` field, which may be a plain SPDX
identifier, a ``{"type": ..., "url": ...}`` object, or (in old packages)
a ``licenses`` array of such objects.
"""

import asyncio
import logging
from http import HTTPStatus
from typing import Any, Optional
from urllib.parse import quote

import aiohttp

from npm_license_checker.cache import LicenseCache
from npm_license_checker.exceptions import UnsupportedLicenseError
from npm_license_checker.models import BLANK_MARKER, error_marker, skipped_marker
from npm_license_checker.resolvers.http import DEFAULT_TIMEOUT_SECONDS, HttpResolver
from npm_license_checker.resolvers.throttle import FixedDelayThrottle
from npm_license_checker.versions import is_local_specifier

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"

# Status used in error markers when the request produced no response at all
NETWORK_ERROR_STATUS = "NETWORK"


def normalize_license_descriptor(
    descriptor: Any, package_name: str, package_version: str
) -> str:
    """Flatten a license descriptor into a license string.

    Args:
        descriptor: A license string or a license object with a ``type``.
        package_name: Package the descriptor belongs to, for error reporting.
        package_version: Version the descriptor belongs to.

    Returns:
        The license string, the object's ``type``, or ``[BLANK]`` for an
        empty string or any other falsy non-object value.

    Raises:
        UnsupportedLicenseError: If the descriptor is neither a string nor
            an object with a non-empty string ``type``.
    """
    if isinstance(descriptor, str):
        return descriptor or BLANK_MARKER

    if not descriptor and not isinstance(descriptor, dict):
        return BLANK_MARKER

    if isinstance(descriptor, dict):
        license_type = descriptor.get("type")
        if isinstance(license_type, str) and license_type:
            return license_type

    raise UnsupportedLicenseError(package_name, package_version, descriptor)


def extract_license(data: dict, package_name: str, package_version: str) -> str:
    """Extract the license from an npm version document.

    Args:
        data: Parsed JSON body returned by the registry.
        package_name: Package name.
        package_version: Package version.

    Returns:
        License string, or ``[BLANK]`` when none is declared.

    Raises:
        UnsupportedLicenseError: If a license value cannot be interpreted.
    """
    descriptor = data.get("license")
    if descriptor is not None:
        return normalize_license_descriptor(descriptor, package_name, package_version)

    legacy = data.get("licenses")
    if legacy:
        if not isinstance(legacy, list):
            legacy = [legacy]
        return " OR ".join(
            normalize_license_descriptor(entry, package_name, package_version)
            for entry in legacy
        )

    return BLANK_MARKER


def _status_text(response: aiohttp.ClientResponse) -> str:
    if response.reason:
        return response.reason
    try:
        return HTTPStatus(response.status).phrase
    except ValueError:
        return ""


class NpmRegistryResolver(HttpResolver):
    """Resolver for fetching license metadata from the npm registry.

    Every lookup goes through the cache first. Local specifiers
    (``file:``, ``link:`` ...) are answered with a skip marker without any
    request. Everything else is fetched one request at a time, spaced by
    the throttle.

    Outcomes are cached except for errors, so a failed lookup of the same
    version is retried the next time it is requested.

    Use as an async context manager or call close() when done.

    Attributes:
        cache: License cache shared by all lookups of this resolver.
        throttle: Delay enforced between registry requests.
        registry_url: Base URL of the registry.
    """

    def __init__(
        self,
        cache: Optional[LicenseCache] = None,
        throttle: Optional[FixedDelayThrottle] = None,
        registry_url: str = DEFAULT_REGISTRY_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the npm registry resolver.

        Args:
            cache: Optional cache to use. A new empty cache is created if
                not provided.
            throttle: Optional throttle to use. Defaults to a throttle with
                the standard delay.
            registry_url: Base URL of the registry.
            timeout: Total timeout in seconds for a single request.
        """
        super().__init__(timeout=timeout)
        self.cache = cache if cache is not None else LicenseCache()
        self.throttle = throttle if throttle is not None else FixedDelayThrottle()
        self.registry_url = registry_url.rstrip("/")

    @property
    def name(self) -> str:
        """Return the resolver name.

        Returns:
            The string "npm".
        """
        return "npm"

    def package_url(self, package_name: str, package_version: str) -> str:
        """Build the registry URL of a package version document."""
        return f"{self.registry_url}/{package_name}/{quote(package_version, safe='')}"

    async def resolve(self, package_name: str, package_version: str) -> str:
        """Resolve the license of a package version.

        Args:
            package_name: Package name.
            package_version: Normalized version or raw specifier.

        Returns:
            License string, or a ``[BLANK]``, ``[SKIPPED: ...]`` or
            ``[ERROR: ...]`` marker.

        Raises:
            UnsupportedLicenseError: If the registry returns a license
                object without a ``type``.
        """
        cached = self.cache.get(package_name, package_version)
        if cached is not None:
            logger.debug(
                "Cache hit for %s", LicenseCache.key(package_name, package_version)
            )
            return cached

        if is_local_specifier(package_version):
            logger.debug("Skipping local dependency %s@%s", package_name, package_version)
            result = skipped_marker(package_version)
            self.cache.set(package_name, package_version, result)
            return result

        data = await self._fetch_version_document(package_name, package_version)
        if isinstance(data, str):
            return data

        result = extract_license(data, package_name, package_version)
        self.cache.set(package_name, package_version, result)
        return result

    async def _fetch_version_document(
        self, package_name: str, package_version: str
    ) -> Any:
        """Fetch the version document from the registry.

        Args:
            package_name: Package name.
            package_version: Package version.

        Returns:
            Parsed JSON document, or an error marker string if the request
            failed.
        """
        url = self.package_url(package_name, package_version)

        async with self.throttle:
            logger.debug("Fetching npm metadata from %s", url)
            try:
                session = await self._get_session()
                async with session.get(url) as response:
                    if not 200 <= response.status < 300:
                        logger.warning(
                            "npm registry returned status %d for %s@%s",
                            response.status,
                            package_name,
                            package_version,
                        )
                        return error_marker(response.status, _status_text(response))

                    try:
                        data = await response.json(content_type=None)
                    except ValueError as e:
                        logger.warning(
                            "Failed to parse JSON response for %s@%s: %s",
                            package_name,
                            package_version,
                            e,
                        )
                        return error_marker(response.status, "Invalid JSON")

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.warning(
                    "Network error fetching npm metadata for %s@%s: %s",
                    package_name,
                    package_version,
                    e,
                )
                return error_marker(NETWORK_ERROR_STATUS, str(e) or type(e).__name__)

        if not isinstance(data, dict):
            logger.warning(
                "Unexpected response body for %s@%s", package_name, package_version
            )
            return error_marker(response.status, "Unexpected response body")

        return data
