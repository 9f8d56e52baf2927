"""Version specifier normalization.

package.json files declare dependencies with exact versions, ranges,
dist-tags or local references. The registry lookup needs a concrete
version, so specifiers are reduced to the best semantic version they
contain, in the same way npm's ``semver.coerce`` does.
"""

import logging
import re
from typing import Optional

import semver

logger = logging.getLogger(__name__)

# Specifier schemes pointing at the local filesystem rather than the registry
LOCAL_SPECIFIER_PREFIXES = ("file:", "link:", "portal:", "workspace:")

# First run of up to three dot-separated numbers not embedded in a longer number
_COERCE_RE = re.compile(
    r"(?:^|[^\d])(\d{1,16})(?:\.(\d{1,16}))?(?:\.(\d{1,16}))?(?:$|[^\d])"
)


def is_local_specifier(specifier: str) -> bool:
    """Check whether a specifier references a local or linked package.

    Args:
        specifier: Raw version specifier from a manifest.

    Returns:
        True for ``file:``, ``link:``, ``portal:`` and ``workspace:``
        specifiers, compared case-insensitively.
    """
    return specifier.strip().lower().startswith(LOCAL_SPECIFIER_PREFIXES)


def coerce_version(specifier: str) -> Optional[str]:
    """Extract the first x.y.z-like version from a specifier.

    Missing minor and patch parts default to zero. Prerelease and build
    metadata are dropped.

    Args:
        specifier: Raw version specifier (e.g., "^1.2.3", "~2.0", "v3").

    Returns:
        Coerced version string, or None if the specifier contains no digits.
    """
    match = _COERCE_RE.search(specifier)
    if match is None:
        return None

    major, minor, patch = (int(part) if part else 0 for part in match.groups())
    return str(semver.Version(major, minor, patch))


def normalize_version(specifier: str) -> str:
    """Normalize a raw specifier into a semantic version string.

    Strict semantic versions are returned unchanged, coercible specifiers
    are coerced, and anything else (including local references) is passed
    through as-is so that the lookup can report on it.

    Args:
        specifier: Raw version specifier from a manifest.

    Returns:
        Normalized version or the original specifier.
    """
    if is_local_specifier(specifier):
        return specifier

    if semver.Version.is_valid(specifier):
        return specifier

    coerced = coerce_version(specifier)
    if coerced is not None:
        return coerced

    logger.debug("Could not normalize version specifier: %s", specifier)
    return specifier
