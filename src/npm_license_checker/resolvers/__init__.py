"""License resolvers for fetching metadata from package registries.

This module provides the npm registry resolver together with the throttle
that spaces its requests.
"""

from npm_license_checker.resolvers.base import BaseResolver
from npm_license_checker.resolvers.npm import (
    DEFAULT_REGISTRY_URL,
    NpmRegistryResolver,
    normalize_license_descriptor,
)
from npm_license_checker.resolvers.throttle import DEFAULT_DELAY_SECONDS, FixedDelayThrottle

__all__ = [
    "BaseResolver",
    "DEFAULT_DELAY_SECONDS",
    "DEFAULT_REGISTRY_URL",
    "FixedDelayThrottle",
    "NpmRegistryResolver",
    "normalize_license_descriptor",
]
