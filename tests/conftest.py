"""Pytest configuration and fixtures."""

import json
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any

import pytest

from npm_license_checker.cache import LicenseCache
from npm_license_checker.resolvers.npm import NpmRegistryResolver
from npm_license_checker.resolvers.throttle import FixedDelayThrottle

REGISTRY_URL = "https://registry.npmjs.org"


@pytest.fixture
def manifest_dir(tmp_path: Path) -> Path:
    """Return an empty directory for package.json manifests."""
    directory = tmp_path / "packageJsons"
    directory.mkdir()
    return directory


@pytest.fixture
def write_manifest(manifest_dir: Path) -> Callable[[str, dict[str, Any]], Path]:
    """Return a helper writing a manifest into the manifest directory."""

    def _write(filename: str, content: dict[str, Any]) -> Path:
        path = manifest_dir / filename
        path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cache() -> LicenseCache:
    """Return an empty license cache."""
    return LicenseCache()


@pytest.fixture
def throttle() -> FixedDelayThrottle:
    """Return a throttle that never waits."""
    return FixedDelayThrottle(delay=0)


@pytest.fixture
async def npm_resolver(
    cache: LicenseCache, throttle: FixedDelayThrottle
) -> AsyncGenerator[NpmRegistryResolver, None]:
    """Return an NpmRegistryResolver without request delay."""
    resolver = NpmRegistryResolver(cache=cache, throttle=throttle)
    yield resolver
    await resolver.close()

