"""Resolution pipeline turning manifests into licensed dependency records.

The pipeline extracts one record per declared dependency, resolves the
records strictly one after another, and returns them to the caller for
reporting. Lookups are deliberately sequential: the registry throttle and
the cache are not shared-state safe, and the console progress line can
only show a single in-flight package.
"""

import logging
from typing import Any, Optional, Protocol

from npm_license_checker.models import DependencyKind, DependencyRecord
from npm_license_checker.resolvers.base import BaseResolver
from npm_license_checker.resolvers.npm import normalize_license_descriptor
from npm_license_checker.scanners.directory import ManifestDirectory
from npm_license_checker.versions import normalize_version

logger = logging.getLogger(__name__)


class ProgressListener(Protocol):
    """Receives a notification around each lookup."""

    def start(self, record: DependencyRecord, kind: DependencyKind) -> None: ...

    def finish(self, record: DependencyRecord, kind: DependencyKind) -> None: ...


class ResolutionPipeline:
    """Resolve the licenses of every dependency of one kind.

    Attributes:
        source: Directory of manifests to read.
        resolver: Resolver used for each lookup (cached and throttled).
        progress: Optional listener notified before and after each lookup.
    """

    def __init__(
        self,
        source: ManifestDirectory,
        resolver: BaseResolver,
        progress: Optional[ProgressListener] = None,
    ) -> None:
        self.source = source
        self.resolver = resolver
        self.progress = progress

    def extract(self, kind: DependencyKind) -> list[DependencyRecord]:
        """Build unresolved records for every dependency of a kind.

        Records follow manifest enumeration order, then declaration order
        within each manifest. A manifest without the requested section
        contributes no records.

        Args:
            kind: Dependency section to read.

        Returns:
            Records with normalized versions and no license.

        Raises:
            FileNotFoundError: If the manifest directory does not exist.
            ManifestError: If a manifest cannot be parsed.
        """
        records: list[DependencyRecord] = []

        for scanner in self.source.scanners():
            dependencies = scanner.scan(kind)
            if dependencies is None:
                logger.warning(
                    'No "%s" dependencies listed in "%s" package.json.',
                    kind,
                    scanner.source_path.name,
                )
                continue

            for package_name, specifier in dependencies:
                records.append(
                    DependencyRecord(
                        project_name=scanner.project_name,
                        package_name=package_name,
                        package_version=normalize_version(specifier),
                    )
                )

        logger.debug("Extracted %d %s record(s)", len(records), kind)
        return records

    async def run(self, kind: DependencyKind) -> list[DependencyRecord]:
        """Extract and resolve every dependency of a kind.

        Args:
            kind: Dependency section to resolve.

        Returns:
            Records in extraction order, each with a license string.

        Raises:
            UnsupportedLicenseError: If a license value cannot be
                interpreted. Resolution stops at that package.
        """
        records = self.extract(kind)

        for record in records:
            if self.progress is not None:
                self.progress.start(record, kind)

            resolved = await self.resolver.resolve(
                record.package_name, record.package_version
            )
            record.package_license = self._flatten(resolved, record)

            if self.progress is not None:
                self.progress.finish(record, kind)

        return records

    @staticmethod
    def _flatten(resolved: Any, record: DependencyRecord) -> str:
        """Reduce a resolved value to a license string.

        Raises:
            UnsupportedLicenseError: If the value is a structured license
                without a ``type``.
        """
        if isinstance(resolved, str) and resolved:
            return resolved
        return normalize_license_descriptor(
            resolved, record.package_name, record.package_version
        )
