"""Unit tests for the resolution pipeline."""

import logging
from pathlib import Path
from typing import Any

import pytest
from aioresponses import aioresponses

from npm_license_checker.exceptions import UnsupportedLicenseError
from npm_license_checker.models import DependencyKind, DependencyRecord
from npm_license_checker.pipeline import ResolutionPipeline
from npm_license_checker.resolvers.base import BaseResolver
from npm_license_checker.resolvers.npm import NpmRegistryResolver
from npm_license_checker.scanners.directory import ManifestDirectory


class FakeResolver(BaseResolver):
    """Resolver answering from a fixed mapping and recording calls."""

    def __init__(self, answers: dict[tuple[str, str], Any]) -> None:
        self.answers = answers
        self.calls: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "fake"

    async def resolve(self, package_name: str, package_version: str) -> Any:
        self.calls.append((package_name, package_version))
        return self.answers.get((package_name, package_version), "MIT")


class RecordingProgress:
    """Progress listener recording the events it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, Any]] = []

    def start(self, record: DependencyRecord, kind: DependencyKind) -> None:
        self.events.append(("start", record.package_name, record.package_license))

    def finish(self, record: DependencyRecord, kind: DependencyKind) -> None:
        self.events.append(("finish", record.package_name, record.package_license))


@pytest.fixture
def two_projects(write_manifest) -> None:
    write_manifest("proj-b.json", {"dependencies": {"right-pad": "2.0.0"}})
    write_manifest(
        "proj-a.json",
        {
            "dependencies": {"left-pad": "1.0.0", "lodash": "^4.17.21"},
            "devDependencies": {"jest": "~29.7"},
        },
    )


class TestExtract:
    """Test record extraction."""

    def test_records_follow_manifest_then_declaration_order(
        self, manifest_dir: Path, two_projects
    ) -> None:
        pipeline = ResolutionPipeline(ManifestDirectory(manifest_dir), FakeResolver({}))

        records = pipeline.extract(DependencyKind.DEPENDENCIES)

        assert [(r.project_name, r.package_name) for r in records] == [
            ("proj-a", "left-pad"),
            ("proj-a", "lodash"),
            ("proj-b", "right-pad"),
        ]

    def test_versions_are_normalized(self, manifest_dir: Path, two_projects) -> None:
        pipeline = ResolutionPipeline(ManifestDirectory(manifest_dir), FakeResolver({}))

        records = pipeline.extract(DependencyKind.DEPENDENCIES)

        assert [r.package_version for r in records] == ["1.0.0", "4.17.21", "2.0.0"]
        assert all(r.package_license is None for r in records)

    def test_missing_kind_warns_and_contributes_nothing(
        self, manifest_dir: Path, two_projects, caplog
    ) -> None:
        pipeline = ResolutionPipeline(ManifestDirectory(manifest_dir), FakeResolver({}))

        with caplog.at_level(logging.WARNING, logger="npm_license_checker"):
            records = pipeline.extract(DependencyKind.DEV_DEPENDENCIES)

        assert [(r.project_name, r.package_name) for r in records] == [
            ("proj-a", "jest"),
        ]
        assert 'No "devDependencies" dependencies listed in "proj-b.json"' in caplog.text


class TestRun:
    """Test resolution."""

    @pytest.mark.asyncio
    async def test_every_record_gets_a_license(
        self, manifest_dir: Path, two_projects
    ) -> None:
        resolver = FakeResolver({("lodash", "4.17.21"): "[BLANK]"})
        pipeline = ResolutionPipeline(ManifestDirectory(manifest_dir), resolver)

        records = await pipeline.run(DependencyKind.DEPENDENCIES)

        assert [r.package_license for r in records] == ["MIT", "[BLANK]", "MIT"]
        assert resolver.calls == [
            ("left-pad", "1.0.0"),
            ("lodash", "4.17.21"),
            ("right-pad", "2.0.0"),
        ]

    @pytest.mark.asyncio
    async def test_progress_notified_around_each_lookup(
        self, manifest_dir: Path, write_manifest
    ) -> None:
        write_manifest("proj-a.json", {"dependencies": {"left-pad": "1.0.0"}})
        progress = RecordingProgress()
        pipeline = ResolutionPipeline(
            ManifestDirectory(manifest_dir), FakeResolver({}), progress=progress
        )

        await pipeline.run(DependencyKind.DEPENDENCIES)

        assert progress.events == [
            ("start", "left-pad", None),
            ("finish", "left-pad", "MIT"),
        ]

    @pytest.mark.asyncio
    async def test_structured_result_is_flattened(
        self, manifest_dir: Path, write_manifest
    ) -> None:
        write_manifest("proj-a.json", {"dependencies": {"left-pad": "1.0.0"}})
        resolver = FakeResolver({("left-pad", "1.0.0"): {"type": "Apache-2.0"}})
        pipeline = ResolutionPipeline(ManifestDirectory(manifest_dir), resolver)

        records = await pipeline.run(DependencyKind.DEPENDENCIES)

        assert records[0].package_license == "Apache-2.0"

    @pytest.mark.asyncio
    async def test_structured_result_without_type_is_fatal(
        self, manifest_dir: Path, write_manifest
    ) -> None:
        write_manifest(
            "proj-a.json", {"dependencies": {"left-pad": "1.0.0", "zod": "3.0.0"}}
        )
        resolver = FakeResolver({("left-pad", "1.0.0"): {"name": "Custom"}})
        pipeline = ResolutionPipeline(ManifestDirectory(manifest_dir), resolver)

        with pytest.raises(UnsupportedLicenseError):
            await pipeline.run(DependencyKind.DEPENDENCIES)

        assert resolver.calls == [("left-pad", "1.0.0")]

    @pytest.mark.asyncio
    async def test_registry_failure_does_not_stop_next_package(
        self, manifest_dir: Path, two_projects, npm_resolver: NpmRegistryResolver
    ) -> None:
        pipeline = ResolutionPipeline(ManifestDirectory(manifest_dir), npm_resolver)

        with aioresponses() as mock:
            mock.get(
                "https://registry.npmjs.org/left-pad/1.0.0",
                status=500,
                reason="Internal Server Error",
                payload={},
            )
            mock.get(
                "https://registry.npmjs.org/lodash/4.17.21", payload={"license": "MIT"}
            )
            mock.get(
                "https://registry.npmjs.org/right-pad/2.0.0",
                payload={"license": {"type": "ISC"}},
            )

            records = await pipeline.run(DependencyKind.DEPENDENCIES)

        assert [r.package_license for r in records] == [
            "[ERROR: 500: Internal Server Error]",
            "MIT",
            "ISC",
        ]

    @pytest.mark.asyncio
    async def test_duplicate_dependency_fetched_once(
        self, manifest_dir: Path, write_manifest, npm_resolver: NpmRegistryResolver
    ) -> None:
        write_manifest("proj-a.json", {"dependencies": {"left-pad": "^1.0.0"}})
        write_manifest("proj-b.json", {"dependencies": {"left-pad": "1.0.0"}})
        pipeline = ResolutionPipeline(ManifestDirectory(manifest_dir), npm_resolver)

        with aioresponses() as mock:
            mock.get(
                "https://registry.npmjs.org/left-pad/1.0.0", payload={"license": "WTFPL"}
            )

            records = await pipeline.run(DependencyKind.DEPENDENCIES)

        assert [r.package_license for r in records] == ["WTFPL", "WTFPL"]
        assert npm_resolver.throttle.request_count == 1

    @pytest.mark.asyncio
    async def test_local_dependencies_skipped(
        self, manifest_dir: Path, write_manifest, npm_resolver: NpmRegistryResolver
    ) -> None:
        write_manifest(
            "proj-a.json", {"dependencies": {"shared": "file:../shared-1.0.0"}}
        )
        pipeline = ResolutionPipeline(ManifestDirectory(manifest_dir), npm_resolver)

        with aioresponses() as mock:
            records = await pipeline.run(DependencyKind.DEPENDENCIES)
            assert not mock.requests

        assert records[0].package_version == "file:../shared-1.0.0"
        assert records[0].package_license == "[SKIPPED: file:../shared-1.0.0]"

    @pytest.mark.asyncio
    async def test_non_string_version_does_not_stop_run(
        self, manifest_dir: Path, write_manifest, npm_resolver: NpmRegistryResolver
    ) -> None:
        write_manifest(
            "proj-a.json", {"dependencies": {"bad": None, "left-pad": "1.3.0"}}
        )
        pipeline = ResolutionPipeline(ManifestDirectory(manifest_dir), npm_resolver)

        with aioresponses() as mock:
            mock.get(
                "https://registry.npmjs.org/bad/null",
                status=404,
                reason="Not Found",
                payload={},
            )
            mock.get(
                "https://registry.npmjs.org/left-pad/1.3.0", payload={"license": "WTFPL"}
            )

            records = await pipeline.run(DependencyKind.DEPENDENCIES)

        assert [(r.package_name, r.package_version, r.package_license) for r in records] == [
            ("bad", "null", "[ERROR: 404: Not Found]"),
            ("left-pad", "1.3.0", "WTFPL"),
        ]
