"""Tests for the CSV reporter."""

from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest

from npm_license_checker.models import DependencyKind, DependencyRecord
from npm_license_checker.reporters.csv import CsvReporter, filesafe_timestamp, to_csv


@pytest.fixture
def records() -> list[DependencyRecord]:
    return [
        DependencyRecord("proj-a", "left-pad", "1.0.0", "WTFPL"),
        DependencyRecord("proj-a", "lodash", "4.17.21", "MIT"),
        DependencyRecord("proj-b", "right-pad", "2.0.0", "[ERROR: 404: Not Found]"),
    ]


def test_to_csv_header_is_field_names(records) -> None:
    lines = to_csv(records).split("\n")

    assert lines[0] == "project_name,package_name,package_version,package_license"


def test_to_csv_rows_reconstruct_records(records) -> None:
    """Test that splitting each row on commas gives back the record values."""
    lines = to_csv(records).split("\n")

    rows = [line.split(",") for line in lines[1:]]

    assert rows == [
        [r.project_name, r.package_name, r.package_version, r.package_license]
        for r in records
    ]


def test_to_csv_empty() -> None:
    assert to_csv([]) == "project_name,package_name,package_version,package_license"


def test_filesafe_timestamp() -> None:
    moment = datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=UTC)

    assert filesafe_timestamp(moment) == "2024-05-01T12.30.45.123Z"


def test_filesafe_timestamp_converts_to_utc() -> None:
    moment = datetime(2024, 5, 1, 14, 30, 45, tzinfo=timezone(timedelta(hours=2)))

    assert filesafe_timestamp(moment) == "2024-05-01T12.30.45.000Z"


def test_filename() -> None:
    moment = datetime(2024, 5, 1, 12, 30, 45, tzinfo=UTC)

    name = CsvReporter().filename(DependencyKind.DEV_DEPENDENCIES, moment)

    assert name == ".devDependencies.2024-05-01T12.30.45.000Z.csv"
    assert ":" not in name


def test_write_report(records, tmp_path: Path) -> None:
    reporter = CsvReporter()

    path = reporter.write_report(records, DependencyKind.DEPENDENCIES, tmp_path)

    assert path.parent == tmp_path
    assert path.name.startswith(".dependencies.")
    assert path.suffix == ".csv"
    assert path.read_text(encoding="utf-8") == to_csv(records)
    assert reporter.format_name == "csv"
