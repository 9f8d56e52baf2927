"""CSV reporter writing one timestamped file per dependency kind."""

from datetime import UTC, datetime
from pathlib import Path
from typing import Optional

from npm_license_checker.models import DependencyKind, DependencyRecord
from npm_license_checker.reporters.base import BaseReporter


def filesafe_timestamp(now: Optional[datetime] = None) -> str:
    """Return an ISO-8601 UTC timestamp usable in a file name.

    Args:
        now: Moment to format. Defaults to the current time.

    Returns:
        Timestamp like ``2024-05-01T12.30.45.123Z`` (colons become dots).
    """
    now = (now or datetime.now(UTC)).astimezone(UTC)
    iso = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return iso.replace(":", ".")


def to_csv(records: list[DependencyRecord]) -> str:
    """Serialize records as comma-joined lines.

    The first line holds the record field names. Values are joined as-is,
    without quoting.

    Args:
        records: Records to serialize.

    Returns:
        CSV text without a trailing newline.
    """
    lines = [",".join(DependencyRecord.field_names())]
    lines.extend(",".join(record.values()) for record in records)
    return "\n".join(lines)


class CsvReporter(BaseReporter):
    """Reporter that writes dependency records to CSV."""

    def render(self, records: list[DependencyRecord]) -> str:
        """Render records to CSV.

        Args:
            records: Resolved dependency records.

        Returns:
            CSV document as a string.
        """
        return to_csv(records)

    def filename(self, kind: DependencyKind, now: Optional[datetime] = None) -> str:
        """Return the report file name for a dependency kind.

        Args:
            kind: Dependency kind the report covers.
            now: Moment used for the timestamp.

        Returns:
            Name like ``.dependencies.2024-05-01T12.30.45.123Z.csv``.
        """
        return f".{kind.value}.{filesafe_timestamp(now)}{self.default_extension}"

    def write_report(
        self,
        records: list[DependencyRecord],
        kind: DependencyKind,
        directory: Path = Path("."),
    ) -> Path:
        """Write the report for a dependency kind into a directory.

        Args:
            records: Resolved dependency records.
            kind: Dependency kind the report covers.
            directory: Directory to write into.

        Returns:
            Path of the written file.
        """
        output_path = directory / self.filename(kind)
        self.write(records, output_path)
        return output_path

    @property
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            The string "csv".
        """
        return "csv"

    @property
    def default_extension(self) -> str:
        """Return the default file extension for CSV files.

        Returns:
            The string ".csv".
        """
        return ".csv"
