"""Base interface for output reporters.

Reporters generate formatted output (CSV, Markdown, etc.) from resolved
dependency records.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from npm_license_checker.models import DependencyRecord


class BaseReporter(ABC):
    """Abstract base class for output reporters.

    Reporters take resolved dependency records and generate formatted
    output documents.
    """

    @abstractmethod
    def render(self, records: list[DependencyRecord]) -> str:
        """Render dependency records to formatted output.

        Args:
            records: Resolved dependency records, in report order.

        Returns:
            Rendered output as a string.
        """
        ...

    def write(self, records: list[DependencyRecord], output_path: Path) -> None:
        """Render and write output to a file.

        Args:
            records: Resolved dependency records, in report order.
            output_path: Path to write the output file.
        """
        content = self.render(records)
        output_path.write_text(content, encoding="utf-8")

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            Format name like "csv" or "markdown".
        """
        ...

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Return the default file extension for this format.

        Returns:
            Extension like ".csv" or ".md".
        """
        ...
