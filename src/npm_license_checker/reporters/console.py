"""Console progress and summary output.

Each lookup is shown as a single line that is printed before the request
and rewritten in place once the license is known.
"""

from typing import Optional

from rich.console import Console
from rich.control import Control
from rich.markup import escape
from rich.table import Table

from npm_license_checker.models import DependencyKind, DependencyRecord, is_marker

PENDING_GLYPH = "☐"
SUCCESS_GLYPH = "✔"
FAILURE_GLYPH = "✖"


def progress_message(record: DependencyRecord, kind: DependencyKind) -> str:
    """Return the progress line of a lookup, without glyph or license."""
    return (
        f"Checking {record.project_name}'s \"{kind.value}\": "
        f"{record.package_name}@{record.package_version}... "
    )


class ConsoleReporter:
    """Write lookup progress and the final record table to the console.

    Attributes:
        console: Rich console to write to.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def start(self, record: DependencyRecord, kind: DependencyKind) -> None:
        """Print the pending line of a lookup, without a newline."""
        self.console.print(
            escape(f"{PENDING_GLYPH}  {progress_message(record, kind)}"),
            end="",
            highlight=False,
            soft_wrap=True,
            emoji=False,
        )

    def finish(self, record: DependencyRecord, kind: DependencyKind) -> None:
        """Rewrite the pending line with the outcome of the lookup."""
        license_value = record.package_license or ""
        glyph = FAILURE_GLYPH if is_marker(license_value) else SUCCESS_GLYPH
        style = "red" if glyph == FAILURE_GLYPH else "green"

        self.console.control(Control.move_to_column(0))
        self.console.print(
            f"[{style}]{glyph}[/{style}]  "
            f"{escape(progress_message(record, kind))}{escape(license_value)}.",
            highlight=False,
            soft_wrap=True,
            emoji=False,
        )

    def table(self, records: list[DependencyRecord], title: Optional[str] = None) -> None:
        """Print all records as a table, one column per record field."""
        table = Table(title=title, show_lines=False)
        table.add_column("#", justify="right", style="dim")
        for name in DependencyRecord.field_names():
            table.add_column(name)

        for index, record in enumerate(records):
            license_value = record.package_license or ""
            values = [escape(value) for value in record.values()]
            if is_marker(license_value):
                values[-1] = f"[red]{values[-1]}[/red]"
            table.add_row(str(index), *values)

        self.console.print(table)
