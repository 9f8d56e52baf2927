"""Output reporters for resolved dependency records.

This module provides reporters for rendering dependency records to the
console, to CSV and to Markdown.
"""

from npm_license_checker.reporters.base import BaseReporter
from npm_license_checker.reporters.console import ConsoleReporter
from npm_license_checker.reporters.csv import CsvReporter, filesafe_timestamp, to_csv
from npm_license_checker.reporters.markdown import MarkdownReporter

__all__ = [
    "BaseReporter",
    "ConsoleReporter",
    "CsvReporter",
    "MarkdownReporter",
    "filesafe_timestamp",
    "to_csv",
]
