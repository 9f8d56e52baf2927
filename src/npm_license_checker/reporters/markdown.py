"""Markdown reporter for generating license audit documents.

This module provides a reporter that generates Markdown-formatted license
audit tables using Jinja2 templates.
"""

from datetime import datetime
from importlib.resources import files
from itertools import groupby
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, Template

from npm_license_checker.models import DependencyRecord, is_marker
from npm_license_checker.reporters.base import BaseReporter


class MarkdownReporter(BaseReporter):
    """Reporter that generates Markdown license audit files.

    Records are grouped by project and rendered with a Jinja2 template.

    Attributes:
        template: The Jinja2 template to use for rendering.
        title: Heading of the document.
    """

    def __init__(
        self, template_path: Optional[Path] = None, title: str = "License Audit"
    ) -> None:
        """Initialize the Markdown reporter.

        Args:
            template_path: Optional path to a custom Jinja2 template.
                If not provided, uses the default bundled template.
            title: Heading of the document.
        """
        self.title = title
        if template_path:
            env = Environment(
                loader=FileSystemLoader(template_path.parent),
                autoescape=False,
            )
            env.tests["marker"] = is_marker
            self.template = env.get_template(template_path.name)
        else:
            self.template = self._load_default_template()

    def _load_default_template(self) -> Template:
        """Load the default bundled Jinja2 template.

        Returns:
            The default template loaded from package resources.
        """
        template_content = (
            files("npm_license_checker.templates")
            .joinpath("licenses.md.j2")
            .read_text(encoding="utf-8")
        )
        env = Environment(autoescape=False)
        env.tests["marker"] = is_marker
        return env.from_string(template_content)

    def render(self, records: list[DependencyRecord]) -> str:
        """Render dependency records to Markdown format.

        Args:
            records: Resolved dependency records, ordered by project.

        Returns:
            Rendered Markdown document as a string.
        """
        projects = [
            (project, list(group))
            for project, group in groupby(records, key=lambda r: r.project_name)
        ]
        return self.template.render(
            title=self.title,
            projects=projects,
            records=records,
            unresolved=[r for r in records if not r.is_resolved],
            generated_at=datetime.now(),
        )

    @property
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            The string "markdown".
        """
        return "markdown"

    @property
    def default_extension(self) -> str:
        """Return the default file extension for Markdown files.

        Returns:
            The string ".md".
        """
        return ".md"
