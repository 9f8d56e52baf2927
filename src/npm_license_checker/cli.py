"""Command-line interface for npm_license_checker.

Provides the main entry point that resolves the licenses of every
dependency declared in a directory of package.json manifests.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from npm_license_checker.cache import LicenseCache
from npm_license_checker.exceptions import (
    ManifestError,
    ReportWriteError,
    UnsupportedLicenseError,
)
from npm_license_checker.models import DependencyKind, DependencyRecord
from npm_license_checker.pipeline import ResolutionPipeline
from npm_license_checker.reporters import ConsoleReporter, CsvReporter, MarkdownReporter
from npm_license_checker.resolvers import (
    DEFAULT_DELAY_SECONDS,
    DEFAULT_REGISTRY_URL,
    FixedDelayThrottle,
    NpmRegistryResolver,
)
from npm_license_checker.scanners import DEFAULT_MANIFEST_DIR, ManifestDirectory

app = typer.Typer(
    name="npm-license-checker",
    help="Audit the licenses of npm dependencies declared in package.json files.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("npm_license_checker")

DEFAULT_KINDS = [DependencyKind.DEPENDENCIES, DependencyKind.DEV_DEPENDENCIES]


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("npm_license_checker").setLevel(level)


async def _check_dependencies(
    manifests: Path,
    kinds: list[DependencyKind],
    output_dir: Path,
    registry: str,
    delay: float,
    markdown: Optional[Path],
    show_table: bool,
    template: Optional[Path] = None,
) -> dict[DependencyKind, list[DependencyRecord]]:
    """Resolve and report every requested dependency kind in turn.

    One cache and one throttle are shared by all kinds, so a package
    version seen as a dependency is not fetched again as a dev dependency.

    Args:
        manifests: Directory holding the package.json manifests.
        kinds: Dependency kinds to check, in order.
        output_dir: Directory receiving the CSV reports.
        registry: Base URL of the npm registry.
        delay: Minimum delay in seconds between registry requests.
        markdown: Optional path of a Markdown report covering all kinds.
        show_table: Whether to print the record table after each kind.
        template: Optional custom Jinja2 template for the Markdown report.

    Returns:
        Resolved records per dependency kind.

    Raises:
        FileNotFoundError: If the manifest directory does not exist.
        ManifestError: If a manifest cannot be parsed.
        UnsupportedLicenseError: If a license value cannot be interpreted.
        ReportWriteError: If a report file cannot be written.
    """
    source = ManifestDirectory(manifests)
    cache = LicenseCache()
    reporter = ConsoleReporter(console)
    csv_reporter = CsvReporter()
    results: dict[DependencyKind, list[DependencyRecord]] = {}

    async with NpmRegistryResolver(
        cache=cache,
        throttle=FixedDelayThrottle(delay),
        registry_url=registry,
    ) as resolver:
        pipeline = ResolutionPipeline(source, resolver, progress=reporter)

        for kind in kinds:
            records = await pipeline.run(kind)
            results[kind] = records

            if show_table:
                reporter.table(records, title=str(kind))

            try:
                csv_path = csv_reporter.write_report(records, kind, output_dir)
            except OSError as e:
                raise ReportWriteError(f"Cannot write {kind.value} report: {e}") from e

            resolved_count = sum(1 for r in records if r.is_resolved)
            console.print(
                f"Resolved licenses for [bold]{resolved_count}[/bold]/{len(records)} "
                f"{kind.value} packages"
            )
            console.print(f"[green]Generated:[/green] {csv_path}")

    logger.debug("License cache: %s", cache.info())

    if markdown is not None:
        all_records = [record for records in results.values() for record in records]
        try:
            MarkdownReporter(template_path=template).write(all_records, markdown)
        except OSError as e:
            raise ReportWriteError(f"Cannot write {markdown}: {e}") from e
        console.print(f"[green]Generated:[/green] {markdown}")

    return results


@app.command()
def check(
    manifests: Annotated[
        Path,
        typer.Option(
            "--manifests",
            "-m",
            help="Directory containing package.json files (one per project)",
            file_okay=False,
        ),
    ] = DEFAULT_MANIFEST_DIR,
    kinds: Annotated[
        Optional[list[DependencyKind]],
        typer.Option(
            "--kind",
            "-k",
            help="Dependency kind to check (repeatable). "
            "Defaults to dependencies and devDependencies.",
        ),
    ] = None,
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for the CSV reports",
            file_okay=False,
        ),
    ] = Path("."),
    registry: Annotated[
        str,
        typer.Option(
            "--registry",
            envvar="NPM_REGISTRY_URL",
            help="npm registry base URL",
        ),
    ] = DEFAULT_REGISTRY_URL,
    delay: Annotated[
        float,
        typer.Option(
            "--delay",
            min=0.0,
            help="Minimum seconds between registry requests",
        ),
    ] = DEFAULT_DELAY_SECONDS,
    markdown: Annotated[
        Optional[Path],
        typer.Option(
            "--markdown",
            help="Also write a Markdown report to this path",
        ),
    ] = None,
    template: Annotated[
        Optional[Path],
        typer.Option(
            "--template",
            "-t",
            help="Custom Jinja2 template for the Markdown report",
            exists=True,
            readable=True,
            dir_okay=False,
        ),
    ] = None,
    show_table: Annotated[
        bool,
        typer.Option(
            "--table/--no-table",
            help="Print the table of all records after each kind",
        ),
    ] = True,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Resolve the license of every declared dependency.

    Reads each manifest in the directory, looks up every dependency on the
    npm registry and writes one CSV report per dependency kind.

    Exit codes:
        0 - All kinds checked (individual lookups may have failed)
        1 - A manifest could not be read, a license could not be interpreted
            or a report could not be written
    """
    _setup_logging(verbose)

    try:
        asyncio.run(
            _check_dependencies(
                manifests=manifests,
                kinds=kinds or DEFAULT_KINDS,
                output_dir=output_dir,
                registry=registry,
                delay=delay,
                markdown=markdown,
                show_table=show_table,
                template=template,
            )
        )
    except UnsupportedLicenseError as e:
        console.print()
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    except (ManifestError, FileNotFoundError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    except ReportWriteError as e:
        err_console.print(f"[red]Error writing output:[/red] {e}")
        raise typer.Exit(code=1)

    raise typer.Exit(code=0)


@app.callback()
def main() -> None:
    """Audit the licenses of npm dependencies declared in package.json files."""


if __name__ == "__main__":
    app()
