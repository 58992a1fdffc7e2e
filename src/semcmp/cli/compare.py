"""Compare CLI command -- diff two declaration dumps and gate on the result."""

from pathlib import Path
from typing import Optional

import click
import typer
from rich.markup import escape

from ..api import create_report
from ..config import OUTPUT_FORMATS
from ..exceptions import InvalidVersionError, SemcmpError
from ..formatters import ComparisonContext, RichFormatter, get_formatter
from ..logging_config import setup_logging
from ..report import Severity, check_version_bump
from . import app
from ._common import console, resolve_settings

EXIT_GATE_FAILED = 1
EXIT_USAGE = 2

_SEVERITY_NAMES = [s.name.lower() for s in Severity]


@app.command()
def compare(
    old: Path = typer.Argument(..., help="Declaration dump of the old library version (JSON)"),
    new: Path = typer.Argument(..., help="Declaration dump of the new library version (JSON)"),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: rich | json | github",
        click_type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
    ),
    min_severity: Optional[str] = typer.Option(
        None,
        "--min-severity",
        help="Hide entries below this severity",
        click_type=click.Choice(_SEVERITY_NAMES, case_sensitive=False),
    ),
    fail_on: Optional[str] = typer.Option(
        None,
        "--fail-on",
        help="Exit 1 once the overall severity reaches this level (default: major)",
        click_type=click.Choice(_SEVERITY_NAMES, case_sensitive=False),
    ),
    old_version: Optional[str] = typer.Option(
        None,
        "--old-version",
        help="Version of the old library, e.g. 1.2.3",
    ),
    new_version: Optional[str] = typer.Option(
        None,
        "--new-version",
        help="Version of the new library; checked against the required bump",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
):
    """
    Compare two declaration dumps and report every public API change.

    [bold cyan]Examples:[/bold cyan]

      semcmp compare old.json new.json

      semcmp compare old.json new.json --format json

      semcmp compare old.json new.json --fail-on minor

      semcmp compare old.json new.json --old-version 0.3.1 --new-version 0.4.0
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_settings(
            config=config,
            output_format=output_format.lower() if output_format else None,
            min_severity=min_severity,
            fail_on=fail_on,
            verbose=verbose,
            quiet=quiet,
        )
    except SemcmpError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE)

    if (old_version is None) != (new_version is None):
        console.print("[red]Error:[/red] --old-version and --new-version must be given together")
        raise typer.Exit(EXIT_USAGE)

    report = create_report(old, new, settings)
    required = report.required_bump()
    logger.info(f"Overall severity {report.max_severity().label}, requires {required.name} bump")

    version_ok = None
    if old_version is not None and new_version is not None:
        try:
            version_ok = check_version_bump(old_version, new_version, required)
        except InvalidVersionError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(EXIT_USAGE)

    context = ComparisonContext(
        old_source=str(old),
        new_source=str(new),
        settings=settings,
        old_version=old_version,
        new_version=new_version,
        version_ok=version_ok,
    )

    if settings.output_format == "rich":
        formatter = RichFormatter(console)
    else:
        formatter = get_formatter(settings.output_format)
    formatter.render(report, context)

    if report.max_severity() >= settings.fail_on_level:
        logger.debug(f"Failing: severity reached --fail-on {settings.fail_on}")
        raise typer.Exit(EXIT_GATE_FAILED)
    if version_ok is False:
        logger.debug("Failing: declared version bump is too small")
        raise typer.Exit(EXIT_GATE_FAILED)
