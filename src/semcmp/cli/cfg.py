"""cfg CLI command -- compare two availability predicates."""

import typer
from rich.markup import escape
from rich.table import Table

from ..cfg import Config, config_from_meta, parse_meta
from ..exceptions import PredicateSyntaxError
from ..report import Report
from . import app
from ._common import console


def _parse(report: Report, text: str) -> Config:
    try:
        return config_from_meta(report, parse_meta(text))
    except PredicateSyntaxError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)


def _yes_no(value: bool) -> str:
    return "[green]yes[/green]" if value else "[red]no[/red]"


@app.command()
def cfg(
    left: str = typer.Argument(..., help="First predicate, e.g. 'unix'"),
    right: str = typer.Argument(..., help="Second predicate, e.g. 'any(unix, windows)'"),
):
    """
    Show how two availability predicates relate.

    [bold cyan]Examples:[/bold cyan]

      semcmp cfg unix 'any(unix, windows)'

      semcmp cfg 'feature = "std"' 'not(feature = "std")'
    """
    report = Report()
    a = _parse(report, left)
    b = _parse(report, right)

    for item in report.entries():
        console.print(f"[yellow]{item.severity.label}:[/yellow] {escape(item.text)}")

    console.print(f"A: {escape(a.describe())}")
    console.print(f"B: {escape(b.describe())}")
    console.print()

    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("Relation", min_width=12)
    table.add_column("Holds")
    table.add_row("A subset B", _yes_no(a.subset(b)))
    table.add_row("A superset B", _yes_no(b.subset(a)))
    table.add_row("intersects", _yes_no(a.intersects(b)))
    table.add_row("equivalent", _yes_no(a.equivalent(b)))
    console.print(table)
