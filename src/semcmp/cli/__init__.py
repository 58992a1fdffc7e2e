"""CLI entry point — registers all subcommands."""

from typing import Optional

import typer

from ._common import console

app = typer.Typer(
    name="semcmp",
    help="semcmp - Public API compatibility checker for library declaration dumps",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        is_eager=True,
    ),
):
    """
    Compare two versions of a library's public API and classify every change.

    [bold cyan]Examples:[/bold cyan]

      semcmp compare old.json new.json

      semcmp compare old.json new.json --old-version 1.2.0 --new-version 1.3.0

      semcmp cfg 'unix' 'any(unix, windows)'
    """
    from .. import __version__

    if version:
        console.print(f"[bold cyan]semcmp[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


# Import subcommands to register them
from .compare import compare as _compare  # noqa: F401, E402
from .cfg import cfg as _cfg  # noqa: F401, E402
