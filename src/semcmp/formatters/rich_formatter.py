"""Rich terminal formatter for semcmp."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..report import Report, Severity
from .base import BaseFormatter, ComparisonContext, summary_line, visible_entries

INDENT = "  "

_SEVERITY_STYLE = {
    Severity.DEBUG: "dim",
    Severity.NOTE: "cyan",
    Severity.MINOR: "green",
    Severity.WARNING: "yellow",
    Severity.BREAKING: "yellow bold",
    Severity.MAJOR: "red bold",
    Severity.ERROR: "red bold reverse",
}


class RichFormatter(BaseFormatter):
    """Indented report tree with coloured severities and a summary line."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, report: Report, context: ComparisonContext) -> None:
        self.console.print(
            f"[bold]Comparing[/bold] {escape(context.old_source)} [dim]->[/dim] {escape(context.new_source)}"
        )
        self.console.print()
        min_severity = context.settings.min_severity_level
        for depth, item in visible_entries(report, min_severity):
            style = _SEVERITY_STYLE[item.severity]
            lines = item.text.split("\n")
            prefix = INDENT * depth
            self.console.print(
                f"{prefix}[{style}]{item.severity.label}[/{style}]: {escape(lines[0])}",
                highlight=False,
            )
            for line in lines[1:]:
                self.console.print(f"{prefix}{INDENT}{escape(line)}", highlight=False)
        self.console.print()
        self.console.print(f"[bold]{escape(summary_line(report))}[/bold]")
        self._print_version_check(context)

    def _print_version_check(self, context: ComparisonContext) -> None:
        if context.version_ok is None:
            return
        versions = f"{context.old_version} -> {context.new_version}"
        if context.version_ok:
            self.console.print(f"[green]Version bump {escape(versions)} is sufficient[/green]")
        else:
            self.console.print(f"[red]Version bump {escape(versions)} is NOT sufficient[/red]")

    def format(self, report: Report, context: ComparisonContext) -> str:
        lines = [f"Comparing {context.old_source} -> {context.new_source}", ""]
        min_severity = context.settings.min_severity_level
        for depth, item in visible_entries(report, min_severity):
            text_lines = item.text.split("\n")
            prefix = INDENT * depth
            lines.append(f"{prefix}{item.severity.label}: {text_lines[0]}")
            lines.extend(f"{prefix}{INDENT}{line}" for line in text_lines[1:])
        lines.append("")
        lines.append(summary_line(report))
        if context.version_ok is not None:
            verdict = "is sufficient" if context.version_ok else "is NOT sufficient"
            lines.append(f"Version bump {context.old_version} -> {context.new_version} {verdict}")
        return "\n".join(lines)
