"""GitHub Actions formatter — annotations and PR comment body."""

from typing import List

from ..report import Report, Severity
from .base import BaseFormatter, ComparisonContext, summary_line, visible_entries

_LEVEL = {
    Severity.DEBUG: "debug",
    Severity.NOTE: "notice",
    Severity.MINOR: "notice",
    Severity.WARNING: "warning",
    Severity.BREAKING: "warning",
    Severity.MAJOR: "error",
    Severity.ERROR: "error",
}


def _escape(message: str) -> str:
    # Workflow commands are single-line; GitHub decodes these escapes
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GithubFormatter(BaseFormatter):
    """Output GitHub Actions ``::error`` / ``::warning`` / ``::notice`` annotations.

    Also generates a Markdown comment body suitable for ``gh pr comment``.
    """

    def render(self, report: Report, context: ComparisonContext) -> None:
        print(self.format(report, context))

    def format(self, report: Report, context: ComparisonContext) -> str:
        lines: List[str] = []
        min_severity = max(context.settings.min_severity_level, Severity.NOTE)
        entries = list(visible_entries(report, min_severity))

        for _, item in entries:
            level = _LEVEL[item.severity]
            lines.append(f"::{level} title=semcmp {item.severity.label}::{_escape(item.text)}")

        lines.append("")
        lines.append("## semcmp API report")
        lines.append("")
        lines.append(f"`{context.old_source}` -> `{context.new_source}`")
        lines.append("")
        if entries:
            lines.append("| Severity | Change |")
            lines.append("|----------|--------|")
            for _, item in entries:
                text = item.text.replace("\n", "<br>").replace("|", "\\|")
                lines.append(f"| {item.severity.label} | {text} |")
            lines.append("")

        lines.append(f"**Summary:** {summary_line(report)}")
        if context.version_ok is not None:
            verdict = "sufficient" if context.version_ok else "NOT sufficient"
            lines.append(
                f"**Version bump:** `{context.old_version}` -> `{context.new_version}` is {verdict}"
            )
        return "\n".join(lines)
