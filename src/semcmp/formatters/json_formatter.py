"""JSON formatter for semcmp."""

import json

from ..report import Report
from .base import BaseFormatter, ComparisonContext


class JsonFormatter(BaseFormatter):
    """Render the report tree and its summary as JSON."""

    def render(self, report: Report, context: ComparisonContext) -> None:
        print(self.format(report, context))

    def format(self, report: Report, context: ComparisonContext) -> str:
        data = {
            "old": context.old_source,
            "new": context.new_source,
            "max_severity": report.max_severity().name.lower(),
            "required_bump": report.required_bump().name.lower(),
            "counts": {
                severity.name.lower(): count
                for severity, count in sorted(report.counts().items())
            },
            "version_check": None,
            "report": report.to_dict(),
        }
        if context.version_ok is not None:
            data["version_check"] = {
                "old": context.old_version,
                "new": context.new_version,
                "ok": context.version_ok,
            }
        return json.dumps(data, indent=2)
