"""Base formatter interface for semcmp output rendering."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from ..config import CompareSettings, default_settings
from ..report import Report, ReportItem, Severity


@dataclass
class ComparisonContext:
    """What was compared and how, for formatters to print alongside the tree."""

    old_source: str
    new_source: str
    settings: CompareSettings = default_settings
    old_version: Optional[str] = None
    new_version: Optional[str] = None
    version_ok: Optional[bool] = None  # None when no versions were given


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: Report, context: ComparisonContext) -> None:
        """Render the report to the terminal."""

    @abstractmethod
    def format(self, report: Report, context: ComparisonContext) -> str:
        """Return formatted string representation of the report."""


def visible_entries(report: Report, min_severity: Severity) -> Iterator[Tuple[int, ReportItem]]:
    """Pre-order ``(depth, item)`` pairs below the root at or above ``min_severity``.

    Hidden entries do not hide their children; depth is kept as in the tree.
    """
    for depth, item in report.walk():
        if depth == 0:
            continue
        if item.severity >= min_severity:
            yield depth - 1, item


def summary_line(report: Report) -> str:
    severity = report.max_severity()
    bump = report.required_bump()
    if not report.children:
        return "No public API changes detected (no version bump required)"
    return f"Overall severity: {severity.label} (requires a {bump.name.lower()} version bump)"
