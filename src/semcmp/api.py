"""Library API for semcmp.

Usage:
    from semcmp import create_report

    report = create_report("old.json", "new.json")
    print(report.max_severity(), report.required_bump())
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .config import CompareSettings, default_settings
from .diff import compare_libraries
from .exceptions import LoadingError
from .loader import load_library
from .logging_config import get_logger
from .report import Report, Severity

logger = get_logger(__name__)


def create_report(
    old: Union[str, Path],
    new: Union[str, Path],
    settings: Optional[CompareSettings] = None,
) -> Report:
    """Load two declaration dumps and compare them.

    A side that fails to load becomes an Error entry at the root; the
    comparison itself only runs when both sides loaded.

    Returns:
        The pruned report tree.
    """
    settings = settings or default_settings
    report = Report()

    old_library = _load_side(report, old)
    new_library = _load_side(report, new)

    if old_library is not None and new_library is not None:
        return compare_libraries(old_library, new_library, settings, report)

    report.prune()
    return report


def _load_side(report: Report, path: Union[str, Path]):
    try:
        return load_library(path, report)
    except LoadingError as e:
        logger.error("%s", e)
        report.push(Severity.ERROR, f"Failed to read library at {path}: {e}")
        return None
