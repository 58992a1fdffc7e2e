"""Report layer: severity-tagged diagnostic tree and release policy."""

from .models import ReportItem, Severity, Strictness
from .policy import (
    Bump,
    Version,
    actual_bump,
    check_version_bump,
    parse_version,
    required_bump,
)
from .tree import ROOT_TEXT, Report

__all__ = [
    "Bump",
    "ROOT_TEXT",
    "Report",
    "ReportItem",
    "Severity",
    "Strictness",
    "Version",
    "actual_bump",
    "check_version_bump",
    "parse_version",
    "required_bump",
]
