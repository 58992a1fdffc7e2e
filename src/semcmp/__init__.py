"""
semcmp - Semantic-versioning gate for library declaration surfaces

Compares two versions of a library's public declarations and classifies
every difference by the version bump it forces: removals and narrowed
availability are major, additions are minor. Conditional availability is
compared semantically, so reordering or rewriting a cfg predicate is not
mistaken for a change.
"""

__version__ = "0.1.0"

from .api import create_report
from .cfg import Config
from .diff import Declaration, DeclKind, Library, compare_libraries
from .loader import load_library
from .report import Bump, Report, Severity

__all__ = [
    "create_report",  # Main entry point
    "compare_libraries",
    "load_library",
    "Bump",
    "Config",
    "Declaration",
    "DeclKind",
    "Library",
    "Report",
    "Severity",
]
