"""Diff layer: declaration model, per-kind rules and the comparison engine."""

from .engine import (
    compare_libraries,
    compare_library_configs,
    compare_modules,
    find_counterparts,
    report_additions,
)
from .kinds import KIND_RULES, KindRule, compare_fn_signature, rule_for, types_equal
from .models import ALWAYS_PUBLIC_KINDS, Declaration, DeclKind, Library

__all__ = [
    "ALWAYS_PUBLIC_KINDS",
    "KIND_RULES",
    "Declaration",
    "DeclKind",
    "KindRule",
    "Library",
    "compare_fn_signature",
    "compare_libraries",
    "compare_library_configs",
    "compare_modules",
    "find_counterparts",
    "report_additions",
    "rule_for",
    "types_equal",
]
