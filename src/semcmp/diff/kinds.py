"""Per-kind comparison rules.

Each comparable declaration kind maps to a :class:`KindRule`:

    matches(old, new)          can ``new`` stand in for ``old`` at all?
    compare(report, old, new)  record what changed between the two (optional;
                               modules leave their members to the engine)
    inspect(report, old)       sanity checks on ``old`` alone (optional)

Kinds without a rule are reported as unhandled by the engine. New kinds
are supported by adding a ``DeclKind`` member and a rule here.

Severities follow the API evolution RFC: anything a downstream user could
have relied on and that no longer holds is MAJOR.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..report import Report, Severity, Strictness
from .models import Declaration, DeclKind

UNIT_TYPE = "()"


def canonical_type(ty: Optional[str]) -> str:
    """Canonical rendering of a declared type: whitespace-collapsed text."""
    if ty is None:
        return ""
    return " ".join(ty.split())


def types_equal(lhs: Optional[str], rhs: Optional[str]) -> bool:
    """Placeholder type oracle: equal iff the canonical renderings match.

    Structurally different spellings of the same type (``Vec<u8>`` vs
    ``std::vec::Vec<u8>``) compare unequal; callers must tolerate these
    false positives.
    """
    return canonical_type(lhs) == canonical_type(rhs)


# ── const / static ───────────────────────────────────────────────────────


def _compare_const(report: Report, old: Declaration, new: Declaration) -> None:
    if new.kind is DeclKind.STATIC:
        if new.mutable:
            report.push(Severity.MAJOR, f"const {old.name} replaced by static mut")
        else:
            report.push(Severity.MINOR, f"const {old.name} replaced by static")
    if not types_equal(old.ty, new.ty):
        report.changed(Severity.MAJOR, f"const {old.name}'s type", old.ty, new.ty)


def _compare_static(report: Report, old: Declaration, new: Declaration) -> None:
    if new.kind is DeclKind.CONST:
        report.push(Severity.MAJOR, f"static {old.name} replaced by const")
    if not types_equal(old.ty, new.ty):
        report.changed(Severity.MAJOR, f"static {old.name}'s type", old.ty, new.ty)
    if new.kind is DeclKind.STATIC and old.mutable != new.mutable:
        report.changed(
            Severity.MAJOR,
            f"static {old.name}'s mutability",
            _mutability(old),
            _mutability(new),
        )


def _mutability(decl: Declaration) -> str:
    return "mutable" if decl.mutable else "immutable"


def _is_value(old: Declaration, new: Declaration) -> bool:
    return new.kind in (DeclKind.CONST, DeclKind.STATIC)


# ── fn ───────────────────────────────────────────────────────────────────


def _inspect_fn(report: Report, old: Declaration) -> None:
    if old.variadic:
        report.push(Severity.ERROR, f"non-foreign fn {old.name} is variadic")


def _compare_fn(report: Report, old: Declaration, new: Declaration) -> None:
    if old.unsafe != new.unsafe:
        report.changed(Severity.MAJOR, f"fn {old.name}'s unsafety", _safety(old), _safety(new))
    if old.const and not new.const:
        report.push(Severity.MAJOR, f"fn {old.name} was made non-const")
    if old.abi != new.abi:
        report.changed(Severity.MAJOR, f"fn {old.name}'s abi", old.abi, new.abi)
    compare_fn_signature(report, old, new)


def _safety(decl: Declaration) -> str:
    return "unsafe" if decl.unsafe else "safe"


def compare_fn_signature(report: Report, old: Declaration, new: Declaration) -> None:
    """Compare parameter lists and return types of two functions.

    This is the extension point for real signature checking. It only
    looks at arity, positional parameter types and the return type, all
    through :func:`types_equal`; generics, bounds and lifetimes are not
    considered.
    """
    if old.inputs is None or new.inputs is None:
        report.push(
            Severity.DEBUG,
            f"fn {old.name}'s signature was not compared (no signature data)",
            Strictness.INHERIT,
        )
        return

    if len(old.inputs) != len(new.inputs):
        report.changed(
            Severity.MAJOR,
            f"fn {old.name}'s number of arguments",
            len(old.inputs),
            len(new.inputs),
        )
    else:
        for index, (old_ty, new_ty) in enumerate(zip(old.inputs, new.inputs)):
            if not types_equal(old_ty, new_ty):
                report.changed(
                    Severity.MAJOR, f"fn {old.name}'s argument #{index + 1} type", old_ty, new_ty
                )

    old_output = old.output or UNIT_TYPE
    new_output = new.output or UNIT_TYPE
    if not types_equal(old_output, new_output):
        report.changed(Severity.MAJOR, f"fn {old.name}'s return type", old_output, new_output)


def _is_fn(old: Declaration, new: Declaration) -> bool:
    return new.kind is DeclKind.FUNCTION


# ── mod ──────────────────────────────────────────────────────────────────


def _is_mod(old: Declaration, new: Declaration) -> bool:
    return new.kind is DeclKind.MODULE


# ── Table ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class KindRule:
    label: str
    matches: Callable[[Declaration, Declaration], bool]
    compare: Optional[Callable[[Report, Declaration, Declaration], None]] = None
    inspect: Optional[Callable[[Report, Declaration], None]] = None
    recurse: bool = False


KIND_RULES: Dict[DeclKind, KindRule] = {
    DeclKind.MODULE: KindRule("mod", _is_mod, recurse=True),
    DeclKind.CONST: KindRule("const", _is_value, _compare_const),
    DeclKind.STATIC: KindRule("static", _is_value, _compare_static),
    DeclKind.FUNCTION: KindRule("fn", _is_fn, _compare_fn, inspect=_inspect_fn),
}


def rule_for(kind: DeclKind) -> Optional[KindRule]:
    """The comparison rule for ``kind``, or None if the kind is unhandled."""
    return KIND_RULES.get(kind)
