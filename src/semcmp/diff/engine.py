"""Diff engine. Walks two declaration trees and classifies every difference.

The algorithm works in three passes per module:
  1. Old pass: every public old declaration is looked up in the new module
     by name, visibility, kind and availability. Missing, hidden, retyped
     and narrowed declarations are MAJOR.
  2. New pass: every public new declaration without a counterpart in the
     old module is an addition (MINOR), as is widened availability.
  3. Child modules matched in pass 1 are compared recursively, each in
     its own LAZY scope so that unchanged modules disappear when the
     report is pruned.

Additions are MINOR even though a glob import downstream can break on a
new name.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..cfg import NEVER, All, Config
from ..config import CompareSettings, default_settings
from ..logging_config import get_logger
from ..report import Report, Severity
from .kinds import KindRule, rule_for
from .models import Declaration, Library

logger = get_logger(__name__)


def compare_libraries(
    old: Library,
    new: Library,
    settings: Optional[CompareSettings] = None,
    report: Optional[Report] = None,
) -> Report:
    """Compare two libraries and return the pruned report.

    Args:
        old: The previously released declaration tree.
        new: The candidate declaration tree.
        settings: Comparison settings; defaults when omitted.
        report: Report to record into (e.g. one already holding loader
                diagnostics); a fresh root is created when omitted.

    Returns:
        The pruned report tree.
    """
    settings = settings or default_settings
    report = report if report is not None else Report()

    logger.debug(
        "Comparing %s (%d declarations) against %s (%d declarations)",
        old.name, old.count(), new.name, new.count(),
    )

    compare_library_configs(report, old.config, new.config, settings)
    compare_modules(report, old.root, new.root, old.config, settings)

    report.prune()
    return report


def compare_library_configs(
    report: Report, old: Config, new: Config, settings: CompareSettings
) -> None:
    """Check the whole-library predicates against each other."""
    if not old.subset(new):
        report.push(Severity.MAJOR, _was_now("library narrows availability", old, new))
    if settings.report_widening and not new.subset(old):
        report.push(Severity.MINOR, _was_now("library widens availability", old, new))


def compare_modules(
    report: Report,
    old: Declaration,
    new: Declaration,
    context: Config,
    settings: CompareSettings,
) -> None:
    """Compare the members of two modules, then recurse into child modules.

    ``context`` is the availability already guaranteed by the library and
    every enclosing module; member predicates are only noted where they
    narrow it.
    """
    logger.debug("Comparing module %r: %d old items, %d new items", old.name, len(old.items), len(new.items))

    child_mods: List[Tuple[Declaration, Declaration]] = []

    for item in old.items:
        if not item.is_public:
            continue
        rule = rule_for(item.kind)
        if rule is None:
            report.push(Severity.NOTE, f'Item "{item.name}" has unhandled kind: {item.kind_name}')
            continue

        scope = report.nest(Severity.NOTE, f"{rule.label} {item.name}")
        scope = item.config.report(scope, context)
        if rule.inspect is not None:
            rule.inspect(scope, item)

        counterparts = find_counterparts(report, scope, item, new, rule)
        if rule.recurse:
            child_mods.extend((item, counterpart) for counterpart in counterparts)

    if settings.report_additions:
        report_additions(report, old, new, settings)

    for old_child, new_child in child_mods:
        nested = report.nest(Severity.NOTE, f"Inside mod {old_child.name}")
        inner = All([context, old_child.config]).simplify()
        compare_modules(nested, old_child, new_child, inner, settings)


def find_counterparts(
    report: Report,
    scope: Report,
    old: Declaration,
    new_module: Declaration,
    rule: KindRule,
) -> List[Declaration]:
    """Find the declarations in ``new_module`` that can stand in for ``old``.

    A counterpart has the same name, is public, has a predicate that
    intersects the old one and passes the kind rule. Per-kind differences
    are recorded under ``scope``; the overall verdict goes to ``report``.

    Returns:
        The counterparts, in declaration order.
    """
    any_found = False
    public_found = False
    counterparts: List[Declaration] = []
    theirs: Config = NEVER

    for candidate in new_module.named(old.name):
        any_found = True
        if not candidate.is_public:
            continue
        public_found = True
        if old.config.intersects(candidate.config) and rule.matches(old, candidate):
            if rule.compare is not None:
                rule.compare(scope, old, candidate)
            theirs = theirs.union(candidate.config)
            counterparts.append(candidate)

    what = f"{rule.label} {old.name}"
    if not any_found:
        report.push(Severity.MAJOR, f"{what} was removed")
    elif not public_found:
        report.push(Severity.MAJOR, f"{what} was made private")
    elif not counterparts:
        report.push(Severity.MAJOR, f"{what} is no longer a {rule.label}")
    elif not old.config.subset(theirs):
        report.push(Severity.MAJOR, _was_now(f"{what} has been narrowed", old.config, theirs.simplify()))

    return counterparts


def report_additions(
    report: Report, old: Declaration, new: Declaration, settings: CompareSettings
) -> None:
    """Report public declarations of ``new`` that ``old`` did not offer."""
    for item in new.items:
        if not item.is_public:
            continue
        rule = rule_for(item.kind)
        if rule is None:
            continue

        any_found = False
        public_found = False
        kind_found = False
        theirs: Config = NEVER

        for candidate in old.named(item.name):
            any_found = True
            if not candidate.is_public:
                continue
            public_found = True
            candidate_rule = rule_for(candidate.kind)
            if (
                candidate_rule is not None
                and candidate.config.intersects(item.config)
                and candidate_rule.matches(candidate, item)
            ):
                theirs = theirs.union(candidate.config)
                kind_found = True

        what = f"{rule.label} {item.name}"
        if not any_found:
            report.push(Severity.MINOR, f"{what} was added")
        elif not public_found:
            report.push(Severity.MINOR, f"{what} was made public")
        elif not kind_found:
            report.push(Severity.MINOR, f"{what} was added")
        elif settings.report_widening and not item.config.subset(theirs):
            report.push(
                Severity.MINOR, _was_now(f"{what} availability widened", theirs.simplify(), item.config)
            )


def _was_now(headline: str, was: Config, now: Config) -> str:
    return f"{headline}:\n  Was: {was.describe()}\n  Now: {now.describe()}"
