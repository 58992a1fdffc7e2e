"""Report tree: an append-only, prunable tree of severity-tagged entries.

The diff engine opens scopes speculatively ("fn foo", "Inside mod bar")
as LAZY nodes and records findings under them. Once the comparison is
complete a single post-order :meth:`Report.prune` pass removes every
scope that ended up holding nothing STRICT, so callers never have to
decide up front whether a scope will be worth showing.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from .models import ReportItem, Severity, Strictness
from .policy import Bump, required_bump

ROOT_TEXT = "library root"


class Report:
    """A node owning one :class:`ReportItem` and its ordered children.

    The tree is strictly hierarchical: children are owned by their parent
    and hold no back-references.
    """

    __slots__ = ("item", "children")

    def __init__(self, item: Optional[ReportItem] = None):
        self.item = item or ReportItem(Severity.NOTE, ROOT_TEXT, Strictness.STRICT)
        self.children: List[Report] = []

    def __repr__(self) -> str:
        return f"Report({self.item.severity.label}: {self.item.text!r}, children={len(self.children)})"

    # ── Building ─────────────────────────────────────────────────────────

    def push(
        self,
        severity: Severity,
        text: str,
        strictness: Strictness = Strictness.STRICT,
    ) -> "Report":
        """Append a child entry and return it so callers can nest below it.

        The returned handle is only meant to be used by the caller that
        created it; do not keep it around once a sibling has been pushed.
        """
        child = Report(ReportItem(severity, text, strictness))
        self.children.append(child)
        return child

    def nest(
        self,
        severity: Severity,
        text: str,
        strictness: Strictness = Strictness.LAZY,
    ) -> "Report":
        """Open a scope for further diagnostics (LAZY unless told otherwise)."""
        return self.push(severity, text, strictness)

    def changed(self, severity: Severity, what: str, was: object, now: object) -> "Report":
        """Push a "<what> has changed" entry citing both values."""
        return self.push(severity, f"{what} has changed:\n  Was: {was}\n  Now: {now}")

    # ── Pruning ──────────────────────────────────────────────────────────

    def prune(self) -> None:
        """Remove uninformative branches in place.

        A LAZY node survives only if one of its surviving descendants is
        STRICT. INHERIT nodes go exactly when their parent goes, which
        falls out of deleting whole subtrees. The node this is called on
        is kept regardless of its own strictness.
        """
        self.children = [child for child in self.children if child._prune()]

    def _prune(self) -> bool:
        self.children = [child for child in self.children if child._prune()]
        if self.item.strictness is Strictness.LAZY:
            return self._has_strict_descendant()
        return True

    def _has_strict_descendant(self) -> bool:
        for child in self.children:
            if child.item.strictness is Strictness.STRICT or child._has_strict_descendant():
                return True
        return False

    # ── Inspection ───────────────────────────────────────────────────────

    def max_severity(self) -> Severity:
        """Aggregate severity: this node's and every descendant's maximum."""
        severity = self.item.severity
        for child in self.children:
            severity = max(severity, child.max_severity())
        return severity

    def required_bump(self) -> Bump:
        """The semantic-version component this report forces to change.

        Taken over every entry, not from :meth:`max_severity`: a MINOR
        addition outranks a WARNING when it comes to the bump.
        """
        return max((required_bump(item.severity) for _, item in self.walk()), default=Bump.NONE)

    def walk(self, depth: int = 0) -> Iterator[Tuple[int, ReportItem]]:
        """Yield ``(depth, item)`` pairs in pre-order, starting with this node."""
        yield depth, self.item
        for child in self.children:
            yield from child.walk(depth + 1)

    def entries(self) -> List[ReportItem]:
        """All items below this node (excluding it), in pre-order."""
        return [item for depth, item in self.walk() if depth > 0]

    def counts(self) -> Dict[Severity, int]:
        """Number of entries below this node per severity."""
        result: Dict[Severity, int] = {}
        for item in self.entries():
            result[item.severity] = result.get(item.severity, 0) + 1
        return result

    def find(self, text: str) -> List[ReportItem]:
        """Entries whose text contains ``text``."""
        return [item for item in self.entries() if text in item.text]

    def to_dict(self) -> dict:
        data = self.item.to_dict()
        data["children"] = [child.to_dict() for child in self.children]
        return data
