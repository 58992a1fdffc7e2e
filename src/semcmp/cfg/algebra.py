"""Conditional-availability predicates and the algebra used to compare them.

A declaration may only exist under some combination of flags, features
and target properties. Comparing two declarations therefore means
comparing two boolean expression trees:

    subset(A, B)      every assignment satisfying A satisfies B
    intersects(A, B)  some assignment satisfies both
    equivalent(A, B)  A and B agree on every assignment

These are decided by enumerating every assignment of the free variables
of both operands. Target properties sharing a key are grouped into one
multi-valued choice (a target has exactly one ``target_os``), everything
else is an independent on/off switch. The cost is exponential in the
number of choice axes, which stays tiny for real predicates; a warning is
logged once it grows past ``ENUMERATION_WARN_VARS``. The three queries
only depend on ``assignments()``, so a BDD or SAT backend could replace
the enumeration without touching callers.
"""

from __future__ import annotations

import itertools
import json
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Sequence,
    Set,
    Tuple,
)

from ..logging_config import get_logger
from ..report.models import Severity, Strictness

if TYPE_CHECKING:
    from ..report.tree import Report

logger = get_logger(__name__)

ENUMERATION_WARN_VARS = 16

TARGET = "target"
FEATURE = "feature"
FLAG = "flag"


class FreeVar(NamedTuple):
    """Semantic identity of an atom.

    Target properties carry ``(key, value)``; features and flags carry
    their name and live in separate namespaces.
    """

    kind: str
    name: str
    value: str = ""


Assignment = FrozenSet[FreeVar]


class Config:
    """Base class of every predicate node. Instances are immutable values."""

    __slots__ = ()

    # ── Semantics ────────────────────────────────────────────────────────

    def evaluate(self, assignment: Iterable[FreeVar]) -> bool:
        raise NotImplementedError

    def _collect_free_vars(self, out: Set[FreeVar]) -> None:
        pass

    def free_vars(self) -> FrozenSet[FreeVar]:
        out: Set[FreeVar] = set()
        self._collect_free_vars(out)
        return frozenset(out)

    def is_universal(self) -> bool:
        return isinstance(self, Universal)

    def is_never(self) -> bool:
        return isinstance(self, Never)

    # ── Decisions ────────────────────────────────────────────────────────

    def subset(self, other: Config) -> bool:
        """Return True if wherever this predicate holds, ``other`` does too."""
        if other.is_universal():
            return True
        # No shortcut for self being universal: other may be Any([true, false]).
        return not _exists(
            (self, other), lambda vars: self.evaluate(vars) and not other.evaluate(vars)
        )

    def intersects(self, other: Config) -> bool:
        """Return True if some assignment satisfies both predicates."""
        if self.is_universal() or other.is_universal():
            return True
        return _exists((self, other), lambda vars: self.evaluate(vars) and other.evaluate(vars))

    def equivalent(self, other: Config) -> bool:
        """Return True if both predicates agree on every assignment."""
        if self.is_universal() and other.is_universal():
            return True
        return not _exists((self, other), lambda vars: self.evaluate(vars) != other.evaluate(vars))

    # ── Rewriting ────────────────────────────────────────────────────────

    def union(self, other: Config) -> Config:
        """Predicate accepting what either operand accepts.

        An existing ``Any`` absorbs the other operand instead of being
        nested, so repeated unions stay one level deep.
        """
        if isinstance(self, Any):
            if isinstance(other, Any):
                return Any(self.items + other.items)
            return Any(self.items + (other,))
        if isinstance(other, Any):
            return Any(other.items + (self,))
        return Any((self, other))

    def simplify(self) -> Config:
        """Return an equivalent predicate with sentinels folded away."""
        return self

    # ── Reporting ────────────────────────────────────────────────────────

    def report(self, report: Report, parent: Config, prefix: str = "") -> Report:
        """Note this predicate under ``report`` unless ``parent`` already implies it.

        Returns the node further diagnostics should nest under.
        """
        if parent.subset(self):
            return report
        return report.push(Severity.NOTE, f"{prefix}{self.describe()}", Strictness.INHERIT)

    def render(self) -> str:
        raise NotImplementedError

    def describe(self) -> str:
        """Human-readable availability, e.g. ``cfg(unix)`` or ``always available``."""
        return f"cfg({self.render()})"

    def __str__(self) -> str:
        return self.render()


# ── Combinators ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Not(Config):
    inner: Config

    def evaluate(self, assignment: Iterable[FreeVar]) -> bool:
        return not self.inner.evaluate(assignment)

    def _collect_free_vars(self, out: Set[FreeVar]) -> None:
        self.inner._collect_free_vars(out)

    def simplify(self) -> Config:
        inner = self.inner.simplify()
        if inner.is_universal():
            return NEVER
        if inner.is_never():
            return UNIVERSAL
        return Not(inner)

    def render(self) -> str:
        return f"not({self.inner.render()})"


class _Combinator(Config):
    __slots__ = ()
    items: Tuple[Config, ...]
    head = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def _collect_free_vars(self, out: Set[FreeVar]) -> None:
        for item in self.items:
            item._collect_free_vars(out)

    def render(self) -> str:
        return f"{self.head}({', '.join(item.render() for item in self.items)})"


@dataclass(frozen=True)
class All(_Combinator):
    items: Tuple[Config, ...]
    head = "all"

    def evaluate(self, assignment: Iterable[FreeVar]) -> bool:
        return all(item.evaluate(assignment) for item in self.items)

    def simplify(self) -> Config:
        items = [item.simplify() for item in self.items]
        if any(item.is_never() for item in items):
            return NEVER
        items = [item for item in items if not item.is_universal()]
        if not items:
            return UNIVERSAL
        if len(items) == 1:
            return items[0]
        return All(items)


@dataclass(frozen=True)
class Any(_Combinator):
    items: Tuple[Config, ...]
    head = "any"

    def evaluate(self, assignment: Iterable[FreeVar]) -> bool:
        return any(item.evaluate(assignment) for item in self.items)

    def simplify(self) -> Config:
        items = [item.simplify() for item in self.items]
        if any(item.is_universal() for item in items):
            return UNIVERSAL
        items = [item for item in items if not item.is_never()]
        if not items:
            return NEVER
        if len(items) == 1:
            return items[0]
        return Any(items)


# ── Atoms ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TargetProperty(Config):
    key: str
    value: str

    @property
    def free_var(self) -> FreeVar:
        return FreeVar(TARGET, self.key, self.value)

    def evaluate(self, assignment: Iterable[FreeVar]) -> bool:
        return self.free_var in assignment

    def _collect_free_vars(self, out: Set[FreeVar]) -> None:
        out.add(self.free_var)

    def render(self) -> str:
        return f"{self.key} = {_quote(self.value)}"


@dataclass(frozen=True)
class Feature(Config):
    name: str

    @property
    def free_var(self) -> FreeVar:
        return FreeVar(FEATURE, self.name)

    def evaluate(self, assignment: Iterable[FreeVar]) -> bool:
        return self.free_var in assignment

    def _collect_free_vars(self, out: Set[FreeVar]) -> None:
        out.add(self.free_var)

    def render(self) -> str:
        return f"feature = {_quote(self.name)}"


@dataclass(frozen=True)
class Flag(Config):
    name: str

    @property
    def free_var(self) -> FreeVar:
        return FreeVar(FLAG, self.name)

    def evaluate(self, assignment: Iterable[FreeVar]) -> bool:
        return self.free_var in assignment

    def _collect_free_vars(self, out: Set[FreeVar]) -> None:
        out.add(self.free_var)

    def render(self) -> str:
        return self.name


# ── Sentinels (internal use only) ────────────────────────────────────────


@dataclass(frozen=True)
class Universal(Config):
    """Always true. The availability of an unconditional declaration."""

    def evaluate(self, assignment: Iterable[FreeVar]) -> bool:
        return True

    def render(self) -> str:
        return "true"

    def describe(self) -> str:
        return "always available"


@dataclass(frozen=True)
class Never(Config):
    """Always false. The identity of ``union``."""

    def evaluate(self, assignment: Iterable[FreeVar]) -> bool:
        return False

    def render(self) -> str:
        return "false"

    def describe(self) -> str:
        return "never available"


UNIVERSAL = Universal()
NEVER = Never()


def all_of(configs: Sequence[Config]) -> Config:
    """Combine predicates with ``All``; zero gives UNIVERSAL, one is returned as is."""
    if not configs:
        return UNIVERSAL
    if len(configs) == 1:
        return configs[0]
    return All(configs)


# ── Enumeration ──────────────────────────────────────────────────────────


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def choice_axes(free_vars: Iterable[FreeVar]) -> List[Tuple[Optional[FreeVar], ...]]:
    """Turn a set of free variables into the axes of the enumeration.

    Each axis lists the mutually exclusive options for one choice, with
    ``None`` standing for "none of these". Target properties sharing a key
    share an axis; every other variable gets its own on/off axis.
    """
    groups: Dict[Tuple[str, ...], List[FreeVar]] = {}
    for var in sorted(set(free_vars)):
        if var.kind == TARGET:
            groups.setdefault((TARGET, var.name), []).append(var)
        else:
            groups[tuple(var)] = [var]
    return [(None, *options) for options in groups.values()]


def assignments(*configs: Config) -> Iterator[Assignment]:
    """Yield every valid assignment of the free variables of ``configs``."""
    free: Set[FreeVar] = set()
    for config in configs:
        config._collect_free_vars(free)
    axes = choice_axes(free)
    if len(axes) > ENUMERATION_WARN_VARS:
        logger.warning(
            "Predicate comparison enumerates %d choice axes; this may be slow", len(axes)
        )
    for combination in itertools.product(*axes):
        yield frozenset(var for var in combination if var is not None)


def _exists(configs: Tuple[Config, ...], test: Callable[[Assignment], bool]) -> bool:
    """Return True as soon as one assignment passes ``test``."""
    for assignment in assignments(*configs):
        if test(assignment):
            return True
    return False
