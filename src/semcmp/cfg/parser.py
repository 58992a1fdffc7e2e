"""Predicate mini-language: text -> meta items -> Config.

The loader hands us each predicate attribute as text such as::

    all(unix, feature = "serde", not(target_os = "macos"))

Parsing happens in two steps. :func:`parse_meta` turns text into a meta
item (a bare word, a ``head(...)`` list, or a ``key = literal`` pair) and
fails hard on syntax errors. :func:`config_from_meta` interprets a meta
item and never fails: unknown keys, non-string values and malformed
``not(...)`` push an Error entry into the report and degrade to a
``Flag`` so the comparison carries on.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple, Union

from ..exceptions import PredicateSyntaxError
from ..logging_config import get_logger
from ..report.models import Severity
from .algebra import UNIVERSAL, All, Any, Config, Feature, Flag, Not, TargetProperty, all_of

if TYPE_CHECKING:
    from ..report.tree import Report

logger = get_logger(__name__)

# The default target_family values. Other families still work when spelled
# out as target_family = "...".
TARGET_FAMILY_WORDS = frozenset({"unix", "windows"})

TARGET_KEYS = frozenset({
    "target_arch",
    "target_os",
    "target_family",
    "target_env",
    "target_endian",
    "target_pointer_width",
    "target_vendor",
})

# May hold for several values at once, so it cannot join a mutually
# exclusive target-property group.
ATOMIC_KEY = "target_has_atomic"


# ── Meta items ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Literal:
    """Right-hand side of ``key = value``; ``is_str`` is False for numbers, bools and idents."""

    value: str
    is_str: bool = True

    def __str__(self) -> str:
        return json.dumps(self.value, ensure_ascii=False) if self.is_str else self.value


@dataclass(frozen=True)
class Word:
    name: str


@dataclass(frozen=True)
class MetaList:
    head: str
    items: Tuple["Meta", ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NameValue:
    name: str
    literal: Literal


Meta = Union[Word, MetaList, NameValue]


# ── Tokenizer ────────────────────────────────────────────────────────────

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<string>"(?:[^"\\]|\\.)*")
  | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<number>-?[0-9][0-9A-Za-z_.]*)
  | (?P<punct>[(),=])
    """,
    re.VERBOSE,
)


def _tokenize(text: str) -> List[Tuple[str, str, int]]:
    tokens: List[Tuple[str, str, int]] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise PredicateSyntaxError(text, f"unexpected character {text[pos]!r}", pos)
        kind = match.lastgroup or ""
        if kind != "ws":
            tokens.append((kind, match.group(), pos))
        pos = match.end()
    return tokens


class _MetaParser:
    """Recursive-descent parser over the token list."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = _tokenize(text)
        self.index = 0

    def _peek(self) -> Optional[Tuple[str, str, int]]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _next(self, expected: str) -> Tuple[str, str, int]:
        token = self._peek()
        if token is None:
            raise PredicateSyntaxError(self.text, f"expected {expected}, found end of input")
        self.index += 1
        return token

    def _fail(self, token: Tuple[str, str, int], expected: str) -> PredicateSyntaxError:
        return PredicateSyntaxError(self.text, f"expected {expected}, found {token[1]!r}", token[2])

    def parse(self) -> Meta:
        meta = self._meta()
        token = self._peek()
        if token is not None:
            raise self._fail(token, "end of input")
        return meta

    def _meta(self) -> Meta:
        token = self._next("identifier")
        if token[0] != "ident":
            raise self._fail(token, "identifier")
        name = token[1]
        following = self._peek()
        if following is not None and following[1] == "(":
            self.index += 1
            return MetaList(name, tuple(self._list_items()))
        if following is not None and following[1] == "=":
            self.index += 1
            return NameValue(name, self._literal())
        return Word(name)

    def _list_items(self) -> List[Meta]:
        items: List[Meta] = []
        while True:
            token = self._peek()
            if token is not None and token[1] == ")":
                self.index += 1
                return items
            items.append(self._meta())
            token = self._next("',' or ')'")
            if token[1] == ")":
                return items
            if token[1] != ",":
                raise self._fail(token, "',' or ')'")

    def _literal(self) -> Literal:
        token = self._next("literal")
        kind, raw, pos = token
        if kind == "string":
            try:
                return Literal(json.loads(raw))
            except ValueError:
                raise PredicateSyntaxError(self.text, f"bad escape in string {raw}", pos)
        if kind in ("ident", "number"):
            return Literal(raw, is_str=False)
        raise self._fail(token, "literal")


def parse_meta(text: str) -> Meta:
    """Parse predicate text into a meta item.

    Raises:
        PredicateSyntaxError: If ``text`` is not a well-formed predicate.
    """
    return _MetaParser(text).parse()


# ── Interpretation ───────────────────────────────────────────────────────


def config_from_meta(report: Report, meta: Meta) -> Config:
    """Interpret a meta item, reporting malformed parts as Error entries."""
    if isinstance(meta, Word):
        if meta.name in TARGET_FAMILY_WORDS:
            return TargetProperty("target_family", meta.name)
        return Flag(meta.name)

    if isinstance(meta, MetaList):
        if meta.head == "all":
            return All([config_from_meta(report, item) for item in meta.items])
        if meta.head == "any":
            return Any([config_from_meta(report, item) for item in meta.items])
        if meta.head == "not":
            if len(meta.items) == 1:
                return Not(config_from_meta(report, meta.items[0]))
            report.push(Severity.ERROR, f"Non-unary cfg not(...) with {len(meta.items)} arguments")
            return Flag("not")
        report.push(Severity.ERROR, f"Unknown cfg list: {meta.head}(...)")
        return Flag(meta.head)

    literal = meta.literal
    if not literal.is_str:
        report.push(Severity.ERROR, f"Non-string cfg: {meta.name} = {literal}")
        return Flag(meta.name)
    if meta.name == "feature":
        return Feature(literal.value)
    if meta.name in TARGET_KEYS:
        return TargetProperty(meta.name, literal.value)
    if meta.name == ATOMIC_KEY:
        return Flag(f"{ATOMIC_KEY} = {literal}")
    report.push(Severity.ERROR, f"Unknown cfg key-value pair: {meta.name} = {literal}")
    return Flag(meta.name)


def parse_config(report: Report, text: str) -> Config:
    """Parse one predicate attribute, degrading to ``Flag(text)`` on syntax errors."""
    try:
        meta = parse_meta(text)
    except PredicateSyntaxError as e:
        logger.debug("Predicate syntax error: %s", e)
        report.push(Severity.ERROR, f"Malformed cfg {text!r}: {e.reason}")
        return Flag(text.strip())
    return config_from_meta(report, meta)


def config_from_attrs(report: Report, attrs: Iterable[str]) -> Config:
    """Combine every predicate attribute of a declaration.

    No attribute means the declaration is always available; several are
    implicitly joined with ``All``.
    """
    configs = [parse_config(report, text) for text in attrs]
    if not configs:
        return UNIVERSAL
    return all_of(configs)
