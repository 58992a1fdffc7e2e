"""Declaration tree model consumed by the diff engine.

A library is a tree of declarations rooted at an unnamed module. Each
declaration has a name, a visibility, a kind tag, its availability
predicate, and the shape data its kind's comparator needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from ..cfg import UNIVERSAL, Config


class DeclKind(Enum):
    """Closed set of declaration kinds, keyed by their dump spelling."""

    MODULE = "mod"
    CONST = "const"
    STATIC = "static"
    FUNCTION = "fn"
    STRUCT = "struct"
    ENUM = "enum"
    UNION = "union"
    TRAIT = "trait"
    IMPL = "impl"
    TYPE_ALIAS = "type"
    MACRO = "macro"
    USE = "use"
    EXTERN_CRATE = "extern_crate"
    FOREIGN_MOD = "foreign_mod"
    UNHANDLED = "unhandled"

    @classmethod
    def from_name(cls, name: str) -> "DeclKind":
        """Map a dump spelling to a kind; unknown spellings are UNHANDLED."""
        try:
            return cls(name)
        except ValueError:
            return cls.UNHANDLED


# These have no visibility of their own; they are always effectively public.
ALWAYS_PUBLIC_KINDS = frozenset({DeclKind.IMPL, DeclKind.FOREIGN_MOD, DeclKind.MACRO})


@dataclass
class Declaration:
    """One named item of a library's declaration tree.

    Shape data is only meaningful for the matching kind:
        CONST:    ``ty``
        STATIC:   ``ty``, ``mutable``
        FUNCTION: ``unsafe``, ``const``, ``abi``, ``variadic``, ``inputs``, ``output``
        MODULE:   ``items``

    ``inputs``/``output`` are None when the loader had no signature data.
    """

    name: str
    kind: DeclKind
    public: bool = False
    config: Config = UNIVERSAL
    raw_kind: str = ""

    # const / static
    ty: Optional[str] = None
    mutable: bool = False

    # fn
    unsafe: bool = False
    const: bool = False
    abi: str = "Rust"
    variadic: bool = False
    inputs: Optional[List[str]] = None
    output: Optional[str] = None

    # mod
    items: List["Declaration"] = field(default_factory=list)

    @property
    def kind_name(self) -> str:
        """Kind as written in the dump (the raw spelling for UNHANDLED)."""
        if self.kind is DeclKind.UNHANDLED and self.raw_kind:
            return self.raw_kind
        return self.kind.value

    @property
    def is_public(self) -> bool:
        return self.public or self.kind in ALWAYS_PUBLIC_KINDS

    def named(self, name: str) -> Iterator["Declaration"]:
        """Child declarations called ``name``, in declaration order."""
        return (item for item in self.items if item.name == name)


@dataclass
class Library:
    """A whole declaration tree plus where it came from."""

    name: str
    root: Declaration
    source: str = ""

    @property
    def config(self) -> Config:
        """Whole-library availability predicate."""
        return self.root.config

    def count(self) -> int:
        """Number of declarations below the root."""
        total = 0
        stack = list(self.root.items)
        while stack:
            decl = stack.pop()
            total += 1
            stack.extend(decl.items)
        return total
