"""Declaration dump loader.

The source-language front end serializes each library version as JSON::

    {
      "name": "mylib",
      "cfg": ["unix"],
      "items": [
        {"name": "VERSION", "kind": "const", "public": true, "type": "&str"},
        {"name": "io", "kind": "mod", "public": true, "cfg": "feature = \\"io\\"",
         "items": [
           {"name": "read", "kind": "fn", "public": true,
            "inputs": ["&mut [u8]"], "output": "usize"}
         ]}
      ]
    }

Structural problems raise :class:`DeclarationFormatError`; predicate
problems are reported into the run's report and degrade gracefully.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .cfg import config_from_attrs
from .diff.models import Declaration, DeclKind, Library
from .exceptions import DeclarationFormatError, LoaderError
from .logging_config import get_logger
from .report import Report, Severity

logger = get_logger(__name__)

PathLike = Union[str, Path]


def load_library(path: PathLike, report: Optional[Report] = None) -> Library:
    """Read a declaration dump from disk.

    Args:
        path: JSON file produced by the front end.
        report: Where predicate diagnostics go; a scratch report otherwise.

    Raises:
        LoaderError: If the file cannot be read or decoded as UTF-8 JSON.
        DeclarationFormatError: If the JSON does not describe a library.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoaderError(path, e.strerror or str(e))
    except UnicodeDecodeError as e:
        raise LoaderError(path, f"not valid UTF-8 at byte {e.start}")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LoaderError(path, f"invalid JSON at line {e.lineno}: {e.msg}")

    try:
        library = library_from_dict(data, report, source=str(path))
    except DeclarationFormatError as e:
        raise DeclarationFormatError(e.reason, path=path, where=e.where)

    logger.debug("Loaded %s from %s (%d declarations)", library.name, path, library.count())
    return library


def library_from_dict(
    data: Any, report: Optional[Report] = None, source: str = ""
) -> Library:
    """Build a Library from an already-decoded dump."""
    if not isinstance(data, dict):
        raise DeclarationFormatError("top level must be an object")

    name = data.get("name", "")
    if not isinstance(name, str):
        raise DeclarationFormatError("library name must be a string")

    scratch = report if report is not None else Report()
    scope = scratch.nest(Severity.NOTE, f"Loading {source or name or 'library'}")

    root = Declaration(
        name=name,
        kind=DeclKind.MODULE,
        public=True,
        config=config_from_attrs(scope, _cfg_attrs(data, "library")),
        items=_items(data, scope, "library"),
    )
    return Library(name=name, root=root, source=source)


def _declaration(data: Any, report: Report, where: str) -> Declaration:
    if not isinstance(data, dict):
        raise DeclarationFormatError("declaration must be an object", where=where)

    name = data.get("name")
    kind_name = data.get("kind")
    if not isinstance(name, str) or not name:
        raise DeclarationFormatError("declaration is missing a name", where=where)
    if not isinstance(kind_name, str) or not kind_name:
        raise DeclarationFormatError(f"declaration {name!r} is missing a kind", where=where)

    where = f"{where}::{name}"
    kind = DeclKind.from_name(kind_name)
    decl = Declaration(
        name=name,
        kind=kind,
        public=_flag(data, "public", where),
        config=config_from_attrs(report, _cfg_attrs(data, where)),
        raw_kind=kind_name,
    )

    if kind in (DeclKind.CONST, DeclKind.STATIC):
        decl.ty = _optional_str(data, "type", where)
        decl.mutable = _flag(data, "mutable", where)
    elif kind is DeclKind.FUNCTION:
        decl.unsafe = _flag(data, "unsafe", where)
        decl.const = _flag(data, "const", where)
        decl.variadic = _flag(data, "variadic", where)
        decl.abi = _optional_str(data, "abi", where) or "Rust"
        decl.output = _optional_str(data, "output", where)
        inputs = data.get("inputs")
        if inputs is not None:
            if not isinstance(inputs, list) or not all(isinstance(i, str) for i in inputs):
                raise DeclarationFormatError("'inputs' must be a list of type strings", where=where)
            decl.inputs = list(inputs)
    elif kind is DeclKind.MODULE:
        decl.items = _items(data, report, where)

    return decl


def _items(data: Dict[str, Any], report: Report, where: str) -> List[Declaration]:
    items = data.get("items", [])
    if not isinstance(items, list):
        raise DeclarationFormatError("'items' must be a list", where=where)
    return [_declaration(item, report, where) for item in items]


def _cfg_attrs(data: Dict[str, Any], where: str) -> List[str]:
    attrs = data.get("cfg", [])
    if isinstance(attrs, str):
        return [attrs]
    if not isinstance(attrs, list) or not all(isinstance(a, str) for a in attrs):
        raise DeclarationFormatError("'cfg' must be a string or a list of strings", where=where)
    return list(attrs)


def _flag(data: Dict[str, Any], key: str, where: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise DeclarationFormatError(f"'{key}' must be true or false", where=where)
    return value


def _optional_str(data: Dict[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise DeclarationFormatError(f"'{key}' must be a string", where=where)
    return value
