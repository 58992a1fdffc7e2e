"""Shared test fixtures for semcmp tests."""

import json
import os

import pytest

from semcmp.cfg import UNIVERSAL
from semcmp.diff import Declaration, DeclKind, Library


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user/project config files and SEMCMP_* variables out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    for key in list(os.environ):
        if key.startswith("SEMCMP_"):
            monkeypatch.delenv(key)


def _decl(name, kind, public=True, config=UNIVERSAL, **shape):
    return Declaration(name=name, kind=kind, public=public, config=config, **shape)


@pytest.fixture
def decl():
    """Factory for declarations: ``decl("read", DeclKind.FUNCTION, inputs=["u8"])``.

    Declarations are public and always available unless told otherwise.
    """
    return _decl


@pytest.fixture
def library():
    """Factory wrapping declarations into a Library with a root module."""

    def build(*items, config=UNIVERSAL, name="lib"):
        root = Declaration(
            name=name, kind=DeclKind.MODULE, public=True, config=config, items=list(items)
        )
        return Library(name=name, root=root)

    return build


@pytest.fixture
def write_dump(tmp_path):
    """Write a declaration dump (dict or raw text) and return its path."""

    def write(filename, data):
        path = tmp_path / filename
        text = data if isinstance(data, str) else json.dumps(data)
        path.write_text(text, encoding="utf-8")
        return path

    return write


@pytest.fixture
def old_dump():
    """A small library: one module, a const, a static and two functions."""
    return {
        "name": "mylib",
        "items": [
            {"name": "VERSION", "kind": "const", "public": True, "type": "&str"},
            {"name": "COUNTER", "kind": "static", "public": True, "type": "usize"},
            {
                "name": "read",
                "kind": "fn",
                "public": True,
                "inputs": ["&mut [u8]"],
                "output": "usize",
            },
            {"name": "helper", "kind": "fn", "public": False},
            {
                "name": "io",
                "kind": "mod",
                "public": True,
                "items": [
                    {"name": "flush", "kind": "fn", "public": True, "inputs": [], "output": None},
                ],
            },
        ],
    }
