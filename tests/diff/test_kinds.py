"""Tests for the per-kind comparison rules."""

import pytest

from semcmp.diff import KIND_RULES, DeclKind, compare_fn_signature, compare_libraries, rule_for, types_equal
from semcmp.diff.kinds import canonical_type
from semcmp.report import Report, Severity

FN = DeclKind.FUNCTION
CONST = DeclKind.CONST
STATIC = DeclKind.STATIC


def _details(report):
    """Entries recorded under the single item scope (or at top level)."""
    return [(item.severity, item.text) for item in report.entries() if item.text not in ("fn f", "const X", "static S")]


class TestTypeOracle:
    def test_whitespace_is_collapsed(self):
        assert canonical_type("  Vec< u8 >\n") == "Vec< u8 >"
        assert types_equal("&'a  str", "&'a str")

    def test_spelling_differences_are_unequal(self):
        assert not types_equal("Vec<u8>", "std::vec::Vec<u8>")

    def test_none(self):
        assert canonical_type(None) == ""
        assert types_equal(None, None)


class TestRuleTable:
    def test_comparable_kinds(self):
        assert set(KIND_RULES) == {DeclKind.MODULE, CONST, STATIC, FN}

    @pytest.mark.parametrize("kind", [DeclKind.STRUCT, DeclKind.TRAIT, DeclKind.IMPL, DeclKind.UNHANDLED])
    def test_other_kinds_have_no_rule(self, kind):
        assert rule_for(kind) is None

    def test_only_modules_recurse(self):
        assert [kind for kind, rule in KIND_RULES.items() if rule.recurse] == [DeclKind.MODULE]

    def test_modules_have_no_comparator(self):
        assert rule_for(DeclKind.MODULE).compare is None
        assert all(rule.compare is not None for kind, rule in KIND_RULES.items() if not rule.recurse)


class TestConst:
    def test_type_change(self, decl, library):
        report = compare_libraries(library(decl("X", CONST, ty="u8")), library(decl("X", CONST, ty="u16")))
        assert _details(report) == [
            (Severity.MAJOR, "const X's type has changed:\n  Was: u8\n  Now: u16"),
        ]

    def test_replaced_by_static_mut(self, decl, library):
        old = library(decl("X", CONST, ty="u8"))
        new = library(decl("X", STATIC, ty="u8", mutable=True))
        assert _details(compare_libraries(old, new)) == [
            (Severity.MAJOR, "const X replaced by static mut"),
        ]

    def test_replaced_by_static_with_new_type(self, decl, library):
        old = library(decl("X", CONST, ty="u8"))
        new = library(decl("X", STATIC, ty="i8"))
        assert _details(compare_libraries(old, new)) == [
            (Severity.MINOR, "const X replaced by static"),
            (Severity.MAJOR, "const X's type has changed:\n  Was: u8\n  Now: i8"),
        ]


class TestStatic:
    def test_replaced_by_const(self, decl, library):
        old = library(decl("S", STATIC, ty="u8"))
        new = library(decl("S", CONST, ty="u8"))
        assert _details(compare_libraries(old, new)) == [
            (Severity.MAJOR, "static S replaced by const"),
        ]

    def test_mutability_change(self, decl, library):
        old = library(decl("S", STATIC, ty="u8"))
        new = library(decl("S", STATIC, ty="u8", mutable=True))
        assert _details(compare_libraries(old, new)) == [
            (Severity.MAJOR, "static S's mutability has changed:\n  Was: immutable\n  Now: mutable"),
        ]

    def test_type_change(self, decl, library):
        old = library(decl("S", STATIC, ty="u8"))
        new = library(decl("S", STATIC, ty="u32"))
        assert [sev for sev, _ in _details(compare_libraries(old, new))] == [Severity.MAJOR]


class TestFunction:
    def test_unsafety_change(self, decl, library):
        old = library(decl("f", FN, inputs=[], unsafe=False))
        new = library(decl("f", FN, inputs=[], unsafe=True))
        assert _details(compare_libraries(old, new)) == [
            (Severity.MAJOR, "fn f's unsafety has changed:\n  Was: safe\n  Now: unsafe"),
        ]

    def test_made_non_const(self, decl, library):
        old = library(decl("f", FN, inputs=[], const=True))
        new = library(decl("f", FN, inputs=[], const=False))
        assert _details(compare_libraries(old, new)) == [(Severity.MAJOR, "fn f was made non-const")]

    def test_made_const_is_fine(self, decl, library):
        old = library(decl("f", FN, inputs=[], const=False))
        new = library(decl("f", FN, inputs=[], const=True))
        assert compare_libraries(old, new).entries() == []

    def test_abi_change(self, decl, library):
        old = library(decl("f", FN, inputs=[]))
        new = library(decl("f", FN, inputs=[], abi="C"))
        assert _details(compare_libraries(old, new)) == [
            (Severity.MAJOR, "fn f's abi has changed:\n  Was: Rust\n  Now: C"),
        ]

    def test_variadic_is_an_error(self, decl, library):
        old = library(decl("f", FN, inputs=[], variadic=True))
        report = compare_libraries(old, old)
        assert _details(report) == [(Severity.ERROR, "non-foreign fn f is variadic")]


class TestSignature:
    def _compare(self, decl, old, new):
        report = Report()
        compare_fn_signature(report, decl("f", FN, **old), decl("f", FN, **new))
        return [(item.severity, item.text) for item in report.entries()]

    def test_identical(self, decl):
        sig = {"inputs": ["&str", "usize"], "output": "bool"}
        assert self._compare(decl, sig, sig) == []

    def test_arity(self, decl):
        result = self._compare(decl, {"inputs": ["u8"]}, {"inputs": ["u8", "u8"]})
        assert result == [
            (Severity.MAJOR, "fn f's number of arguments has changed:\n  Was: 1\n  Now: 2"),
        ]

    def test_argument_type(self, decl):
        result = self._compare(decl, {"inputs": ["u8", "u8"]}, {"inputs": ["u8", "u16"]})
        assert result == [
            (Severity.MAJOR, "fn f's argument #2 type has changed:\n  Was: u8\n  Now: u16"),
        ]

    def test_return_type_defaults_to_unit(self, decl):
        result = self._compare(decl, {"inputs": []}, {"inputs": [], "output": "bool"})
        assert result == [
            (Severity.MAJOR, "fn f's return type has changed:\n  Was: ()\n  Now: bool"),
        ]

    def test_explicit_unit_matches_missing_output(self, decl):
        assert self._compare(decl, {"inputs": [], "output": "()"}, {"inputs": []}) == []

    def test_missing_signature_data(self, decl):
        result = self._compare(decl, {}, {"inputs": ["u8"]})
        assert len(result) == 1
        assert result[0][0] is Severity.DEBUG
        assert "not compared" in result[0][1]

    def test_missing_signature_data_is_pruned_on_its_own(self, decl, library):
        report = compare_libraries(library(decl("f", FN)), library(decl("f", FN)))
        assert report.entries() == []
