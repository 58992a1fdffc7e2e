"""Tests for the predicate algebra."""

import logging

import pytest

from semcmp.cfg import (
    ENUMERATION_WARN_VARS,
    NEVER,
    UNIVERSAL,
    All,
    Any,
    Feature,
    Flag,
    FreeVar,
    Not,
    TargetProperty,
    all_of,
    assignments,
    choice_axes,
)
from semcmp.report import Report, Severity, Strictness

A = Flag("a")
B = Flag("b")
C = Flag("c")
UNIX = TargetProperty("target_family", "unix")
WINDOWS = TargetProperty("target_family", "windows")
LINUX = TargetProperty("target_os", "linux")
MACOS = TargetProperty("target_os", "macos")

SAMPLES = [
    UNIVERSAL,
    NEVER,
    A,
    Not(A),
    All([A, B]),
    Any([A, B]),
    Any([A, Not(A)]),
    All([A, Not(A)]),
    LINUX,
    Any([LINUX, MACOS]),
    All([UNIX, Feature("std")]),
    Not(Any([UNIX, WINDOWS])),
]


class TestScenarios:
    def test_flag_subset_of_itself(self):
        assert Flag("foo").subset(Flag("foo"))

    def test_unrelated_flags_not_subset(self):
        assert not Flag("two").subset(Flag("one"))

    def test_same_key_targets_are_exclusive(self):
        linux = TargetProperty("target_os", "linux")
        windows = TargetProperty("target_os", "windows")
        assert not linux.intersects(windows)

    def test_unrelated_keys_are_independent(self):
        assert Flag("arbitrary").intersects(TargetProperty("target_family", "unix"))

    def test_different_target_keys_intersect(self):
        assert UNIX.intersects(LINUX)

    def test_feature_and_flag_namespaces_differ(self):
        assert not Feature("a").subset(Flag("a"))
        assert not Flag("a").equivalent(Feature("a"))


class TestSubset:
    @pytest.mark.parametrize("config", SAMPLES)
    def test_reflexive(self, config):
        assert config.subset(config)

    def test_transitive(self):
        narrow = All([A, B])
        middle = A
        wide = Any([A, C])
        assert narrow.subset(middle)
        assert middle.subset(wide)
        assert narrow.subset(wide)

    def test_everything_is_subset_of_universal(self):
        for config in SAMPLES:
            assert config.subset(UNIVERSAL)

    def test_never_is_subset_of_everything(self):
        for config in SAMPLES:
            assert NEVER.subset(config)

    @pytest.mark.parametrize("config", SAMPLES)
    def test_universal_subset_matches_equivalence(self, config):
        assert UNIVERSAL.subset(config) == config.equivalent(UNIVERSAL)

    @pytest.mark.parametrize("config", SAMPLES)
    def test_subset_of_never_matches_equivalence(self, config):
        assert config.subset(NEVER) == config.equivalent(NEVER)

    def test_universal_subset_of_tautology(self):
        # No short-cut on the left-hand side being universal
        assert UNIVERSAL.subset(Any([A, Not(A)]))
        assert not UNIVERSAL.subset(A)

    def test_one_of_a_group_is_subset_of_the_group(self):
        assert LINUX.subset(Any([LINUX, MACOS]))
        assert not Any([LINUX, MACOS]).subset(LINUX)


class TestEquivalent:
    @pytest.mark.parametrize("left", SAMPLES)
    @pytest.mark.parametrize("right", SAMPLES)
    def test_equivalent_iff_mutual_subset(self, left, right):
        assert left.equivalent(right) == (left.subset(right) and right.subset(left))

    def test_reordered_all_is_equivalent(self):
        assert All([A, B]).equivalent(All([B, A]))

    def test_de_morgan(self):
        assert Not(All([A, B])).equivalent(Any([Not(A), Not(B)]))

    def test_tautology_equivalent_to_universal(self):
        assert Any([A, Not(A)]).equivalent(UNIVERSAL)
        assert All([A, Not(A)]).equivalent(NEVER)


class TestIntersects:
    def test_universal_intersects_anything(self):
        assert UNIVERSAL.intersects(A)
        assert NEVER.intersects(UNIVERSAL)

    def test_never_intersects_nothing_else(self):
        assert not NEVER.intersects(A)
        assert not A.intersects(NEVER)

    def test_contradiction(self):
        assert not A.intersects(Not(A))


class TestUnion:
    @pytest.mark.parametrize("left", SAMPLES)
    @pytest.mark.parametrize("right", [A, Not(B), Any([B, C]), LINUX])
    def test_accepts_exactly_what_either_accepts(self, left, right):
        union = left.union(right)
        for assignment in assignments(left, right):
            expected = left.evaluate(assignment) or right.evaluate(assignment)
            assert union.evaluate(assignment) == expected

    def test_two_atoms(self):
        assert A.union(B) == Any([A, B])

    def test_any_absorbs_other_operand(self):
        assert Any([A, B]).union(C) == Any([A, B, C])

    def test_any_on_the_right_keeps_its_entries_first(self):
        assert C.union(Any([A, B])) == Any([A, B, C])

    def test_two_anys_concatenate(self):
        assert Any([A]).union(Any([B, C])) == Any([A, B, C])

    def test_receiver_is_unchanged(self):
        left = Any([A])
        left.union(B)
        assert left == Any([A])

    def test_never_is_identity(self):
        assert NEVER.union(A).simplify() == A


class TestSimplify:
    def test_drops_universal_from_all(self):
        assert All([UNIVERSAL, A]).simplify() == A

    def test_drops_never_from_any(self):
        assert Any([NEVER, A, B]).simplify() == Any([A, B])

    def test_empty_combinators(self):
        assert All([]).simplify() == UNIVERSAL
        assert Any([]).simplify() == NEVER

    def test_negated_sentinels(self):
        assert Not(UNIVERSAL).simplify() == NEVER
        assert Not(NEVER).simplify() == UNIVERSAL

    def test_recurses(self):
        nested = All([Any([NEVER, A]), Not(Not(UNIVERSAL))])
        assert nested.simplify() == A

    @pytest.mark.parametrize("config", SAMPLES + [All([UNIVERSAL, Any([NEVER, A])])])
    def test_idempotent(self, config):
        once = config.simplify()
        assert once.simplify() == once

    @pytest.mark.parametrize("config", SAMPLES + [All([UNIVERSAL, Any([NEVER, A, B])])])
    def test_preserves_semantics(self, config):
        assert config.simplify().equivalent(config)


class TestRendering:
    def test_atoms(self):
        assert str(UNIX) == 'target_family = "unix"'
        assert str(Feature("serde")) == 'feature = "serde"'
        assert str(Flag("test")) == "test"

    def test_combinators(self):
        config = All([UNIX, Not(Feature("std")), Any([A, B])])
        assert str(config) == 'all(target_family = "unix", not(feature = "std"), any(a, b))'

    def test_sentinels(self):
        assert str(UNIVERSAL) == "true"
        assert str(NEVER) == "false"

    def test_describe(self):
        assert UNIVERSAL.describe() == "always available"
        assert NEVER.describe() == "never available"
        assert Feature("x").describe() == 'cfg(feature = "x")'

    def test_quotes_are_escaped(self):
        assert str(Feature('a"b')) == 'feature = "a\\"b"'


class TestEnumeration:
    def test_same_key_targets_share_an_axis(self):
        axes = choice_axes({LINUX.free_var, MACOS.free_var, A.free_var})
        assert sorted(len(axis) for axis in axes) == [2, 3]
        for axis in axes:
            assert axis[0] is None

    def test_free_vars(self):
        config = All([UNIX, Not(Feature("std")), A])
        assert config.free_vars() == {
            FreeVar("target", "target_family", "unix"),
            FreeVar("feature", "std"),
            FreeVar("flag", "a"),
        }

    def test_assignments_cover_all_choices(self):
        result = set(assignments(A, B))
        assert len(result) == 4
        assert frozenset() in result

    def test_no_assignment_sets_two_values_of_one_key(self):
        for assignment in assignments(LINUX, MACOS):
            assert not (LINUX.free_var in assignment and MACOS.free_var in assignment)

    def test_large_domain_logs_a_warning(self, caplog):
        caplog.set_level(logging.WARNING, logger="semcmp")
        flags = [Flag(f"f{i}") for i in range(ENUMERATION_WARN_VARS + 1)]
        next(assignments(*flags))
        assert any("choice axes" in record.getMessage() for record in caplog.records)


class TestAllOf:
    def test_empty_is_universal(self):
        assert all_of([]) == UNIVERSAL

    def test_single_is_returned(self):
        assert all_of([A]) is A

    def test_several_are_joined(self):
        assert all_of([A, B]) == All([A, B])


class TestReport:
    def test_pushes_inherit_note_when_parent_does_not_imply(self):
        root = Report()
        node = A.report(root, UNIVERSAL)
        assert node is not root
        assert node.item.severity is Severity.NOTE
        assert node.item.strictness is Strictness.INHERIT
        assert node.item.text == "cfg(a)"

    def test_silent_when_parent_implies(self):
        root = Report()
        assert A.report(root, All([A, B])) is root
        assert root.children == []

    def test_prefix(self):
        root = Report()
        node = A.report(root, UNIVERSAL, prefix="only with ")
        assert node.item.text == "only with cfg(a)"
