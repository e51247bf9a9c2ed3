"""
tests/unit/test_conflicts.py
============================
Tests for mbd/diagnosis/conflicts.py: clause filtering and structural
ab/1 extraction from refutations.
"""

from mbd.core.types import Formula, Predicate, Refutation, Sequent
from mbd.diagnosis.conflicts import (
    abnormal_components,
    conflict_clauses,
    conflict_set,
    conflict_union,
    is_conflict_clause,
    mine_conflicts,
)

A = Formula.atom


def P(name, *args):
    return Predicate(name, tuple(args))


class TestClauseFilter:
    def test_negative_clause_is_conflict(self):
        assert is_conflict_clause(Sequent(frozenset({P("ab", "a1")})))

    def test_tautology_discarded(self):
        p = P("ab", "a1")
        assert not is_conflict_clause(Sequent(frozenset({p}), frozenset({p})))

    def test_empty_sequent_discarded(self):
        assert not is_conflict_clause(Sequent())

    def test_nonempty_succedent_discarded(self):
        assert not is_conflict_clause(Sequent(frozenset({P("p")}), frozenset({P("q")})))

    def test_conflict_clauses_of_formula(self):
        f = Formula.AND(
            ~A("ab", "a1"),
            A("in1", "a1"),
            Formula.bottom(),
            A("p") | ~A("p"),
        )
        assert conflict_clauses(f) == [Sequent(frozenset({P("ab", "a1")}))]


class TestAbnormalComponents:
    def test_extracts_ground_argument(self):
        assert abnormal_components({P("ab", "a1"), P("out", "a1")}) == {"a1"}

    def test_wrong_arity_ignored(self):
        assert abnormal_components({P("ab", "a1", "a2"), P("ab")}) == set()

    def test_variable_argument_ignored(self):
        assert abnormal_components({P("ab", "?x")}) == set()

    def test_name_match_is_exact(self):
        assert abnormal_components({P("xab", "a1"), P("abx", "a2")}) == set()

    def test_component_may_share_predicate_name(self):
        assert abnormal_components({P("ab", "ab")}) == {"ab"}

    def test_custom_predicate(self):
        assert abnormal_components({P("faulty", "a1"), P("ab", "a2")}, "faulty") == {"a1"}


class TestConflictSet:
    def test_normality_assumptions_in_core_are_reported(self):
        r = Refutation(premises=(
            Formula.IMPLIES(~A("ab", "a1"), A("out", "a1")),
            ~A("ab", "a1"),
            ~A("out", "a1"),
        ))
        assert conflict_set(r) == frozenset({"a1"})

    def test_positive_ab_occurrence_not_reported(self):
        r = Refutation(premises=(A("ab", "a1") | A("q"), ~A("q"), ~A("ab", "a1")))
        # ab(a1) ∨ q has a non-empty succedent; the unit ¬ab(a1) does not
        assert conflict_set(r) == frozenset({"a1"})
        r2 = Refutation(premises=(A("ab", "a1"), ~A("ab", "a1") | A("q"), ~A("q")))
        assert conflict_set(r2) == frozenset()

    def test_refutation_without_components(self):
        r = Refutation(premises=(A("p"), ~A("p")))
        assert conflict_set(r) == frozenset()


class TestMineConflicts:
    def test_one_set_per_refutation_in_order(self):
        r1 = Refutation(premises=(~A("ab", "a2"), A("x")))
        r2 = Refutation(premises=(~A("ab", "a1"), A("y")))
        assert mine_conflicts([r1, r2]) == [frozenset({"a2"}), frozenset({"a1"})]

    def test_duplicates_dropped(self):
        r1 = Refutation(premises=(~A("ab", "a1"), A("x")))
        r2 = Refutation(premises=(~A("ab", "a1"), A("y")))
        assert mine_conflicts([r1, r2]) == [frozenset({"a1"})]

    def test_union(self):
        assert conflict_union([frozenset({"a1"}), frozenset({"a2", "o1"})]) == {"a1", "a2", "o1"}
        assert conflict_union([]) == frozenset()
