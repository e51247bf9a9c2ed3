"""
tests/unit/test_solver.py
=========================
Tests for mbd/symbolic/solver.py: Formula → Z3 translation and the
Z3-backed refutation prover (real Z3 calls, plus a patched UNKNOWN).
"""

from unittest.mock import patch

import pytest
import z3

from mbd.core.config import ProverConfig
from mbd.core.types import Formula, ProofStatus
from mbd.symbolic.prover import CheckOutcome
from mbd.symbolic.solver import Z3Prover, Z3Translator

A = Formula.atom


# ═══════════════════════════════════════════════════════════════════
#  Translator
# ═══════════════════════════════════════════════════════════════════


class TestZ3Translator:
    def test_propositional_atom_is_bool(self):
        t = Z3Translator()
        assert z3.is_bool(t.translate(A("p")))
        assert not t.constants

    def test_function_declarations_shared(self):
        t = Z3Translator()
        t.translate(A("ab", "a1"))
        t.translate(A("ab", "a2"))
        assert set(t.constants) == {"a1", "a2"}
        assert len(t._functions) == 1

    def test_identity_elements(self):
        t = Z3Translator()
        assert z3.is_true(t.translate(Formula.top()))
        assert z3.is_false(t.translate(Formula.bottom()))

    def test_free_variable_rejected(self):
        with pytest.raises(ValueError, match=r"\?x"):
            Z3Translator().translate(A("p", "?x"))

    def test_bound_variable_accepted(self):
        term = Z3Translator().translate(Formula.FORALL("?x", A("p", "?x")))
        assert z3.is_quantifier(term)
        assert term.is_forall()

    def test_exists(self):
        term = Z3Translator().translate(Formula.EXISTS("?x", A("p", "?x")))
        assert z3.is_quantifier(term)
        assert term.is_exists()

    def test_unique_names(self):
        t = Z3Translator()
        t.translate(A("ab", "a1"))
        assert t.unique_names() == []
        t.translate(A("ab", "a2"))
        assert len(t.unique_names()) == 1


# ═══════════════════════════════════════════════════════════════════
#  Prover
# ═══════════════════════════════════════════════════════════════════


class TestZ3Prover:
    def test_contradiction_is_refuted(self, z3_prover, contradiction):
        attempt = z3_prover.refute(Formula.NOT(contradiction))
        assert attempt.status == ProofStatus.PROVED
        assert set(attempt.certificate.premises) == {A("p"), ~A("p")}

    def test_satisfiable_negation_not_proved(self, z3_prover):
        attempt = z3_prover.refute(A("p", "a1") | A("q", "a1"))
        assert attempt.status == ProofStatus.NOT_PROVED

    def test_quantified_premises(self, z3_prover):
        # ∀x p(x) ∧ ¬p(c) is unsatisfiable
        attempt = z3_prover.refute(
            Formula.NOT(Formula.FORALL("?x", A("p", "?x")) & ~A("p", "c"))
        )
        assert attempt.proved
        assert len(attempt.certificate) == 2

    def test_core_excludes_irrelevant_premises(self, z3_prover):
        attempt = z3_prover.refute(
            Formula.NOT(Formula.AND(A("q"), A("p", "a1"), A("r"), ~A("p", "a1")))
        )
        assert attempt.complete
        assert [set(r.premises) for r in attempt.refutations] == [
            {A("p", "a1"), ~A("p", "a1")}
        ]

    def test_multiple_cores(self, z3_prover):
        attempt = z3_prover.refute(
            Formula.NOT(Formula.AND(A("p"), ~A("p"), A("q"), ~A("q")))
        )
        assert {frozenset(r.premises) for r in attempt.refutations} == {
            frozenset({A("p"), ~A("p")}),
            frozenset({A("q"), ~A("q")}),
        }

    def test_check_reports_core_positions(self, z3_prover):
        result = z3_prover._check([A("q"), A("p"), ~A("p")])
        assert result.outcome == CheckOutcome.UNSAT
        assert result.core >= frozenset({1, 2})

    def test_unknown_maps_to_inconclusive_attempt(self, z3_prover, contradiction):
        with patch.object(z3.Solver, "check", return_value=z3.unknown), \
                patch.object(z3.Solver, "reason_unknown", return_value="timeout"):
            attempt = z3_prover.refute(Formula.NOT(contradiction))
        assert attempt.status == ProofStatus.UNKNOWN
        assert attempt.reason == "z3: timeout"
        assert attempt.complete is False

    def test_zero_timeout_means_no_limit(self, contradiction):
        prover = Z3Prover(ProverConfig(timeout_ms=0))
        assert prover.refute(Formula.NOT(contradiction)).proved
