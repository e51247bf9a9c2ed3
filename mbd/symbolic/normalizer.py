"""
mbd/symbolic/normalizer.py
==========================
CNF (Conjunctive Normal Form) clausifier for ground formulas.

The conflict miner reads refutation certificates clause by clause,
so every certificate formula is first brought into CNF and each
clause is presented as a sequent Γ ⊢ Δ.

Conversion steps:
    1. Eliminate biconditionals (A ↔ B → (A→B) ∧ (B→A))
    2. Eliminate implications (A → B → ¬A ∨ B)
    3. Push negations inward (De Morgan: ¬(A∧B) → ¬A∨¬B)
    4. Distribute OR over AND: A ∨ (B ∧ C) → (A∨B) ∧ (A∨C)
    5. Flatten to clauses, then split each clause by polarity:
           ¬γ₁ ∨ … ∨ ¬γₙ ∨ δ₁ ∨ … ∨ δₘ   ↦   γ₁, …, γₙ ⊢ δ₁, …, δₘ

Identity elements survive the transformation structurally:
⊤ contributes no clause, ⊥ contributes the empty clause (empty sequent).

Only the propositional transformation is implemented: quantifiers
must have been eliminated (by grounding) before clausification.
"""
from __future__ import annotations

import logging
from typing import FrozenSet, List

from mbd.core.exceptions import ClausificationError
from mbd.core.types import Formula, Literal, LogicConnective, Sequent
from mbd.symbolic.logic import contains_quantifier

logger = logging.getLogger(__name__)


Clause = FrozenSet[Literal]


class CNFNormalizer:
    """Convert ground formulas to Conjunctive Normal Form.

    Usage:
        norm = CNFNormalizer()

        # and(a1) ∧ ¬ab(a1) → (in1(a1) ∧ in2(a1) ↔ out(a1))
        clauses = norm.to_cnf(formula)
        # Returns list of frozenset[Literal], one per clause
    """

    def to_cnf(self, formula: Formula) -> List[Clause]:
        """Convert a ground Formula to CNF clauses.

        Each clause is a frozenset of Literals (interpreted as disjunction).
        The full formula is the conjunction of the clauses.
        """
        if contains_quantifier(formula):
            raise ClausificationError(
                f"Cannot clausify quantified formula propositionally: {formula}",
                context={"formula": str(formula)},
            )
        # Step 1: Eliminate biconditionals
        f = self._eliminate_iff(formula)
        # Step 2: Eliminate implications
        f = self._eliminate_implies(f)
        # Step 3: Push negations inward (De Morgan)
        f = self._push_negations(f)
        # Step 4: Distribute OR over AND
        f = self._distribute(f)
        # Step 5: Flatten to clauses
        return self._flatten_to_clauses(f)

    def to_sequents(self, formula: Formula) -> List[Sequent]:
        return [Sequent.from_literals(c) for c in self.to_cnf(formula)]

    # ── Step 1: Eliminate IFF ────────────────────────────────────────

    def _eliminate_iff(self, f: Formula) -> Formula:
        """A ↔ B → (A → B) ∧ (B → A)"""
        if f.is_atom():
            return f
        children = [self._eliminate_iff(c) for c in f.children]
        if f.connective == LogicConnective.IFF:
            a, b = children
            return Formula.AND(Formula.IMPLIES(a, b), Formula.IMPLIES(b, a))
        return Formula(connective=f.connective, children=tuple(children))

    # ── Step 2: Eliminate IMPLIES ────────────────────────────────────

    def _eliminate_implies(self, f: Formula) -> Formula:
        """A → B → ¬A ∨ B"""
        if f.is_atom():
            return f
        children = [self._eliminate_implies(c) for c in f.children]
        if f.connective == LogicConnective.IMPLIES:
            a, b = children
            return Formula.OR(Formula.NOT(a), b)
        return Formula(connective=f.connective, children=tuple(children))

    # ── Step 3: Push negations inward ────────────────────────────────

    def _push_negations(self, f: Formula, negated: bool = False) -> Formula:
        """Apply De Morgan's laws so that NOT only wraps atoms."""
        if f.is_atom():
            return Formula.NOT(f) if negated else f

        if f.connective == LogicConnective.NOT:
            return self._push_negations(f.children[0], not negated)

        conn = f.connective
        if negated:
            conn = LogicConnective.OR if conn == LogicConnective.AND else LogicConnective.AND
        return Formula(
            connective=conn,
            children=tuple(self._push_negations(c, negated) for c in f.children),
        )

    # ── Step 4: Distribute OR over AND ───────────────────────────────

    def _distribute(self, f: Formula) -> Formula:
        if self._is_literal(f):
            return f
        children = [self._distribute(c) for c in f.children]
        if f.connective == LogicConnective.AND:
            return Formula.AND(*children)
        if not children:
            return f    # ⊥

        result = children[0]
        for c in children[1:]:
            result = self._distribute_or_over_and(result, c)
        return result

    def _distribute_or_over_and(self, a: Formula, b: Formula) -> Formula:
        """(A ∨ (B ∧ C)) → (A ∨ B) ∧ (A ∨ C)"""
        if b.connective == LogicConnective.AND:
            return Formula.AND(*[self._distribute_or_over_and(a, bc) for bc in b.children])
        if a.connective == LogicConnective.AND:
            return Formula.AND(*[self._distribute_or_over_and(ac, b) for ac in a.children])
        return Formula.OR(a, b)

    # ── Step 5: Flatten to clause list ───────────────────────────────

    def _flatten_to_clauses(self, f: Formula) -> List[Clause]:
        if f.connective == LogicConnective.AND:
            clauses: List[Clause] = []
            for child in f.children:
                clauses.extend(self._flatten_to_clauses(child))
            return clauses
        return [frozenset(self._collect_literals(f))]

    def _collect_literals(self, f: Formula) -> List[Literal]:
        if f.is_atom():
            return [Literal(f.predicate, True)]
        if f.connective == LogicConnective.NOT:
            return [Literal(f.children[0].predicate, False)]
        literals: List[Literal] = []
        for child in f.children:
            literals.extend(self._collect_literals(child))
        return literals

    @staticmethod
    def _is_literal(f: Formula) -> bool:
        return f.is_atom() or (
            f.connective == LogicConnective.NOT and f.children[0].is_atom()
        )


def to_sequents(formula: Formula, propositional: bool = True) -> List[Sequent]:
    """Clausal form of a closed formula as a list of sequents.

    propositional=False is accepted for interface compatibility but
    there is no first-order mode: a formula that still contains a
    quantifier raises ClausificationError either way.
    """
    if not propositional:
        logger.debug("First-order clausification requested; using propositional mode.")
    return CNFNormalizer().to_sequents(formula)
