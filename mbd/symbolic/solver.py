"""
mbd/symbolic/solver.py
======================
Z3 backend for the refutation prover.

Each premise is translated to a Z3 boolean term and asserted under
its own tracking label, so an UNSAT answer comes with an unsat core
over premises. The shared search in prover.py then shrinks that core
to a minimal one and enumerates the rest.

Translation (single uninterpreted sort U):
    p             ↦  Bool("p")
    p(t₁, …, tₙ)  ↦  Function("p", U, …, U, BoolSort())(t₁, …, tₙ)
    constant c    ↦  Const("c", U)
    ∀?x φ         ↦  ForAll([Const("?x", U)], φ)

Distinct constants are asserted pairwise different (unique names),
matching the ground reading of component identifiers.

A per-check timeout comes from ProverConfig.timeout_ms; Z3 answers
`unknown` when it expires, which surfaces as ProofStatus.UNKNOWN.

Reference: De Moura & Bjørner (2008), "Z3: An Efficient SMT Solver".
"""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

import z3

from mbd.core.registry import Registry
from mbd.core.types import Formula, LogicConnective, Predicate
from mbd.symbolic.logic import is_variable
from mbd.symbolic.prover import (
    PROVER_CATEGORY,
    CheckOutcome,
    CheckResult,
    Prover,
    open_premise,
)

logger = logging.getLogger(__name__)


class Z3Translator:
    """Translate Formula trees into Z3 terms, sharing declarations."""

    def __init__(self, sort_name: str = "U") -> None:
        self.sort = z3.DeclareSort(sort_name)
        self.constants: Dict[str, z3.ExprRef] = {}
        self._functions: Dict[Tuple[str, int], z3.FuncDeclRef] = {}

    def translate(self, f: Formula, bound: Dict[str, z3.ExprRef] = None) -> z3.BoolRef:
        bound = bound or {}
        if f.is_atom():
            return self._atom(f.predicate, bound)

        conn = f.connective
        if conn == LogicConnective.AND:
            if not f.children:
                return z3.BoolVal(True)
            return z3.And(*[self.translate(c, bound) for c in f.children])
        if conn == LogicConnective.OR:
            if not f.children:
                return z3.BoolVal(False)
            return z3.Or(*[self.translate(c, bound) for c in f.children])
        if conn == LogicConnective.NOT:
            return z3.Not(self.translate(f.children[0], bound))
        if conn == LogicConnective.IMPLIES:
            a, b = f.children
            return z3.Implies(self.translate(a, bound), self.translate(b, bound))
        if conn == LogicConnective.IFF:
            a, b = f.children
            return self.translate(a, bound) == self.translate(b, bound)

        var = z3.Const(f.variable, self.sort)
        body = self.translate(f.children[0], {**bound, f.variable: var})
        if conn == LogicConnective.FORALL:
            return z3.ForAll([var], body)
        return z3.Exists([var], body)

    def _atom(self, p: Predicate, bound: Dict[str, z3.ExprRef]) -> z3.BoolRef:
        if not p.args:
            return z3.Bool(p.name)
        key = (p.name, len(p.args))
        if key not in self._functions:
            domain = [self.sort] * len(p.args)
            self._functions[key] = z3.Function(p.name, *domain, z3.BoolSort())
        return self._functions[key](*[self._term(a, bound) for a in p.args])

    def _term(self, term: str, bound: Dict[str, z3.ExprRef]) -> z3.ExprRef:
        if term in bound:
            return bound[term]
        if is_variable(term):
            raise ValueError(f"Free variable '{term}' in premise; premises must be closed.")
        if term not in self.constants:
            self.constants[term] = z3.Const(term, self.sort)
        return self.constants[term]

    def unique_names(self) -> List[z3.BoolRef]:
        if len(self.constants) < 2:
            return []
        return [z3.Distinct(*self.constants.values())]


@Registry.decorator("z3", category=PROVER_CATEGORY)
class Z3Prover(Prover):
    """Z3-backed refutation prover.

    Usage:
        prover = Z3Prover(ProverConfig(timeout_ms=2000))
        attempt = prover.refute(goal)
    """

    name = "z3"

    def _check(self, premises: Sequence[Formula]) -> CheckResult:
        rejected = open_premise(premises, self.name)
        if rejected is not None:
            return rejected

        solver = z3.Solver()
        if self.config.timeout_ms > 0:
            solver.set("timeout", self.config.timeout_ms)

        translator = Z3Translator()
        labels: Dict[str, int] = {}
        for idx, premise in enumerate(premises):
            # '!' never appears in a predicate name, so labels cannot collide with atoms
            label = z3.Bool(f"premise!{idx}")
            labels[str(label)] = idx
            solver.assert_and_track(translator.translate(premise), label)

        # Unique-name axioms are background, not tracked
        for axiom in translator.unique_names():
            solver.add(axiom)

        result = solver.check()

        if result == z3.sat:
            return CheckResult(CheckOutcome.SAT)

        if result == z3.unsat:
            core = frozenset(labels[str(label)] for label in solver.unsat_core())
            logger.debug("Z3 UNSAT — core of %d/%d premise(s)", len(core), len(premises))
            return CheckResult(CheckOutcome.UNSAT, core=core)

        # z3.unknown: timeout or incomplete theory
        reason = solver.reason_unknown() or "unknown"
        logger.debug("Z3 UNKNOWN — %s", reason)
        return CheckResult(CheckOutcome.UNKNOWN, reason=f"z3: {reason}")
