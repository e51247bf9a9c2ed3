"""
mbd/symbolic/prover.py
======================
Refutation prover — proves a goal valid by showing its negation
unsatisfiable, and returns the certificates of that proof.

Mathematical basis:
    goal G is valid  ⟺  ¬G is unsatisfiable

    ¬G is flattened into its top-level conjuncts φ₁ … φₙ (the
    premises). A refutation certificate is a subset-minimal
    unsatisfiable set of premises (a MUS): removing any single
    premise makes the rest satisfiable.

    Cores are shrunk by deletion: drop one premise at a time and keep
    the drop whenever the remainder is still UNSAT.

    Further MUSes are enumerated with Reiter's hitting-set tree:
    each tree node removes a set of premises; a node is expanded
    by removing, one at a time, every premise of a MUS disjoint
    from its path. A node whose remaining premises are SAT closes.
    Every MUS is discovered at some node of the complete tree.

    When the caller names assumptions, only those premises are
    tracked: the rest form a background that every check asserts, and
    a certificate is the background plus a subset-minimal set of
    assumptions. For diagnosis the assumptions are the ¬ab(c)
    literals, so each certificate is a minimal conflict.

    Reference: Reiter (1987), "A Theory of Diagnosis from First Principles".

Backends only implement `_check(premises)`; enumeration, minimisation
and budgeting are shared here.

    DPLLProver  — pure Python, ground premises only (this module)
    Z3Prover    — Z3 SMT solver, full first-order input (solver.py)
"""

from __future__ import annotations

import functools
import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Sequence

from mbd.core.config import ProverConfig
from mbd.core.registry import Registry
from mbd.core.types import (
    Formula,
    Literal,
    Predicate,
    ProofAttempt,
    ProofStatus,
    Refutation,
)
from mbd.symbolic.logic import (
    contains_quantifier,
    flatten_conjunction,
    free_variables,
    negate,
)
from mbd.symbolic.normalizer import CNFNormalizer

logger = logging.getLogger(__name__)

PROVER_CATEGORY = "prover"


class CheckOutcome(Enum):
    SAT     = "sat"
    UNSAT   = "unsat"
    UNKNOWN = "unknown"


@dataclass
class CheckResult:
    """Outcome of one satisfiability check over a premise list.

    core: positions (into the checked list) of an unsatisfiable subset,
          or None when the backend cannot extract one.
    """
    outcome: CheckOutcome
    core:    Optional[FrozenSet[int]] = None
    reason:  str = ""


def open_premise(premises: Sequence[Formula], backend: str) -> Optional[CheckResult]:
    """UNKNOWN for the first premise with a free variable, else None.

    Premises must be closed; an open one has no fixed truth value.
    """
    for premise in premises:
        free = free_variables(premise)
        if free:
            return CheckResult(
                CheckOutcome.UNKNOWN,
                reason=f"open premise not supported by {backend} backend: {premise} "
                       f"(free: {sorted(free)})",
            )
    return None


class Prover(ABC):
    """Base class for refutation provers.

    Usage:
        prover = make_prover(ProverConfig(backend="z3", timeout_ms=5000))
        attempt = prover.refute(Formula.NOT(theory))
        if attempt.proved:
            for refutation in attempt.refutations:
                print(refutation.formula)
    """

    name = "abstract"

    def __init__(self, config: Optional[ProverConfig] = None):
        self.config = config or ProverConfig()

    def refute(
        self,
        goal: Formula,
        assumptions: Optional[Sequence[Formula]] = None,
    ) -> ProofAttempt:
        """Try to prove `goal` by refuting ¬goal.

        assumptions: the conjuncts of ¬goal that cores are drawn from.
            Every other conjunct is background, always asserted and
            never minimised. None tracks every conjunct.

        Returns a ProofAttempt; never raises on SAT or on resource
        exhaustion, both are ordinary outcomes.
        """
        premises = flatten_conjunction(negate(goal))
        if assumptions is None:
            tracked = frozenset(range(len(premises)))
        else:
            wanted = set(assumptions)
            tracked = frozenset(i for i, p in enumerate(premises) if p in wanted)
        logger.debug(
            "%s: refuting %d premise(s), %d tracked",
            self.name, len(premises), len(tracked),
        )
        return _RefutationSearch(self, premises, tracked).run()

    @abstractmethod
    def _check(self, premises: Sequence[Formula]) -> CheckResult:
        """Decide satisfiability of ⋀premises."""


# ─────────────────────────────────────────────
#  MUS SEARCH
# ─────────────────────────────────────────────

class _RefutationSearch:
    """Per-call state: premise list, check budget, discovered cores.

    Cores and tree paths are sets of tracked premise indices; the
    background premises are part of every check.
    """

    def __init__(self, prover: Prover, premises: List[Formula], tracked: FrozenSet[int]):
        self.prover = prover
        self.premises = premises
        self.universe = tracked
        self.background = frozenset(range(len(premises))) - tracked
        self.checks = 0
        self.complete = True

    def run(self) -> ProofAttempt:
        root = self._check(self.universe)
        if root.outcome == CheckOutcome.SAT:
            return ProofAttempt(status=ProofStatus.NOT_PROVED, checks=self.checks)
        if root.outcome == CheckOutcome.UNKNOWN:
            logger.warning("%s returned UNKNOWN: %s", self.prover.name, root.reason)
            return ProofAttempt(
                status=ProofStatus.UNKNOWN,
                reason=root.reason,
                checks=self.checks,
                complete=False,
            )

        cores = [self._minimize(root.core)]
        if not self._enumerate(cores):
            self.complete = False
            logger.warning(
                "%s: conflict enumeration stopped after %d core(s), %d check(s)",
                self.prover.name, len(cores), self.checks,
            )

        refutations = [
            Refutation(premises=tuple(
                self.premises[i] for i in sorted(self.background | core)
            ))
            for core in cores
        ]
        logger.debug(
            "%s: %d refutation(s) in %d check(s)",
            self.prover.name, len(refutations), self.checks,
        )
        return ProofAttempt(
            status=ProofStatus.PROVED,
            refutations=refutations,
            checks=self.checks,
            complete=self.complete,
        )

    def _check(self, indices: FrozenSet[int]) -> CheckResult:
        """Check the background plus a subset of tracked premises.

        Core positions are mapped back to premise indices and cut down
        to the tracked ones.
        """
        if self.checks >= self.prover.config.max_checks:
            return CheckResult(CheckOutcome.UNKNOWN, reason="check budget exhausted")
        self.checks += 1

        ordered = sorted(self.background | indices)
        result = self.prover._check([self.premises[i] for i in ordered])
        if result.outcome != CheckOutcome.UNSAT:
            return result
        if result.core is None:
            core = frozenset(indices)
        else:
            core = frozenset(ordered[k] for k in result.core) & indices
        return CheckResult(CheckOutcome.UNSAT, core=core)

    def _minimize(self, core: FrozenSet[int]) -> FrozenSet[int]:
        """Deletion-based shrinking to a subset-minimal core.

        A premise that was necessary in a core stays necessary in every
        unsatisfiable subset of that core, so the scan never revisits
        positions it has already passed.
        """
        members = sorted(core)
        i = 0
        while i < len(members):
            dropped = members[i]
            trial = frozenset(members[:i] + members[i + 1:])
            result = self._check(trial)
            if result.outcome == CheckOutcome.UNSAT:
                members = sorted(result.core)
                i = sum(1 for m in members if m < dropped)
            else:
                if result.outcome == CheckOutcome.UNKNOWN:
                    self.complete = False
                i += 1
        return frozenset(members)

    def _enumerate(self, cores: List[FrozenSet[int]]) -> bool:
        """Breadth-first hitting-set tree. Returns False if a budget cut it short.

        The refutation budget only bites when a node turns out to hold
        one core more than the budget allows.
        """
        queue = deque([frozenset()])
        seen = {frozenset()}
        sat_paths: List[FrozenSet[int]] = []

        while queue:
            path = queue.popleft()
            if any(s <= path for s in sat_paths):
                continue

            core = next((c for c in cores if not (c & path)), None)
            if core is None:
                result = self._check(self.universe - path)
                if result.outcome == CheckOutcome.SAT:
                    sat_paths.append(path)
                    continue
                if result.outcome == CheckOutcome.UNKNOWN:
                    return False
                if len(cores) >= self.prover.config.max_refutations:
                    return False
                core = self._minimize(result.core)
                cores.append(core)

            for idx in sorted(core):
                child = path | {idx}
                if child not in seen:
                    seen.add(child)
                    queue.append(child)
        return True


# ─────────────────────────────────────────────
#  PURE-PYTHON BACKEND
# ─────────────────────────────────────────────

@functools.lru_cache(maxsize=4096)
def _premise_clauses(premise: Formula) -> List[FrozenSet[Literal]]:
    return CNFNormalizer().to_cnf(premise)


class _BudgetExhausted(Exception):
    pass


class _DPLLSearch:
    """DPLL with unit propagation and a decision budget.

    Complete for ground clause sets: returns True (SAT) or False
    (UNSAT), or raises _BudgetExhausted once max_decisions branches
    have been opened.
    """

    def __init__(self, clauses: List[FrozenSet[Literal]], max_decisions: int):
        self.clauses = clauses
        self.max_decisions = max_decisions
        self.decisions = 0

    def solve(self) -> bool:
        return self._dpll({})

    def _dpll(self, assignment: Dict[Predicate, bool]) -> bool:
        assignment = self._propagate(dict(assignment))
        if assignment is None:
            return False

        branch = self._pick_variable(assignment)
        if branch is None:
            return True

        self.decisions += 1
        if self.decisions > self.max_decisions:
            raise _BudgetExhausted()
        return (
            self._dpll({**assignment, branch: True})
            or self._dpll({**assignment, branch: False})
        )

    def _propagate(self, assignment: Dict[Predicate, bool]) -> Optional[Dict[Predicate, bool]]:
        """Unit propagation to fixpoint. None on a falsified clause."""
        changed = True
        while changed:
            changed = False
            for clause in self.clauses:
                unassigned: List[Literal] = []
                satisfied = False
                for lit in clause:
                    value = assignment.get(lit.predicate)
                    if value is None:
                        unassigned.append(lit)
                    elif value == lit.positive:
                        satisfied = True
                        break
                if satisfied:
                    continue
                if not unassigned:
                    return None
                if len(unassigned) == 1:
                    unit = unassigned[0]
                    assignment[unit.predicate] = unit.positive
                    changed = True
        return assignment

    def _pick_variable(self, assignment: Dict[Predicate, bool]) -> Optional[Predicate]:
        for clause in self.clauses:
            for lit in clause:
                if lit.predicate not in assignment:
                    return lit.predicate
        return None


@Registry.decorator("dpll", category=PROVER_CATEGORY)
class DPLLProver(Prover):
    """Pure-Python propositional backend.

    Treats every ground atom as an independent proposition (Herbrand
    semantics). Premises that still contain a quantifier are outside
    its reach and yield UNKNOWN rather than a wrong answer, as do
    premises with free variables.
    """

    name = "dpll"

    def _check(self, premises: Sequence[Formula]) -> CheckResult:
        rejected = open_premise(premises, self.name)
        if rejected is not None:
            return rejected

        clauses: List[FrozenSet[Literal]] = []
        for premise in premises:
            if contains_quantifier(premise):
                return CheckResult(
                    CheckOutcome.UNKNOWN,
                    reason=f"quantified premise not supported by dpll backend: {premise}",
                )
            clauses.extend(_premise_clauses(premise))

        search = _DPLLSearch(clauses, self.config.max_decisions)
        try:
            satisfiable = search.solve()
        except _BudgetExhausted:
            return CheckResult(
                CheckOutcome.UNKNOWN,
                reason=f"decision budget of {self.config.max_decisions} exhausted",
            )
        return CheckResult(CheckOutcome.SAT if satisfiable else CheckOutcome.UNSAT)


def make_prover(config: Optional[ProverConfig] = None) -> Prover:
    """Instantiate the backend named by config.backend."""
    import mbd.symbolic.solver  # noqa: F401  (registers the z3 backend)

    config = config or ProverConfig()
    backend = Registry.get(config.backend, category=PROVER_CATEGORY)
    return backend(config)
