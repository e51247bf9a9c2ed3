"""
mbd/diagnosis/conflicts.py
==========================
Conflict miner — reads component conflict sets out of refutations.

Each refutation is reduced to its closed formula and clausified
propositionally. A clause Γ ⊢ (empty succedent) states that the atoms
in Γ cannot all hold; when Γ contains ab(c), the normality assumption
¬ab(c) took part in the contradiction, so c is implicated.

Filtering, per clause:
    1. tautologies (Γ ∩ Δ ≠ ∅)           → discarded
    2. the empty sequent  ⊢               → discarded
    3. non-empty succedent                → discarded
    4. remaining antecedents              → scan for ab/1 atoms

Extraction is structural: predicate name == abnormality predicate,
exactly one argument, argument a ground term. Other atoms are
ignored, never reported as errors.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, List, Set

from mbd.core.types import ConflictSet, Formula, Predicate, Refutation, Sequent
from mbd.symbolic.logic import is_variable
from mbd.symbolic.normalizer import to_sequents

logger = logging.getLogger(__name__)


def is_conflict_clause(sequent: Sequent) -> bool:
    return not sequent.is_taut and not sequent.is_empty and not sequent.succedent


def conflict_clauses(formula: Formula) -> List[Sequent]:
    """Clauses of `formula` whose antecedents cannot simultaneously hold."""
    return [s for s in to_sequents(formula, propositional=True) if is_conflict_clause(s)]


def abnormal_components(antecedent: Iterable[Predicate], abnormal: str = "ab") -> Set[str]:
    found: Set[str] = set()
    for p in antecedent:
        if p.name != abnormal or len(p.args) != 1:
            continue
        (term,) = p.args
        if not is_variable(term):
            found.add(term)
    return found


def conflict_set(refutation: Refutation, abnormal: str = "ab") -> ConflictSet:
    """Components implicated by one refutation."""
    found: Set[str] = set()
    for clause in conflict_clauses(refutation.formula):
        found |= abnormal_components(clause.antecedent, abnormal)
    return frozenset(found)


def mine_conflicts(refutations: Iterable[Refutation], abnormal: str = "ab") -> List[ConflictSet]:
    """One conflict set per refutation, duplicates dropped, discovery order kept."""
    conflicts: List[ConflictSet] = []
    for refutation in refutations:
        found = conflict_set(refutation, abnormal)
        if found not in conflicts:
            conflicts.append(found)
    logger.debug("Mined %d distinct conflict set(s)", len(conflicts))
    return conflicts


def conflict_union(conflicts: Iterable[FrozenSet[str]]) -> ConflictSet:
    merged: Set[str] = set()
    for c in conflicts:
        merged |= c
    return frozenset(merged)
