"""
mbd/symbolic/logic.py
=====================
First-order formula primitives: substitution, variable analysis,
n-ary folding and conjunct flattening.

Variable convention: strings starting with '?' are variables
e.g. "?x", "?gate" — component identifiers have no leading '?'.

Key operations:
  1. substitute(f, θ)          → f with free occurrences of θ's keys replaced
  2. free_variables(f)         → variables not bound by an enclosing quantifier
  3. contains_quantifier(f)    → True if ∀/∃ occurs anywhere in f
  4. conjunction(fs)           → ⋀fs, ⊤ when fs is empty
  5. flatten_conjunction(f)    → list of top-level conjuncts of f
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Set

from mbd.core.types import Formula, LogicConnective, Predicate

logger = logging.getLogger(__name__)


Substitution = Dict[str, str]   # variable → term


def is_variable(term: str) -> bool:
    return term.startswith("?")


def apply_substitution(predicate: Predicate, theta: Substitution) -> Predicate:
    """Apply substitution θ to a predicate, replacing variables with terms."""
    new_args = tuple(theta.get(arg, arg) for arg in predicate.args)
    return Predicate(name=predicate.name, args=new_args)


def substitute(formula: Formula, theta: Substitution) -> Formula:
    """Replace free occurrences of θ's variables throughout a formula.

    A quantifier that re-binds one of θ's variables shadows it in
    its body, so inner bound occurrences are left untouched.
    """
    if not theta:
        return formula
    if formula.is_atom():
        return Formula.of(apply_substitution(formula.predicate, theta))
    if formula.is_quantifier() and formula.variable in theta:
        theta = {k: v for k, v in theta.items() if k != formula.variable}
    children = tuple(substitute(c, theta) for c in formula.children)
    return Formula(
        connective=formula.connective,
        children=children,
        variable=formula.variable,
        sort=formula.sort,
    )


def free_variables(formula: Formula) -> Set[str]:
    if formula.is_atom():
        return {a for a in formula.predicate.args if is_variable(a)}
    found: Set[str] = set()
    for child in formula.children:
        found |= free_variables(child)
    if formula.is_quantifier():
        found.discard(formula.variable)
    return found


def is_closed(formula: Formula) -> bool:
    return not free_variables(formula)


def contains_quantifier(formula: Formula) -> bool:
    if formula.is_atom():
        return False
    if formula.is_quantifier():
        return True
    return any(contains_quantifier(c) for c in formula.children)


def atoms(formula: Formula) -> Set[Predicate]:
    """All predicates occurring in a formula."""
    if formula.is_atom():
        return {formula.predicate}
    found: Set[Predicate] = set()
    for child in formula.children:
        found |= atoms(child)
    return found


# ─────────────────────────────────────────────
#  N-ARY FOLDING
# ─────────────────────────────────────────────

def conjunction(formulas: Iterable[Formula]) -> Formula:
    """⋀formulas. The empty conjunction is ⊤."""
    return Formula.AND(*formulas)


def disjunction(formulas: Iterable[Formula]) -> Formula:
    """⋁formulas. The empty disjunction is ⊥."""
    return Formula.OR(*formulas)


def negate(formula: Formula) -> Formula:
    """¬f, collapsing a double negation instead of stacking it."""
    if formula.connective == LogicConnective.NOT:
        return formula.children[0]
    return Formula.NOT(formula)


def flatten_conjunction(formula: Formula) -> List[Formula]:
    """Split nested conjunctions into their leaves.

        (A ∧ (B ∧ C)) ∧ ⊤  →  [A, B, C]

    Duplicate conjuncts are kept once, first occurrence wins.
    """
    out: List[Formula] = []
    seen: Set[Formula] = set()
    stack = [formula]
    while stack:
        f = stack.pop()
        if f.connective == LogicConnective.AND:
            stack.extend(reversed(f.children))
            continue
        if f not in seen:
            seen.add(f)
            out.append(f)
    return out
