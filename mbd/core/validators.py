"""
mbd/core/validators.py
======================
Input validation for diagnosis problems.

Validates:
    - Predicate structure (name, args, variable conventions)
    - Component identifiers (ground, well-formed, unique)
    - Hypothesis set ⊆ component set
    - Observations are closed formulas

These validators run at the API boundary, not inside the pipeline.
validate_* functions return a list of error strings; assert_valid_*
raise InvalidProblemError carrying that list.
"""
from __future__ import annotations

import re
from collections import Counter
from typing import List, Sequence

from mbd.core.exceptions import InvalidProblemError
from mbd.core.types import Formula, LogicConnective, Predicate
from mbd.symbolic.logic import atoms, free_variables


# ─── REGEX PATTERNS ───────────────────────────────────────────────

VALID_NAME_RE  = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')
VARIABLE_RE    = re.compile(r'^\?[A-Za-z_][A-Za-z0-9_]*$')
GROUND_TERM_RE = re.compile(r'^[A-Za-z0-9_][A-Za-z0-9_.\-]*$')


# ─── PREDICATE VALIDATION ─────────────────────────────────────────

def validate_predicate(p: Predicate) -> List[str]:
    """Validate a single predicate. Returns list of error strings.

    Checks:
        1. Name is non-empty and matches ``[A-Za-z_][A-Za-z0-9_]*``
        2. Every arg is non-empty
        3. Variable args match ``?[A-Za-z_][A-Za-z0-9_]*``
        4. Ground args match ``[A-Za-z0-9_][A-Za-z0-9_.-]*``
    """
    errors: List[str] = []

    if not p.name:
        errors.append("Predicate name is empty")
    elif not VALID_NAME_RE.match(p.name):
        errors.append(
            f"Predicate name '{p.name}' invalid: must be [A-Za-z_][A-Za-z0-9_]*"
        )

    for i, arg in enumerate(p.args):
        if not arg:
            errors.append(f"Predicate '{p.name}' arg[{i}] is empty")
        elif arg.startswith("?"):
            if not VARIABLE_RE.match(arg):
                errors.append(
                    f"Predicate '{p.name}' arg[{i}] '{arg}' looks like variable "
                    "but has invalid format. Expected ?[A-Za-z_][A-Za-z0-9_]*"
                )
        elif not GROUND_TERM_RE.match(arg):
            errors.append(
                f"Predicate '{p.name}' arg[{i}] '{arg}' has invalid characters. "
                "Ground terms: [A-Za-z0-9_.-]+"
            )
    return errors


def validate_formula(f: Formula) -> List[str]:
    """Validate every atom in a formula, plus connective arity."""
    errors: List[str] = []
    for p in sorted(atoms(f), key=str):
        errors.extend(validate_predicate(p))

    stack = [f]
    while stack:
        node = stack.pop()
        if node.is_atom():
            continue
        arity = len(node.children)
        if node.connective in (LogicConnective.IMPLIES, LogicConnective.IFF) and arity != 2:
            errors.append(f"{node.connective.name} needs 2 operands, got {arity}")
        elif node.connective == LogicConnective.NOT and arity != 1:
            errors.append(f"NOT needs 1 operand, got {arity}")
        elif node.is_quantifier() and (arity != 1 or not node.variable):
            errors.append(f"{node.connective.name} needs a variable and one body")
        stack.extend(node.children)
    return errors


# ─── PROBLEM VALIDATION ───────────────────────────────────────────

def validate_components(components: Sequence[str]) -> List[str]:
    """Component identifiers must be unique, non-empty ground terms."""
    errors: List[str] = []
    for c in components:
        if not c:
            errors.append("Component identifier is empty")
        elif c.startswith("?"):
            errors.append(f"Component '{c}' looks like a variable")
        elif not GROUND_TERM_RE.match(c):
            errors.append(f"Component '{c}' has invalid characters")

    dupes = sorted(c for c, n in Counter(components).items() if n > 1)
    if dupes:
        errors.append(f"Duplicate component identifier(s): {dupes}")
    return errors


def validate_hypothesis(hypothesis: Sequence[str], components: Sequence[str]) -> List[str]:
    """HS must be a subset of COMP."""
    unknown = sorted(set(hypothesis) - set(components))
    if unknown:
        return [f"Hypothesis names unknown component(s): {unknown}"]
    return []


def validate_observations(observations: Sequence[Formula]) -> List[str]:
    """Observations must be well-formed, closed formulas."""
    errors: List[str] = []
    for obs in observations:
        errors.extend(validate_formula(obs))
        free = free_variables(obs)
        if free:
            errors.append(
                f"Observation '{obs}' has unbound variable(s) {sorted(free)}. "
                "Observations must be closed."
            )
    return errors


def validate_problem(
    sd: Sequence[Formula],
    components: Sequence[str],
    observations: Sequence[Formula],
    hypothesis: Sequence[str] = (),
) -> List[str]:
    errors: List[str] = []
    for axiom in sd:
        errors.extend(validate_formula(axiom))
    errors.extend(validate_components(components))
    errors.extend(validate_hypothesis(hypothesis, components))
    errors.extend(validate_observations(observations))
    return errors


def assert_valid_problem(
    sd: Sequence[Formula],
    components: Sequence[str],
    observations: Sequence[Formula],
    hypothesis: Sequence[str] = (),
) -> None:
    """Validate a diagnosis problem and raise InvalidProblemError on any violation."""
    errors = validate_problem(sd, components, observations, hypothesis)
    if errors:
        raise InvalidProblemError(
            f"Invalid diagnosis problem: {len(errors)} error(s): {errors[0]}",
            errors=errors,
        )
