"""
mbd/diagnosis/grounding.py
==========================
Grounds a system description over a finite component domain.

Quantified axioms are read under a closed-world, finite Herbrand
restriction: ∀?x φ(?x) means φ(c) for every c ∈ COMP, nothing more.

    SD   = [∀?x (and(?x) ∧ ¬ab(?x) → …), and(a1), and(a2)]
    COMP = [a1, a2]
    ──────────────────────────────────────────────────────
    [and(a1) ∧ ¬ab(a1) → …,  and(a2) ∧ ¬ab(a2) → …,  and(a1), and(a2)]

Only one shape of quantified axiom is supported: a top-level ∀ over
a single component-sorted variable with a quantifier-free body.
Everything else raises UnsupportedAxiomError instead of being
silently mis-instantiated.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from mbd.core.exceptions import UnsupportedAxiomError
from mbd.core.types import Formula, LogicConnective
from mbd.symbolic.logic import contains_quantifier, free_variables, substitute

logger = logging.getLogger(__name__)


def partition_axioms(sd: Sequence[Formula]) -> Tuple[List[Formula], List[Formula]]:
    """Split SD into (quantified, quantifier-free) axioms, order preserved."""
    quantified = [a for a in sd if contains_quantifier(a)]
    plain = [a for a in sd if not contains_quantifier(a)]
    return quantified, plain


def instantiate(axiom: Formula, term: str) -> Formula:
    """∀?x φ  ↦  φ[?x := term]"""
    return substitute(axiom.children[0], {axiom.variable: term})


def check_groundable(axiom: Formula, sort: str = "component") -> None:
    """Raise UnsupportedAxiomError unless `axiom` fits the grounding scheme."""
    if axiom.connective != LogicConnective.FORALL:
        raise UnsupportedAxiomError(
            f"Quantified axiom must be a top-level universal: {axiom}",
            axiom=axiom,
            context={"connective": axiom.connective.name if axiom.connective else None},
        )
    body = axiom.children[0]
    if contains_quantifier(body):
        raise UnsupportedAxiomError(
            f"Axiom quantifies more than one variable: {axiom}",
            axiom=axiom,
        )
    if axiom.sort != sort:
        raise UnsupportedAxiomError(
            f"Axiom quantifies over sort '{axiom.sort}', expected '{sort}': {axiom}",
            axiom=axiom,
            context={"sort": axiom.sort},
        )
    extra = free_variables(axiom)
    if extra:
        raise UnsupportedAxiomError(
            f"Axiom has free variable(s) {sorted(extra)}: {axiom}",
            axiom=axiom,
            context={"free_variables": sorted(extra)},
        )


def ground_system_description(
    sd: Sequence[Formula],
    components: Sequence[str],
    sort: str = "component",
) -> List[Formula]:
    """Instantiate every quantified axiom once per component.

    Returns the instances (axiom-major, component order) followed by
    the quantifier-free axioms unchanged.
    """
    quantified, plain = partition_axioms(sd)

    for axiom in plain:
        extra = free_variables(axiom)
        if extra:
            raise UnsupportedAxiomError(
                f"Open axiom with free variable(s) {sorted(extra)}: {axiom}",
                axiom=axiom,
                context={"free_variables": sorted(extra)},
            )

    instances: List[Formula] = []
    for axiom in quantified:
        check_groundable(axiom, sort)
        instances.extend(instantiate(axiom, c) for c in components)

    logger.debug(
        "Grounded %d quantified axiom(s) over %d component(s): %d instance(s), %d plain axiom(s)",
        len(quantified), len(components), len(instances), len(plain),
    )
    return instances + plain
