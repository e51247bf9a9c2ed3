"""
mbd/diagnosis/theory.py
=======================
Assembles the single theory whose consistency is checked:

    Theory = ⋀ground(SD) ∧ ⋀{¬ab(c) : c ∈ COMP ∖ HS} ∧ ⋀OBS

Components in HS get no literal at all: neither normal nor abnormal
is asserted, so the prover may choose either.
"""

from __future__ import annotations

from typing import List, Sequence

from mbd.core.types import Formula
from mbd.symbolic.logic import conjunction


def normal_assumptions(
    components: Sequence[str],
    hypothesis: Sequence[str],
    abnormal: str = "ab",
) -> List[Formula]:
    """¬ab(c) for every component not hypothesised faulty, in COMP order."""
    exempt = set(hypothesis)
    return [Formula.NOT(Formula.atom(abnormal, c)) for c in components if c not in exempt]


def assemble_theory(
    grounded_sd: Sequence[Formula],
    components: Sequence[str],
    observations: Sequence[Formula],
    hypothesis: Sequence[str] = (),
    abnormal: str = "ab",
) -> Formula:
    normals = normal_assumptions(components, hypothesis, abnormal)
    return conjunction([*grounded_sd, *normals, *observations])
