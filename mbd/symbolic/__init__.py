"""mbd/symbolic — Formula utilities, clausification and refutation provers."""

from mbd.symbolic.logic import (
    apply_substitution,
    conjunction,
    contains_quantifier,
    disjunction,
    flatten_conjunction,
    free_variables,
    negate,
    substitute,
)
from mbd.symbolic.normalizer import CNFNormalizer, to_sequents
from mbd.symbolic.prover import DPLLProver, Prover, make_prover
from mbd.symbolic.solver import Z3Prover

__all__ = [
    "CNFNormalizer",
    "to_sequents",
    "Prover",
    "DPLLProver",
    "Z3Prover",
    "make_prover",
    "apply_substitution",
    "substitute",
    "free_variables",
    "contains_quantifier",
    "conjunction",
    "disjunction",
    "negate",
    "flatten_conjunction",
]
