"""
mbd/core/exceptions.py
======================
Custom exception hierarchy for MBD-Core.

All exceptions carry structured context so callers can
programmatically handle different failure modes.

"No conflict" and "prover gave up" are NOT exceptions: they are
ordinary diagnostic outcomes carried by DiagnosisResult.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from mbd.core.types import Formula


class MBDError(Exception):
    """Base exception for all MBD-Core errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.context = context or {}


class UnsupportedAxiomError(MBDError):
    """Raised when a system-description axiom does not fit the
    single-variable, component-sorted grounding scheme.

    Aborts the whole diagnosis call: silently skipping or
    mis-instantiating the axiom would change the theory.
    """

    def __init__(self, message: str, axiom: "Formula", context: dict = None):
        super().__init__(message, context)
        self.axiom = axiom


class InvalidProblemError(MBDError):
    """Raised when (SD, COMP, OBS, HS) is structurally invalid,
    e.g. HS ⊄ COMP or duplicate component identifiers."""

    def __init__(self, message: str, errors: List[str]):
        super().__init__(message, context={"errors": list(errors)})
        self.errors = list(errors)


class ClausificationError(MBDError):
    """Raised when a formula cannot be put into propositional clausal form."""

    pass
