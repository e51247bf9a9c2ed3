"""
mbd/diagnosis/engine.py
=======================
DiagnosisEngine: the single entry point of MBD-Core.

Pipeline (one synchronous call, no state kept between calls):

    Start ─▸ Grounded ─▸ Assembled ─▸ Refuted ──▸ Mined ─▸ Done
                                  ├─▸ Consistent ─────────▸ Done
                                  └─▸ Inconclusive ───────▸ Done

    1. ground SD over COMP                       (grounding.py)
    2. Theory = SD' ∧ ¬ab(COMP∖HS) ∧ OBS          (theory.py)
    3. refute ¬Theory over the ¬ab(c) literals   (symbolic/prover.py)
    4. mine ab/1 atoms from conflict clauses     (conflicts.py)

Compatibility surface:
    tp(sd, comp, obs, hs)   → Optional[FrozenSet[str]]
    tpf(problem, hs)        → Optional[FrozenSet[str]]

`tp` returns None both when the theory is consistent and when the
prover gave up; use DiagnosisEngine.diagnose() to tell them apart.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from mbd.core.config import MBDConfig
from mbd.core.types import (
    ConflictSet,
    DiagnosisResult,
    DiagnosisStatus,
    Formula,
    ProofStatus,
)
from mbd.core.validators import assert_valid_problem
from mbd.diagnosis.conflicts import mine_conflicts
from mbd.diagnosis.grounding import ground_system_description
from mbd.diagnosis.theory import assemble_theory, normal_assumptions
from mbd.symbolic.prover import Prover, make_prover

logger = logging.getLogger(__name__)


Problem = Tuple[List[Formula], List[str], List[Formula]]
ProblemSupplier = Callable[[], Problem]


class DiagnosisEngine:
    """Consistency-based diagnosis on top of a refutation prover.

    Usage:
        engine = DiagnosisEngine()
        result = engine.diagnose(sd, comp, obs, hs=["a1"])
        if result.has_conflict:
            print(result.conflicts)     # minimal conflicts, one set each
            print(result.components)    # their union
    """

    def __init__(
        self,
        prover: Optional[Prover] = None,
        config: Optional[MBDConfig] = None,
    ):
        self.config = config or MBDConfig()
        self.prover = prover or make_prover(self.config.prover)

    def diagnose(
        self,
        sd: Sequence[Formula],
        components: Sequence[str],
        observations: Sequence[Formula],
        hypothesis: Sequence[str] = (),
    ) -> DiagnosisResult:
        """Compute the conflict sets of (SD, COMP, OBS) under hypothesis HS.

        Raises:
            InvalidProblemError:   HS ⊄ COMP, duplicate components, open observations.
            UnsupportedAxiomError: an SD axiom cannot be grounded over COMP.
        """
        cfg = self.config.diagnosis
        if cfg.validate_inputs:
            assert_valid_problem(sd, components, observations, hypothesis)

        # ── Grounded ──────────────────────────────────────────────
        grounded = ground_system_description(sd, components, sort=cfg.component_sort)

        # ── Assembled ─────────────────────────────────────────────
        theory = assemble_theory(
            grounded, components, observations, hypothesis, cfg.abnormal_predicate
        )

        # ── Refuted / Consistent / Inconclusive ───────────────────
        # SD and OBS are background; cores are drawn from the ¬ab(c) literals only
        assumptions = normal_assumptions(components, hypothesis, cfg.abnormal_predicate)
        attempt = self.prover.refute(Formula.NOT(theory), assumptions=assumptions)

        if attempt.status == ProofStatus.NOT_PROVED:
            logger.info("No conflict: theory consistent under HS=%s", sorted(hypothesis))
            return DiagnosisResult(status=DiagnosisStatus.CONSISTENT, checks=attempt.checks)

        if attempt.status == ProofStatus.UNKNOWN:
            logger.warning("Diagnosis inconclusive: %s", attempt.reason)
            return DiagnosisResult(
                status=DiagnosisStatus.INCONCLUSIVE,
                reason=attempt.reason,
                checks=attempt.checks,
                complete=False,
            )

        # ── Mined ─────────────────────────────────────────────────
        conflicts = self._restrict(
            mine_conflicts(attempt.refutations, cfg.abnormal_predicate),
            components,
        )
        result = DiagnosisResult(
            status=DiagnosisStatus.CONFLICT,
            conflicts=conflicts,
            checks=attempt.checks,
            complete=attempt.complete,
        )
        logger.info(result.summary())
        return result

    def diagnose_problem(
        self,
        problem: ProblemSupplier,
        hypothesis: Sequence[str] = (),
    ) -> DiagnosisResult:
        sd, components, observations = problem()
        return self.diagnose(sd, components, observations, hypothesis)

    @staticmethod
    def _restrict(conflicts: List[ConflictSet], components: Sequence[str]) -> List[ConflictSet]:
        """Drop identifiers outside COMP, e.g. from an ab/1 atom an observation mentions."""
        domain = set(components)
        restricted: List[ConflictSet] = []
        for conflict in conflicts:
            outside = conflict - domain
            if outside:
                logger.debug("Ignoring non-component ab/1 argument(s): %s", sorted(outside))
            kept = conflict & domain
            if kept not in restricted:
                restricted.append(kept)
        return restricted


# ─────────────────────────────────────────────
#  COMPATIBILITY API
# ─────────────────────────────────────────────

def tp(
    sd: Sequence[Formula],
    components: Sequence[str],
    observations: Sequence[Formula],
    hypothesis: Sequence[str] = (),
    engine: Optional[DiagnosisEngine] = None,
) -> Optional[ConflictSet]:
    """Components implicated by some minimal conflict, or None if no
    refutation was found."""
    engine = engine or DiagnosisEngine()
    return engine.diagnose(sd, components, observations, hypothesis).as_optional()


def tpf(
    problem: ProblemSupplier,
    hypothesis: Sequence[str] = (),
    engine: Optional[DiagnosisEngine] = None,
) -> Optional[ConflictSet]:
    """tp() for a zero-argument problem supplier."""
    sd, components, observations = problem()
    return tp(sd, components, observations, hypothesis, engine=engine)
