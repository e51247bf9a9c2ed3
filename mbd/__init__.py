"""
mbd/__init__.py — Public API exports
"""

from mbd.core.config import DEFAULT_CONFIG, DiagnosisConfig, MBDConfig, ProverConfig
from mbd.core.exceptions import (
    ClausificationError,
    InvalidProblemError,
    MBDError,
    UnsupportedAxiomError,
)
from mbd.core.registry import Registry
from mbd.core.types import (
    ConflictSet,
    DiagnosisResult,
    DiagnosisStatus,
    Formula,
    Literal,
    LogicConnective,
    Predicate,
    ProofAttempt,
    ProofStatus,
    Refutation,
    Sequent,
)
from mbd.diagnosis.engine import DiagnosisEngine, tp, tpf
from mbd.diagnosis.report import format_diagnosis_report
from mbd.symbolic.prover import DPLLProver, Prover, make_prover
from mbd.symbolic.solver import Z3Prover
from mbd.version import __version__

__all__ = [
    "tp",
    "tpf",
    "DiagnosisEngine",
    "DiagnosisResult",
    "DiagnosisStatus",
    "ConflictSet",
    "format_diagnosis_report",
    "Formula",
    "Predicate",
    "Literal",
    "LogicConnective",
    "Sequent",
    "Refutation",
    "ProofAttempt",
    "ProofStatus",
    "Prover",
    "DPLLProver",
    "Z3Prover",
    "make_prover",
    "Registry",
    "MBDConfig",
    "ProverConfig",
    "DiagnosisConfig",
    "DEFAULT_CONFIG",
    "MBDError",
    "UnsupportedAxiomError",
    "InvalidProblemError",
    "ClausificationError",
    "__version__",
]
