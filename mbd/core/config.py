"""
mbd/core/config.py
==================
Global configuration for MBD-Core.
All tunables in one place.
"""
from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class ProverConfig:
    backend:         str = "z3"      # "z3" | "dpll"
    timeout_ms:      int = 10_000    # per solver check, 0 = no limit (z3 only)
    max_refutations: int = 32        # minimal cores to enumerate per call
    max_checks:      int = 512       # satisfiability checks per call
    max_decisions:   int = 100_000   # DPLL branching budget per check


@dataclass
class DiagnosisConfig:
    abnormal_predicate: str  = "ab"
    component_sort:     str  = "component"
    validate_inputs:    bool = True


@dataclass
class MBDConfig:
    prover:    ProverConfig    = field(default_factory=ProverConfig)
    diagnosis: DiagnosisConfig = field(default_factory=DiagnosisConfig)

    @classmethod
    def for_backend(cls, backend: str) -> "MBDConfig":
        """Pre-tuned configs per prover backend."""
        cfg = cls()
        cfg.prover.backend = backend
        if backend == "dpll":
            cfg.prover.timeout_ms = 0     # budget is max_decisions instead
        return cfg


# Singleton default config
DEFAULT_CONFIG = MBDConfig()
