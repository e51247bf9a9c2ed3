"""
tests/conftest.py
==================
Shared pytest fixtures for all MBD-Core tests.
"""

import pytest

from mbd.core.config import MBDConfig, ProverConfig
from mbd.core.types import Formula
from mbd.diagnosis.engine import DiagnosisEngine
from mbd.problems import AND_GATE, problem1, problem2, problem3, problem_fa
from mbd.symbolic.prover import DPLLProver
from mbd.symbolic.solver import Z3Prover

A = Formula.atom


# ─── PROVERS ──────────────────────────────────────────────────────


@pytest.fixture
def z3_prover():
    return Z3Prover(ProverConfig(timeout_ms=10_000))


@pytest.fixture
def dpll_prover():
    return DPLLProver(ProverConfig(backend="dpll", timeout_ms=0))


@pytest.fixture(params=["z3", "dpll"])
def engine(request):
    """Diagnosis engine, once per prover backend."""
    return DiagnosisEngine(config=MBDConfig.for_backend(request.param))


@pytest.fixture
def z3_engine():
    return DiagnosisEngine(config=MBDConfig.for_backend("z3"))


# ─── PROBLEMS ─────────────────────────────────────────────────────


@pytest.fixture
def two_and_gates():
    return problem1()


@pytest.fixture
def wired_and_gates():
    return problem2()


@pytest.fixture
def and_or_circuit():
    return problem3()


@pytest.fixture
def full_adder():
    return problem_fa()


@pytest.fixture
def and_gate_axiom():
    return AND_GATE


# ─── FORMULAS ─────────────────────────────────────────────────────


@pytest.fixture
def contradiction():
    """p ∧ ¬p"""
    return A("p") & ~A("p")
