"""
tests/unit/test_core.py
=======================
Tests for the core support modules:
  - mbd.core.config
  - mbd.core.registry
  - mbd.core.exceptions
  - mbd.version
"""
import pytest

from mbd.core.config import DEFAULT_CONFIG, MBDConfig, ProverConfig
from mbd.core.exceptions import (
    ClausificationError,
    InvalidProblemError,
    MBDError,
    UnsupportedAxiomError,
)
from mbd.core.registry import PROBLEM_CATEGORY, Registry
from mbd.core.types import Formula


# ══════════════════════════════════════════════════════════════════
#  mbd.core.config
# ══════════════════════════════════════════════════════════════════

class TestConfig:
    def test_defaults(self):
        cfg = MBDConfig()
        assert cfg.prover.backend == "z3"
        assert cfg.prover.timeout_ms > 0
        assert cfg.diagnosis.abnormal_predicate == "ab"
        assert cfg.diagnosis.component_sort == "component"
        assert cfg.diagnosis.validate_inputs is True

    def test_for_backend_dpll(self):
        cfg = MBDConfig.for_backend("dpll")
        assert cfg.prover.backend == "dpll"
        assert cfg.prover.timeout_ms == 0

    def test_for_backend_does_not_touch_default(self):
        MBDConfig.for_backend("dpll")
        assert DEFAULT_CONFIG.prover.backend == "z3"

    def test_instances_do_not_share_sections(self):
        a, b = MBDConfig(), MBDConfig()
        a.prover.max_checks = 1
        assert b.prover.max_checks == ProverConfig().max_checks


# ══════════════════════════════════════════════════════════════════
#  mbd.core.registry
# ══════════════════════════════════════════════════════════════════

TEST_CATEGORY = "test-only"


@pytest.fixture
def clean_category():
    yield TEST_CATEGORY
    Registry._store.pop(TEST_CATEGORY, None)


class TestRegistry:
    def test_register_and_get(self, clean_category):
        Registry.register("thing", 42, category=clean_category)
        assert Registry.get("thing", category=clean_category) == 42

    def test_duplicate_rejected(self, clean_category):
        Registry.register("thing", 1, category=clean_category)
        with pytest.raises(KeyError, match="already registered"):
            Registry.register("thing", 2, category=clean_category)

    def test_override(self, clean_category):
        Registry.register("thing", 1, category=clean_category)
        Registry.register("thing", 2, category=clean_category, override=True)
        assert Registry.get("thing", category=clean_category) == 2

    def test_missing_lists_available(self, clean_category):
        Registry.register("present", 1, category=clean_category)
        with pytest.raises(KeyError, match="present"):
            Registry.get("absent", category=clean_category)

    def test_unregister(self, clean_category):
        Registry.register("thing", 1, category=clean_category)
        Registry.unregister("thing", category=clean_category)
        assert "thing" not in Registry.list_all(clean_category)
        Registry.unregister("never-there", category=clean_category)

    def test_decorator_returns_component(self, clean_category):
        @Registry.decorator("supplier", category=clean_category)
        def supplier():
            return [], [], []

        assert Registry.get("supplier", category=clean_category) is supplier
        assert supplier() == ([], [], [])

    def test_example_problems_registered(self):
        import mbd.problems  # noqa: F401

        names = set(Registry.list_all(PROBLEM_CATEGORY))
        assert {"problem1", "problem2", "problem3", "problem_fa"} <= names

    def test_list_all_grouped(self, clean_category):
        Registry.register("b", 1, category=clean_category)
        Registry.register("a", 2, category=clean_category)
        assert Registry.list_all()[clean_category] == ["a", "b"]


# ══════════════════════════════════════════════════════════════════
#  mbd.core.exceptions
# ══════════════════════════════════════════════════════════════════

class TestExceptions:
    def test_hierarchy(self):
        for exc in (UnsupportedAxiomError, InvalidProblemError, ClausificationError):
            assert issubclass(exc, MBDError)

    def test_context_defaults_to_empty(self):
        assert MBDError("boom").context == {}

    def test_unsupported_axiom_carries_axiom(self):
        axiom = Formula.atom("p", "?x")
        err = UnsupportedAxiomError("bad", axiom=axiom, context={"k": 1})
        assert err.axiom is axiom
        assert err.context == {"k": 1}
        assert str(err) == "bad"

    def test_invalid_problem_carries_errors(self):
        err = InvalidProblemError("bad problem", errors=["e1", "e2"])
        assert err.errors == ["e1", "e2"]
        assert err.context["errors"] == ["e1", "e2"]


# ══════════════════════════════════════════════════════════════════
#  mbd.version
# ══════════════════════════════════════════════════════════════════

def test_version_exported():
    import mbd

    assert mbd.__version__ == "0.1.0"
