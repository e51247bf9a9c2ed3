"""
examples/circuit_diagnosis.py
=============================
Minimal MBD-Core example: conflicts of a two-AND/one-OR circuit,
built by hand rather than taken from the problem registry.
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from mbd import DiagnosisEngine, Formula, format_diagnosis_report
from mbd.problems import AND_GATE, OR_GATE

A = Formula.atom


def main():
    sd = [
        AND_GATE,
        OR_GATE,
        A("and", "a1"),
        A("and", "a2"),
        A("or", "o1"),
        Formula.IFF(A("out", "a1"), A("in1", "o1")),
        Formula.IFF(A("out", "a2"), A("in2", "o1")),
    ]
    comp = ["a1", "a2", "o1"]
    obs = [
        A("in1", "a1"), A("in2", "a1"),
        A("in1", "a2"), A("in2", "a2"),
        ~A("out", "o1"),
    ]

    engine = DiagnosisEngine()
    result = engine.diagnose(sd, comp, obs)
    print(format_diagnosis_report(result, problem_name="and-or circuit"))
    assert set(result.conflicts) == {frozenset({"a1", "o1"}), frozenset({"a2", "o1"})}

    # Suspecting the OR gate explains the observation on its own
    result = engine.diagnose(sd, comp, obs, hypothesis=["o1"])
    print(format_diagnosis_report(result, hypothesis=["o1"]))
    assert result.as_optional() is None
    print("✓ Circuit diagnosis example passed.")


if __name__ == "__main__":
    main()
