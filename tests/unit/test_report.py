"""
tests/unit/test_report.py
=========================
Tests for mbd/diagnosis/report.py.
"""

from mbd.core.types import DiagnosisResult, DiagnosisStatus
from mbd.diagnosis.report import format_diagnosis_report


def test_conflict_report_lists_each_conflict_and_union():
    result = DiagnosisResult(
        status=DiagnosisStatus.CONFLICT,
        conflicts=[frozenset({"a1", "o1"}), frozenset({"a2", "o1"})],
        checks=12,
    )
    text = format_diagnosis_report(result, problem_name="problem3")
    assert "CONFLICT FOUND" in text
    assert "Problem:    problem3" in text
    assert "1. {a1, o1}" in text
    assert "2. {a2, o1}" in text
    assert "Union: {a1, a2, o1}" in text
    assert "[12 check(s)]" in text
    assert "truncated" not in text


def test_truncated_enumeration_is_flagged():
    result = DiagnosisResult(
        status=DiagnosisStatus.CONFLICT,
        conflicts=[frozenset({"a1"})],
        complete=False,
    )
    assert "truncated" in format_diagnosis_report(result)


def test_consistent_report():
    result = DiagnosisResult(status=DiagnosisStatus.CONSISTENT)
    text = format_diagnosis_report(result, hypothesis=["a2", "a1"])
    assert "NO CONFLICT" in text
    assert "Hypothesis: {a1, a2}" in text
    assert "Minimal Conflicts" not in text
    assert "Problem:" not in text


def test_inconclusive_report_shows_reason():
    result = DiagnosisResult(status=DiagnosisStatus.INCONCLUSIVE, reason="z3: timeout")
    text = format_diagnosis_report(result)
    assert "INCONCLUSIVE" in text
    assert "Reason: z3: timeout" in text
