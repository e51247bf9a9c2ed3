"""
mbd/diagnosis/report.py
=======================
Human-readable rendering of a DiagnosisResult.
"""

from __future__ import annotations

from typing import Optional, Sequence

from mbd.core.types import DiagnosisResult, DiagnosisStatus


def _fmt(components) -> str:
    return "{" + ", ".join(sorted(components)) + "}"


def format_diagnosis_report(
    result: DiagnosisResult,
    problem_name: Optional[str] = None,
    hypothesis: Sequence[str] = (),
) -> str:
    """Format a full diagnosis report.

    Sections:
        1. Header (status)
        2. Problem / hypothesis context
        3. Minimal conflicts, one per line, and their union
        4. Summary line
    """
    if result.status == DiagnosisStatus.CONFLICT:
        title = "CONFLICT FOUND — observations contradict normal behaviour"
    elif result.status == DiagnosisStatus.INCONCLUSIVE:
        title = "INCONCLUSIVE — prover gave up before deciding"
    else:
        title = "NO CONFLICT — observations consistent with hypothesis"

    lines = ["=" * 60, f"  {title}", "=" * 60, ""]

    if problem_name:
        lines.append(f"Problem:    {problem_name}")
    lines.append(f"Hypothesis: {_fmt(hypothesis)}")
    lines.append("")

    if result.status == DiagnosisStatus.CONFLICT:
        lines.append("── Minimal Conflicts ─────────────────────────────────────")
        for i, conflict in enumerate(result.conflicts, 1):
            lines.append(f"  {i}. {_fmt(conflict)}")
        lines.append(f"  Union: {_fmt(result.components)}")
        if not result.complete:
            lines.append("  (enumeration truncated by prover budget)")
        lines.append("")
    elif result.status == DiagnosisStatus.INCONCLUSIVE:
        lines.append(f"Reason: {result.reason or 'unknown'}")
        lines.append("")

    lines.append(f"── {result.summary()} [{result.checks} check(s)]")
    lines.append("=" * 60)
    return "\n".join(lines)
