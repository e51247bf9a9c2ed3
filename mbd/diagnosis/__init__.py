"""mbd/diagnosis — Grounding, theory assembly, conflict mining, engine."""

from mbd.diagnosis.conflicts import (
    abnormal_components,
    conflict_clauses,
    conflict_union,
    mine_conflicts,
)
from mbd.diagnosis.engine import DiagnosisEngine, tp, tpf
from mbd.diagnosis.grounding import ground_system_description, instantiate
from mbd.diagnosis.report import format_diagnosis_report
from mbd.diagnosis.theory import assemble_theory, normal_assumptions

__all__ = [
    "DiagnosisEngine",
    "tp",
    "tpf",
    "ground_system_description",
    "instantiate",
    "assemble_theory",
    "normal_assumptions",
    "conflict_clauses",
    "abnormal_components",
    "mine_conflicts",
    "conflict_union",
    "format_diagnosis_report",
]
