"""mbd/problems — Example diagnosis problem suppliers (registered on import)."""

from mbd.problems.circuits import (
    AND_GATE,
    EXOR_GATE,
    OR_GATE,
    problem1,
    problem2,
    problem3,
    problem_fa,
)

__all__ = [
    "AND_GATE",
    "OR_GATE",
    "EXOR_GATE",
    "problem1",
    "problem2",
    "problem3",
    "problem_fa",
]
