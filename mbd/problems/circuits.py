"""
mbd/problems/circuits.py
========================
Example diagnosis problems: small boolean circuits.

Each supplier returns (SD, COMP, OBS):
    SD:   gate axioms (quantified over components) + gate types + wiring
    COMP: the gate instances that may be faulty
    OBS:  the measured signal values

Signals are atoms over the gate identifier: in1(g), in2(g), out(g).
Wiring is a biconditional between signals of different gates.
"""

from __future__ import annotations

from typing import List, Tuple

from mbd.core.registry import PROBLEM_CATEGORY, Registry
from mbd.core.types import Formula

A = Formula.atom
X = "?x"

# ∀x (and(x) ∧ ¬ab(x) → (in1(x) ∧ in2(x) ↔ out(x)))
AND_GATE = Formula.FORALL(X, Formula.IMPLIES(
    A("and", X) & ~A("ab", X),
    Formula.IFF(A("in1", X) & A("in2", X), A("out", X)),
))

# ∀x (or(x) ∧ ¬ab(x) → (in1(x) ∨ in2(x) ↔ out(x)))
OR_GATE = Formula.FORALL(X, Formula.IMPLIES(
    A("or", X) & ~A("ab", X),
    Formula.IFF(A("in1", X) | A("in2", X), A("out", X)),
))

# ∀x (exor(x) ∧ ¬ab(x) → (out(x) ↔ in1(x) ∧ ¬in2(x) ∨ ¬in1(x) ∧ in2(x)))
EXOR_GATE = Formula.FORALL(X, Formula.IMPLIES(
    A("exor", X) & ~A("ab", X),
    Formula.IFF(
        A("out", X),
        (A("in1", X) & ~A("in2", X)) | (~A("in1", X) & A("in2", X)),
    ),
))


def wire(a: Formula, b: Formula) -> Formula:
    return Formula.IFF(a, b)


Problem = Tuple[List[Formula], List[str], List[Formula]]


@Registry.decorator("problem1", category=PROBLEM_CATEGORY)
def problem1() -> Problem:
    """Two unconnected AND gates. Both see true inputs and a false output."""
    sd = [AND_GATE, A("and", "a1"), A("and", "a2")]
    comp = ["a1", "a2"]
    obs = [
        A("in1", "a1"), A("in2", "a1"), ~A("out", "a1"),
        A("in1", "a2"), A("in2", "a2"), ~A("out", "a2"),
    ]
    return sd, comp, obs


@Registry.decorator("problem2", category=PROBLEM_CATEGORY)
def problem2() -> Problem:
    """out(a1) feeds in1(a2). With in2(a1) false, a2 cannot output true."""
    sd = [
        AND_GATE,
        A("and", "a1"),
        A("and", "a2"),
        wire(A("out", "a1"), A("in1", "a2")),
    ]
    comp = ["a1", "a2"]
    obs = [A("in1", "a1"), ~A("in2", "a1"), A("out", "a2")]
    return sd, comp, obs


@Registry.decorator("problem3", category=PROBLEM_CATEGORY)
def problem3() -> Problem:
    """Two AND gates feeding an OR gate; all inputs true, OR output false."""
    sd = [
        AND_GATE,
        OR_GATE,
        A("and", "a1"),
        A("and", "a2"),
        A("or", "o1"),
        wire(A("out", "a1"), A("in1", "o1")),
        wire(A("out", "a2"), A("in2", "o1")),
    ]
    comp = ["a1", "a2", "o1"]
    obs = [
        A("in1", "a1"), A("in2", "a1"),
        A("in1", "a2"), A("in2", "a2"),
        ~A("out", "o1"),
    ]
    return sd, comp, obs


@Registry.decorator("problem_fa", category=PROBLEM_CATEGORY)
def problem_fa() -> Problem:
    """One-bit full adder.

        in1(fa), in2(fa): input bits
        carryin(fa):      carry-in bit
        out(fa):          sum bit
        carryout(fa):     carry-out bit

    in1 + in2 + carryin = 2·carryout + out. The observation 1 + 0 + 1
    with out = 1, carryout = 0 is wrong on both output bits.
    """
    sd = [
        AND_GATE,
        OR_GATE,
        EXOR_GATE,
        A("and", "a1"),
        A("and", "a2"),
        A("exor", "b1"),
        A("exor", "b2"),
        A("or", "r1"),
        wire(A("in1", "fa"), A("in1", "b1")),
        wire(A("in1", "fa"), A("in1", "a1")),
        wire(A("carryin", "fa"), A("in1", "a2")),
        wire(A("carryin", "fa"), A("in2", "b2")),
        wire(A("out", "fa"), A("out", "b2")),
        wire(A("carryout", "fa"), A("out", "r1")),
        wire(A("in2", "fa"), A("in2", "b1")),
        wire(A("in2", "fa"), A("in2", "a1")),
        wire(A("out", "b1"), A("in2", "a2")),
        wire(A("out", "b1"), A("in1", "b2")),
        wire(A("out", "a2"), A("in1", "r1")),
        wire(A("out", "a1"), A("in2", "r1")),
    ]
    comp = ["a1", "a2", "b1", "b2", "r1"]
    obs = [
        A("in1", "fa"),
        ~A("in2", "fa"),
        A("carryin", "fa"),
        A("out", "fa"),
        ~A("carryout", "fa"),
    ]
    return sd, comp, obs
