"""
mbd/core/types.py
=================
Foundation type system for MBD-Core.
Every module imports from here. No circular dependencies.

Mathematical basis:
  - Predicate encodes a first-order atom: p(t₁, …, tₙ)
  - Formula encodes a first-order formula tree over ∧ ∨ ¬ → ↔ ∀ ∃
  - Sequent encodes a clause Γ ⊢ Δ  ≡  ¬Γ ∨ Δ
  - DiagnosisResult encodes the three diagnostic outcomes:
    consistent, conflict(s), inconclusive
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple


# ─────────────────────────────────────────────
#  ENUMERATIONS
# ─────────────────────────────────────────────

class LogicConnective(Enum):
    AND     = "∧"
    OR      = "∨"
    NOT     = "¬"
    IMPLIES = "→"
    IFF     = "↔"
    FORALL  = "∀"
    EXISTS  = "∃"


QUANTIFIERS = frozenset({LogicConnective.FORALL, LogicConnective.EXISTS})


class ProofStatus(Enum):
    """Outcome of a single refutation attempt.

    PROVED:     the goal is valid, at least one refutation certificate exists
    NOT_PROVED: the negated goal is satisfiable, no certificate can exist
    UNKNOWN:    the prover gave up (timeout, budget, unsupported input)
    """
    PROVED     = "proved"
    NOT_PROVED = "not_proved"
    UNKNOWN    = "unknown"


class DiagnosisStatus(Enum):
    CONSISTENT   = "consistent"
    CONFLICT     = "conflict"
    INCONCLUSIVE = "inconclusive"


# ─────────────────────────────────────────────
#  SYMBOLIC TYPES
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class Predicate:
    """First-order logic atom: name(arg1, arg2, ...)

    Frozen so predicates can be used in sets and as dict keys.
    Arguments are terms: strings starting with '?' are variables,
    everything else is a constant (a component identifier, usually).

    Examples:
        Predicate("ab", ("a1",))
        Predicate("in1", ("?x",))
    """
    name: str
    args: Tuple[str, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}({', '.join(self.args)})"

    def __repr__(self) -> str:
        return f"Predicate({self!s})"


@dataclass(frozen=True)
class Literal:
    """A predicate with a polarity. positive=False means ¬predicate."""
    predicate: Predicate
    positive:  bool = True

    def negate(self) -> "Literal":
        return Literal(self.predicate, not self.positive)

    def __str__(self) -> str:
        return str(self.predicate) if self.positive else f"¬{self.predicate}"


@dataclass(frozen=True)
class Formula:
    """An immutable first-order formula tree.

    Representation:
        predicate:  leaf node (atomic formula)
        connective: logical operator for this node
        children:   sub-formulas
        variable:   bound variable, quantifier nodes only
        sort:       the domain the bound variable ranges over

    Identity elements are encoded structurally:
        ⊤ = AND() (empty conjunction)
        ⊥ = OR()  (empty disjunction)
    """
    predicate:  Optional[Predicate] = None
    connective: Optional[LogicConnective] = None
    children:   Tuple["Formula", ...] = ()
    variable:   Optional[str] = None
    sort:       Optional[str] = None

    @classmethod
    def atom(cls, name: str, *args: str) -> "Formula":
        return cls(predicate=Predicate(name=name, args=tuple(args)))

    @classmethod
    def of(cls, p: Predicate) -> "Formula":
        return cls(predicate=p)

    @classmethod
    def top(cls) -> "Formula":
        return cls(connective=LogicConnective.AND)

    @classmethod
    def bottom(cls) -> "Formula":
        return cls(connective=LogicConnective.OR)

    @classmethod
    def NOT(cls, f: "Formula") -> "Formula":
        return cls(connective=LogicConnective.NOT, children=(f,))

    @classmethod
    def AND(cls, *formulas: "Formula") -> "Formula":
        return cls(connective=LogicConnective.AND, children=tuple(formulas))

    @classmethod
    def OR(cls, *formulas: "Formula") -> "Formula":
        return cls(connective=LogicConnective.OR, children=tuple(formulas))

    @classmethod
    def IMPLIES(cls, antecedent: "Formula", consequent: "Formula") -> "Formula":
        return cls(connective=LogicConnective.IMPLIES, children=(antecedent, consequent))

    @classmethod
    def IFF(cls, left: "Formula", right: "Formula") -> "Formula":
        return cls(connective=LogicConnective.IFF, children=(left, right))

    @classmethod
    def FORALL(cls, variable: str, body: "Formula", sort: str = "component") -> "Formula":
        return cls(connective=LogicConnective.FORALL, children=(body,), variable=variable, sort=sort)

    @classmethod
    def EXISTS(cls, variable: str, body: "Formula", sort: str = "component") -> "Formula":
        return cls(connective=LogicConnective.EXISTS, children=(body,), variable=variable, sort=sort)

    def is_atom(self) -> bool:
        return self.predicate is not None

    def is_quantifier(self) -> bool:
        return self.connective in QUANTIFIERS

    def is_top(self) -> bool:
        return self.connective == LogicConnective.AND and not self.children

    def is_bottom(self) -> bool:
        return self.connective == LogicConnective.OR and not self.children

    def __and__(self, other: "Formula") -> "Formula":
        return Formula.AND(self, other)

    def __or__(self, other: "Formula") -> "Formula":
        return Formula.OR(self, other)

    def __invert__(self) -> "Formula":
        return Formula.NOT(self)

    def __str__(self) -> str:
        if self.is_atom():
            return str(self.predicate)
        if self.is_top():
            return "⊤"
        if self.is_bottom():
            return "⊥"
        if self.connective == LogicConnective.NOT:
            return f"¬{self._wrap(self.children[0])}"
        if self.is_quantifier():
            return f"{self.connective.value}{self.variable} ({self.children[0]})"
        op = f" {self.connective.value} "
        return op.join(self._wrap(c) for c in self.children)

    @staticmethod
    def _wrap(f: "Formula") -> str:
        if f.is_atom() or f.connective == LogicConnective.NOT or not f.children:
            return str(f)
        return f"({f})"


@dataclass(frozen=True)
class Sequent:
    """A ground clause Γ ⊢ Δ, read as ¬γ₁ ∨ … ∨ ¬γₙ ∨ δ₁ ∨ … ∨ δₘ.

    antecedent: atoms occurring negatively in the clause
    succedent:  atoms occurring positively in the clause

    A sequent with empty succedent says its antecedent atoms cannot
    all hold at once. The conflict miner only looks at those.
    """
    antecedent: FrozenSet[Predicate] = frozenset()
    succedent:  FrozenSet[Predicate] = frozenset()

    @classmethod
    def from_literals(cls, literals) -> "Sequent":
        ant = frozenset(l.predicate for l in literals if not l.positive)
        suc = frozenset(l.predicate for l in literals if l.positive)
        return cls(antecedent=ant, succedent=suc)

    @property
    def is_taut(self) -> bool:
        return bool(self.antecedent & self.succedent)

    @property
    def is_empty(self) -> bool:
        return not self.antecedent and not self.succedent

    def __str__(self) -> str:
        ant = ", ".join(sorted(str(p) for p in self.antecedent))
        suc = ", ".join(sorted(str(p) for p in self.succedent))
        return f"{ant} ⊢ {suc}".strip()


# ─────────────────────────────────────────────
#  PROVER TYPES
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class Refutation:
    """A refutation certificate: a subset-minimal unsatisfiable set of
    premises drawn from the refuted theory.

    The closed formula of the certificate is the conjunction of its
    premises; removing any single premise makes it satisfiable.
    """
    premises: Tuple[Formula, ...]

    @property
    def formula(self) -> Formula:
        return Formula.AND(*self.premises)

    def __len__(self) -> int:
        return len(self.premises)


@dataclass
class ProofAttempt:
    """Result of Prover.refute(goal)."""
    status:      ProofStatus
    refutations: List[Refutation] = field(default_factory=list)
    reason:      str = ""
    checks:      int = 0
    complete:    bool = True    # False if enumeration stopped at a budget

    @property
    def proved(self) -> bool:
        return self.status == ProofStatus.PROVED

    @property
    def certificate(self) -> Optional[Refutation]:
        """First refutation found, or None."""
        return self.refutations[0] if self.refutations else None


# ─────────────────────────────────────────────
#  DIAGNOSIS OUTPUT
# ─────────────────────────────────────────────

ConflictSet = FrozenSet[str]


@dataclass
class DiagnosisResult:
    """The complete output of one diagnosis call.

    conflicts keeps each minimal conflict separately; components is
    the merged view returned by the compatibility API.
    """
    status:    DiagnosisStatus
    conflicts: List[ConflictSet] = field(default_factory=list)
    reason:    str = ""
    checks:    int = 0
    complete:  bool = True

    @property
    def components(self) -> ConflictSet:
        merged: set = set()
        for conflict in self.conflicts:
            merged |= conflict
        return frozenset(merged)

    @property
    def has_conflict(self) -> bool:
        return self.status == DiagnosisStatus.CONFLICT

    def as_optional(self) -> Optional[ConflictSet]:
        """None unless a refutation was found. Inconclusive maps to None too."""
        if self.status != DiagnosisStatus.CONFLICT:
            return None
        return self.components

    def summary(self) -> str:
        if self.status == DiagnosisStatus.CONFLICT:
            n = len(self.conflicts)
            comps = ", ".join(sorted(self.components)) or "∅"
            return (
                f"DiagnosisResult(conflict: {n} minimal conflict"
                f"{'s' if n != 1 else ''}, components {{{comps}}})"
            )
        if self.status == DiagnosisStatus.INCONCLUSIVE:
            return f"DiagnosisResult(inconclusive: {self.reason or 'no reason given'})"
        return "DiagnosisResult(consistent)"
