"""
Rule catalog names, justifications and proof lines.

Provides:
- InferenceRule / ReplacementRule enums (display name + abbreviation)
- Justification variants (a closed union of frozen dataclasses)
- ProofLine and Proof
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from wff.formula import Formula


class InferenceRule(Enum):
    """The nine rules of inference."""
    MODUS_PONENS = ("Modus Ponens", "MP")
    MODUS_TOLLENS = ("Modus Tollens", "MT")
    HYPOTHETICAL_SYLLOGISM = ("Hypothetical Syllogism", "HS")
    DISJUNCTIVE_SYLLOGISM = ("Disjunctive Syllogism", "DS")
    CONSTRUCTIVE_DILEMMA = ("Constructive Dilemma", "CD")
    ABSORPTION = ("Absorption", "Abs")
    SIMPLIFICATION = ("Simplification", "Simp")
    CONJUNCTION = ("Conjunction", "Conj")
    ADDITION = ("Addition", "Add")

    @property
    def rule_name(self) -> str:
        return self.value[0]

    @property
    def abbreviation(self) -> str:
        return self.value[1]


class ReplacementRule(Enum):
    """The ten rules of replacement (equivalences)."""
    DE_MORGANS_THEOREM = ("De Morgan's Theorem", "DM")
    COMMUTATION = ("Commutation", "Comm")
    ASSOCIATION = ("Association", "Assoc")
    DISTRIBUTION = ("Distribution", "Dist")
    DOUBLE_NEGATION = ("Double Negation", "DN")
    TRANSPOSITION = ("Transposition", "Trans")
    MATERIAL_IMPLICATION = ("Material Implication", "MI")
    MATERIAL_EQUIVALENCE = ("Material Equivalence", "ME")
    EXPORTATION = ("Exportation", "Exp")
    TAUTOLOGY = ("Tautology", "Taut")

    @property
    def rule_name(self) -> str:
        return self.value[0]

    @property
    def abbreviation(self) -> str:
        return self.value[1]


def rule_by_abbreviation(abbreviation: str) -> Optional[Union[InferenceRule, ReplacementRule]]:
    """Look up either kind of rule by its short form (case-insensitive)."""
    wanted = abbreviation.strip().lower()
    for rule in (*InferenceRule, *ReplacementRule):
        if rule.abbreviation.lower() == wanted:
            return rule
    return None


# ---------------------------------------------------------------------------
# Justifications
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Premise:
    pass


@dataclass(frozen=True, slots=True)
class Assumption:
    pass


@dataclass(frozen=True, slots=True)
class Inference:
    rule: InferenceRule
    line_references: Tuple[int, ...]


@dataclass(frozen=True, slots=True)
class Replacement:
    rule: ReplacementRule
    line_reference: int


@dataclass(frozen=True, slots=True)
class Reiteration:
    line_reference: int


@dataclass(frozen=True, slots=True)
class ImplicationIntroduction:
    subproof_start: int
    subproof_end: int


@dataclass(frozen=True, slots=True)
class ReductioAdAbsurdum:
    subproof_start: int
    subproof_end: int


Justification = Union[
    Premise,
    Assumption,
    Inference,
    Replacement,
    Reiteration,
    ImplicationIntroduction,
    ReductioAdAbsurdum,
]


def describe(justification: Justification) -> str:
    """Short display form, e.g. ``MP 1,2`` or ``DM 3``."""
    if isinstance(justification, Premise):
        return "Premise"
    if isinstance(justification, Assumption):
        return "Assumption"
    if isinstance(justification, Inference):
        refs = ",".join(str(ref) for ref in justification.line_references)
        return f"{justification.rule.abbreviation} {refs}"
    if isinstance(justification, Replacement):
        return f"{justification.rule.abbreviation} {justification.line_reference}"
    if isinstance(justification, Reiteration):
        return f"R {justification.line_reference}"
    if isinstance(justification, ImplicationIntroduction):
        return f"II {justification.subproof_start}-{justification.subproof_end}"
    if isinstance(justification, ReductioAdAbsurdum):
        return f"RAA {justification.subproof_start}-{justification.subproof_end}"
    raise TypeError(f"Unknown justification: {type(justification)}")


# ---------------------------------------------------------------------------
# Proofs
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ProofLine:
    """
    One numbered line of a proof.

    Attributes:
        line_number: 1-based position; strictly increasing through a proof.
        formula: The formula asserted on this line.
        justification: Why the line is allowed.
        depth: Sub-proof nesting level, always 0 for now.
    """
    line_number: int
    formula: Formula
    justification: Justification
    depth: int = 0

    def __str__(self) -> str:
        return f"{self.line_number}. {self.formula.text}  [{describe(self.justification)}]"


@dataclass
class Proof:
    lines: List[ProofLine] = field(default_factory=list)

    def append(self, formula: Formula, justification: Justification) -> ProofLine:
        """Add a line numbered after the current last line."""
        line = ProofLine(len(self.lines) + 1, formula, justification)
        self.lines.append(line)
        return line

    def __len__(self) -> int:
        return len(self.lines)

    def __str__(self) -> str:
        return "\n".join(str(line) for line in self.lines)


__all__ = [
    "InferenceRule",
    "ReplacementRule",
    "rule_by_abbreviation",
    "Premise",
    "Assumption",
    "Inference",
    "Replacement",
    "Reiteration",
    "ImplicationIntroduction",
    "ReductioAdAbsurdum",
    "Justification",
    "describe",
    "ProofLine",
    "Proof",
]
