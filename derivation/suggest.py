"""Next-line suggestions for interactive proof building."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from derivation import engine
from derivation.backward import GenerationStep, RuleGenerator, applicable_strategies
from derivation.replacement import get_possible_replacements
from derivation.rules import (
    Inference,
    InferenceRule,
    Justification,
    ProofLine,
    Replacement,
    ReplacementRule,
)
from derivation.varlists import VarLists
from wff.formula import Formula


@dataclass(frozen=True, slots=True)
class Suggestion:
    formula: Formula
    justification: Justification


def inference_suggestions(rule: InferenceRule, lines: Sequence[ProofLine]) -> List[Suggestion]:
    """
    Formulas that ``rule`` yields from the selected lines.

    Each suggestion carries a justification citing the lines in the order
    the validator expects. Formulas already on a selected line are skipped.
    """
    numbers: Dict[Formula, int] = {}
    for line in lines:
        numbers.setdefault(line.formula, line.line_number)

    out: List[Suggestion] = []
    for application in engine.get_possible_applications(rule, list(numbers)):
        if application.conclusion in numbers:
            continue
        premises = application.premises
        if rule is InferenceRule.ADDITION:
            premises = premises[:1]
        refs = tuple(numbers[premise] for premise in premises)
        out.append(Suggestion(application.conclusion, Inference(rule, refs)))
    return out


def replacement_suggestions(rule: ReplacementRule, line: ProofLine) -> List[Suggestion]:
    """Every single-subtree rewrite of the line's formula under ``rule``."""
    return [
        Suggestion(formula, Replacement(rule, line.line_number))
        for formula in get_possible_replacements(rule, line.formula)
        if formula != line.formula
    ]


def backward_suggestions(goal: Formula, variables: VarLists) -> List[Tuple[RuleGenerator, GenerationStep]]:
    """Reverse strategies that apply to ``goal`` with the steps they would take."""
    out: List[Tuple[RuleGenerator, GenerationStep]] = []
    for strategy in applicable_strategies(goal):
        step = strategy.generate(goal, variables.copy())
        if step is not None:
            out.append((strategy, step))
    return out


__all__ = [
    "Suggestion",
    "inference_suggestions",
    "replacement_suggestions",
    "backward_suggestions",
]
