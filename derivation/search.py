"""
Bounded forward derivability search.

Breadth-first forward closure over the rules of inference, restricted to
what can be built from a premise set. The rules that never shrink the
search space on their own (Conjunction and Addition) only produce formulas
that already occur as subformulas of something known or of the goal, plus
disjunctions of implication antecedents for Constructive Dilemma.

Formulas longer than the tile cap are never admitted, which keeps repeated
Absorption from growing the pool without end.

``prove`` returns a Proof that ProofValidator accepts.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

from derivation import engine
from derivation.engine import Application
from derivation.rules import Inference, InferenceRule, Premise, Proof
from wff.formula import Formula, f_or, tree_to_formula
from wff.structure import subformulas
from wff.tree import is_conjunction, is_disjunction, is_implication

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 8
DEFAULT_MAX_FORMULAS = 5000
DEFAULT_MAX_FORMULA_TILES = 31

_CLOSED_RULES = tuple(
    rule for rule in InferenceRule
    if rule not in (InferenceRule.CONJUNCTION, InferenceRule.ADDITION)
)


def _constructive_applications(
    known: Dict[Formula, Optional[Application]],
    universe: Set[Formula],
) -> List[Application]:
    """Conjunction and Addition results admitted for this round."""
    out: List[Application] = []
    for candidate in sorted(universe, key=lambda formula: formula.key):
        node = candidate.node
        if is_conjunction(node):
            left, right = tree_to_formula(node.left), tree_to_formula(node.right)
            if left != right and left in known and right in known:
                out.append(Application(InferenceRule.CONJUNCTION, (left, right), candidate))
        elif is_disjunction(node):
            for side in (node.left, node.right):
                base = tree_to_formula(side)
                if base in known:
                    out.append(Application(InferenceRule.ADDITION, (base,), candidate))
                    break

    antecedents = []
    for formula in known:
        node = formula.node
        if is_implication(node):
            antecedent = tree_to_formula(node.left)
            if antecedent not in antecedents:
                antecedents.append(antecedent)
    for first in antecedents:
        if first not in known:
            continue
        for second in antecedents:
            if first != second:
                out.append(Application(InferenceRule.ADDITION, (first,), f_or(first, second)))
                out.append(Application(InferenceRule.ADDITION, (first,), f_or(second, first)))
    return out


def _closure_applications(known: Sequence[Formula]) -> Iterable[Application]:
    for rule in _CLOSED_RULES:
        yield from engine.get_possible_applications(rule, known)


def search(
    premises: Sequence[Formula],
    goal: Formula,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    max_formulas: int = DEFAULT_MAX_FORMULAS,
    max_formula_tiles: int = DEFAULT_MAX_FORMULA_TILES,
) -> Optional[Dict[Formula, Optional[Application]]]:
    """
    Forward closure from ``premises`` until ``goal`` appears.

    The tile cap is raised to the longest premise or goal when either
    exceeds it.

    Returns the derivation map (formula -> application that produced it,
    None for premises) or None when the goal was not reached.
    """
    if goal.node is None:
        return None
    known: Dict[Formula, Optional[Application]] = {}
    for premise in premises:
        if premise.node is not None:
            known.setdefault(premise, None)
    universe: Set[Formula] = set(subformulas(goal))
    for premise in known:
        universe |= subformulas(premise)
    cap = max([max_formula_tiles, len(goal)] + [len(premise) for premise in known])

    for round_index in range(max_rounds):
        if goal in known:
            return known
        current = list(known)
        fresh: Dict[Formula, Application] = {}
        candidates = list(_closure_applications(current))
        candidates.extend(_constructive_applications(known, universe))
        for application in candidates:
            conclusion = application.conclusion
            if conclusion in known or conclusion in fresh or len(conclusion) > cap:
                continue
            fresh[conclusion] = application
        if not fresh:
            logger.debug("Search saturated after %d round(s) without reaching %s", round_index, goal.text)
            return None
        for formula, application in fresh.items():
            known[formula] = application
            universe |= subformulas(formula)
        if len(known) > max_formulas:
            logger.debug("Search exceeded %d formulas", max_formulas)
            break

    return known if goal in known else None


def prove(
    premises: Sequence[Formula],
    goal: Formula,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    max_formulas: int = DEFAULT_MAX_FORMULAS,
    max_formula_tiles: int = DEFAULT_MAX_FORMULA_TILES,
) -> Optional[Proof]:
    """Find a proof of ``goal`` from ``premises``, citing only rules of inference."""
    derivation = search(
        premises,
        goal,
        max_rounds=max_rounds,
        max_formulas=max_formulas,
        max_formula_tiles=max_formula_tiles,
    )
    if derivation is None:
        return None

    ordered: List[Formula] = []
    visited: Set[Formula] = set()

    def visit(formula: Formula) -> None:
        if formula in visited:
            return
        visited.add(formula)
        application = derivation[formula]
        if application is not None:
            for premise in application.premises:
                visit(premise)
            ordered.append(formula)

    visit(goal)

    proof = Proof()
    numbers: Dict[Formula, int] = {}
    for premise in dict.fromkeys(p for p in premises if p.node is not None):
        numbers[premise] = proof.append(premise, Premise()).line_number
    for formula in ordered:
        application = derivation[formula]
        refs = tuple(numbers[premise] for premise in application.premises)
        numbers[formula] = proof.append(formula, Inference(application.rule, refs)).line_number
    return proof


def is_derivable(
    premises: Sequence[Formula],
    goal: Formula,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    max_formulas: int = DEFAULT_MAX_FORMULAS,
    max_formula_tiles: int = DEFAULT_MAX_FORMULA_TILES,
) -> bool:
    derivation = search(
        premises,
        goal,
        max_rounds=max_rounds,
        max_formulas=max_formulas,
        max_formula_tiles=max_formula_tiles,
    )
    return derivation is not None


__all__ = [
    "DEFAULT_MAX_ROUNDS",
    "DEFAULT_MAX_FORMULAS",
    "DEFAULT_MAX_FORMULA_TILES",
    "search",
    "prove",
    "is_derivable",
]
