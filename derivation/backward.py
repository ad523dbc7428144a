"""
Backward (reverse-rule) strategies.

Each strategy looks at a single goal and, when it applies, says which new
premises to introduce and which sub-goals still need solving. Fresh
variables come from the caller's VarLists so a strategy cannot clash with
a variable already committed elsewhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from derivation.rules import InferenceRule
from derivation.varlists import VarLists
from wff.formula import Formula, f_implies, f_neg, f_or, tree_to_formula
from wff.tree import is_conjunction, is_implication


@dataclass(frozen=True, slots=True)
class GenerationStep:
    new_premises: Tuple[Formula, ...] = ()
    next_goals: Tuple[Formula, ...] = ()

    @property
    def antecedents(self) -> Tuple[Formula, ...]:
        """Formulas the goal is derived from, in the rule's citation order."""
        return self.new_premises + self.next_goals


@dataclass(frozen=True, slots=True)
class RuleGenerator:
    """A reverse strategy for one rule of inference."""
    name: str
    rule: InferenceRule
    can_apply: Callable[[Formula], bool]
    expand: Callable[[Formula, VarLists], Optional[GenerationStep]]

    def generate(self, goal: Formula, variables: VarLists) -> Optional[GenerationStep]:
        if goal.node is None or not self.can_apply(goal):
            return None
        return self.expand(goal, variables)


def _is_conjunction(goal: Formula) -> bool:
    node = goal.node
    return node is not None and is_conjunction(node)


def _is_implication(goal: Formula) -> bool:
    node = goal.node
    return node is not None and is_implication(node)


def _any_wff(goal: Formula) -> bool:
    return goal.node is not None


def _reverse_conjunction(goal: Formula, variables: VarLists) -> Optional[GenerationStep]:
    node = goal.node
    return GenerationStep(next_goals=(tree_to_formula(node.left), tree_to_formula(node.right)))


def _reverse_hypothetical_syllogism(goal: Formula, variables: VarLists) -> Optional[GenerationStep]:
    middle = variables.draw_fresh()
    if middle is None:
        return None
    node = goal.node
    antecedent, consequent = tree_to_formula(node.left), tree_to_formula(node.right)
    return GenerationStep(
        next_goals=(f_implies(antecedent, middle), f_implies(middle, consequent))
    )


def _reverse_modus_ponens(goal: Formula, variables: VarLists) -> Optional[GenerationStep]:
    fresh = variables.draw_fresh()
    if fresh is None:
        return None
    return GenerationStep(new_premises=(f_implies(fresh, goal),), next_goals=(fresh,))


def _reverse_disjunctive_syllogism(goal: Formula, variables: VarLists) -> Optional[GenerationStep]:
    fresh = variables.draw_fresh()
    if fresh is None:
        return None
    return GenerationStep(new_premises=(f_or(fresh, goal),), next_goals=(f_neg(fresh),))


REVERSE_CONJUNCTION = RuleGenerator(
    "reverse-Conjunction", InferenceRule.CONJUNCTION, _is_conjunction, _reverse_conjunction
)
REVERSE_HYPOTHETICAL_SYLLOGISM = RuleGenerator(
    "reverse-HypotheticalSyllogism",
    InferenceRule.HYPOTHETICAL_SYLLOGISM,
    _is_implication,
    _reverse_hypothetical_syllogism,
)
REVERSE_MODUS_PONENS = RuleGenerator(
    "reverse-ModusPonens", InferenceRule.MODUS_PONENS, _any_wff, _reverse_modus_ponens
)
REVERSE_DISJUNCTIVE_SYLLOGISM = RuleGenerator(
    "reverse-DisjunctiveSyllogism",
    InferenceRule.DISJUNCTIVE_SYLLOGISM,
    _any_wff,
    _reverse_disjunctive_syllogism,
)

ALL_BACKWARD_STRATEGIES: Tuple[RuleGenerator, ...] = (
    REVERSE_CONJUNCTION,
    REVERSE_HYPOTHETICAL_SYLLOGISM,
    REVERSE_MODUS_PONENS,
    REVERSE_DISJUNCTIVE_SYLLOGISM,
)


def applicable_strategies(goal: Formula) -> List[RuleGenerator]:
    if goal.node is None:
        return []
    return [strategy for strategy in ALL_BACKWARD_STRATEGIES if strategy.can_apply(goal)]


__all__ = [
    "GenerationStep",
    "RuleGenerator",
    "REVERSE_CONJUNCTION",
    "REVERSE_HYPOTHETICAL_SYLLOGISM",
    "REVERSE_MODUS_PONENS",
    "REVERSE_DISJUNCTIVE_SYLLOGISM",
    "ALL_BACKWARD_STRATEGIES",
    "applicable_strategies",
]
