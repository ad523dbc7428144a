"""
Forward rule catalog used by the puzzle generator and suggestion features.

Each ForwardRule wraps one rule of inference with a selection weight. The
generator draws rules proportionally to their weights and halves the weight
of a rule once it has been used, so a single attempt favours variety.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from derivation import engine
from derivation.engine import Application
from derivation.rules import InferenceRule
from wff.formula import Formula


DEFAULT_WEIGHTS: Dict[InferenceRule, float] = {
    InferenceRule.MODUS_PONENS: 7.5,
    InferenceRule.MODUS_TOLLENS: 7.75,
    InferenceRule.CONJUNCTION: 10.1,
    InferenceRule.HYPOTHETICAL_SYLLOGISM: 10.2,
    InferenceRule.DISJUNCTIVE_SYLLOGISM: 10.3,
    InferenceRule.CONSTRUCTIVE_DILEMMA: 10.4,
    InferenceRule.ABSORPTION: 5.0,
    InferenceRule.SIMPLIFICATION: 5.1,
    InferenceRule.ADDITION: 5.2,
}


@dataclass(frozen=True, slots=True)
class ForwardRule:
    rule: InferenceRule
    weight: float

    def can_apply(self, known: Iterable[Formula]) -> bool:
        return engine.can_apply(self.rule, known)

    def generate(self, known: Iterable[Formula]) -> List[Application]:
        return engine.get_possible_applications(self.rule, known)


def build_catalog(weights: Optional[Mapping[InferenceRule, float]] = None) -> List[ForwardRule]:
    """One ForwardRule per rule of inference, weighted from ``weights`` or the defaults."""
    merged = dict(DEFAULT_WEIGHTS)
    if weights:
        merged.update(weights)
    return [ForwardRule(rule, float(merged[rule])) for rule in InferenceRule]


ALL_FORWARD_RULES: Sequence[ForwardRule] = tuple(build_catalog())


class WeightedRuleChooser:
    """
    Weighted random choice over the catalog with per-attempt decay.

    Owned by a single generation attempt; weights never leak between attempts.
    """

    def __init__(self, catalog: Sequence[ForwardRule], rng: random.Random, decay: float = 0.5):
        self.rng = rng
        self.decay = decay
        self.weights: Dict[InferenceRule, float] = {fr.rule: fr.weight for fr in catalog}
        self._rules = {fr.rule: fr for fr in catalog}

    def choose(self, candidates: Iterable[ForwardRule]) -> Optional[ForwardRule]:
        pool = [fr for fr in candidates if self.weights.get(fr.rule, 0.0) > 0.0]
        if not pool:
            return None
        return self.rng.choices(pool, weights=[self.weights[fr.rule] for fr in pool], k=1)[0]

    def mark_used(self, rule: InferenceRule) -> None:
        self.weights[rule] = self.weights[rule] * self.decay

    def applicable(self, known: Sequence[Formula]) -> List[ForwardRule]:
        return [fr for fr in self._rules.values() if fr.can_apply(known)]


__all__ = [
    "DEFAULT_WEIGHTS",
    "ForwardRule",
    "build_catalog",
    "ALL_FORWARD_RULES",
    "WeightedRuleChooser",
]
