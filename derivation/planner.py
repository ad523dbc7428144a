"""
Planned puzzle generation.

Phase 1 builds a real derivation graph forward from a few fresh literals,
mixing weighted forward rule applications with backward expansions of
leaves. Phase 2 walks the graph back from the conclusion, hiding up to
``difficulty`` derived nodes; whatever is left on the frontier becomes the
premise set. Premises are read directly off the graph, so the rule catalog
always suffices to re-derive the conclusion from them.
"""

from __future__ import annotations

import hashlib
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from derivation.backward import ALL_BACKWARD_STRATEGIES, RuleGenerator
from derivation.bounds import GeneratorBounds
from derivation.engine import Application
from derivation.forward import WeightedRuleChooser, build_catalog
from derivation.rules import InferenceRule
from derivation.varlists import VarLists
from wff.formula import Formula
from wff.structure import find_contradiction, negation_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Problem:
    """
    A generated or curated puzzle.

    Attributes:
        premises: Formulas given to the solver, sorted by text.
        conclusion: Formula to derive.
        difficulty: Number of derivation steps hidden from the solver.
        id: Deterministic fingerprint of premises and conclusion.
        name: Display name.
    """
    premises: Tuple[Formula, ...]
    conclusion: Formula
    difficulty: int
    id: str = ""
    name: str = "Generated Problem"

    def __str__(self) -> str:
        premises = ", ".join(premise.text for premise in self.premises)
        return f"{premises} ⊢ {self.conclusion.text}"


def problem_fingerprint(premises: Sequence[Formula], conclusion: Formula) -> str:
    payload = f"{'|'.join(sorted(p.key for p in premises))}=>{conclusion.key}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:12]


# ---------------------------------------------------------------------------
# Derivation graph (arena of nodes addressed by id)
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class DerivationNode:
    id: int
    formula: Formula
    rule: Optional[InferenceRule] = None
    parents: Tuple[int, ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.parents


@dataclass
class DerivationGraph:
    nodes: List[DerivationNode] = field(default_factory=list)
    _ids: Dict[Formula, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, formula: Formula) -> bool:
        return formula in self._ids

    def node(self, node_id: int) -> DerivationNode:
        return self.nodes[node_id]

    def find(self, formula: Formula) -> Optional[int]:
        return self._ids.get(formula)

    def formulas(self) -> List[Formula]:
        return [node.formula for node in self.nodes]

    def add_leaf(self, formula: Formula) -> int:
        return self._add(formula, None, ())

    def add_derived(self, formula: Formula, rule: InferenceRule, parents: Sequence[int]) -> int:
        return self._add(formula, rule, tuple(parents))

    def _add(self, formula: Formula, rule: Optional[InferenceRule], parents: Tuple[int, ...]) -> int:
        if formula in self._ids:
            raise ValueError(f"Formula already in graph: {formula.text}")
        node_id = len(self.nodes)
        self.nodes.append(DerivationNode(node_id, formula, rule, parents))
        self._ids[formula] = node_id
        return node_id

    def derive_leaf(self, node_id: int, rule: InferenceRule, parents: Sequence[int]) -> None:
        """Turn an existing leaf into a node derived from ``parents``."""
        node = self.nodes[node_id]
        if not node.is_leaf:
            raise ValueError(f"Node {node_id} is already derived")
        node.rule = rule
        node.parents = tuple(parents)

    def depth(self, node_id: int) -> int:
        """Longest path from ``node_id`` down to a leaf."""
        memo: Dict[int, int] = {}

        def visit(current: int) -> int:
            if current not in memo:
                node = self.nodes[current]
                memo[current] = 0 if node.is_leaf else 1 + max(visit(p) for p in node.parents)
            return memo[current]

        return visit(node_id)

    def ancestors(self, node_id: int) -> Set[int]:
        """``node_id`` and every node it was derived from, transitively."""
        seen: Set[int] = set()
        stack = [node_id]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            stack.extend(self.nodes[current].parents)
        return seen


@dataclass(frozen=True, slots=True)
class DifficultyCut:
    premise_ids: Tuple[int, ...]
    hidden_ids: Tuple[int, ...]


def cut_graph(graph: DerivationGraph, conclusion_id: int, difficulty: int) -> DifficultyCut:
    """
    Walk back from the conclusion, hiding one derived node per unit of budget.

    The budget is ``difficulty`` clamped to the conclusion's depth. Nodes
    still on the frontier when the walk stops are the revealed premises.
    """
    budget = min(max(1, difficulty), graph.depth(conclusion_id))
    frontier: List[int] = [conclusion_id]
    hidden: List[int] = []
    hidden_set: Set[int] = set()

    while budget > 0 and any(not graph.node(n).is_leaf for n in frontier):
        next_frontier: List[int] = []
        for node_id in frontier:
            node = graph.node(node_id)
            if node.is_leaf or budget <= 0:
                next_frontier.append(node_id)
                continue
            hidden.append(node_id)
            hidden_set.add(node_id)
            budget -= 1
            next_frontier.extend(p for p in node.parents if p not in hidden_set)
        frontier = [n for n in dict.fromkeys(next_frontier) if n not in hidden_set]

    return DifficultyCut(tuple(frontier), tuple(hidden))


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class _Attempt:
    """State owned by one generation attempt; discarded wholesale on failure."""

    def __init__(self, bounds: GeneratorBounds, rng: random.Random):
        self.bounds = bounds
        self.rng = rng
        self.graph = DerivationGraph()
        self.variables = VarLists.create(rng, bounds.variables)
        self.chooser = WeightedRuleChooser(
            build_catalog(bounds.rule_weights), rng, decay=bounds.weight_decay
        )
        self.latest: Optional[int] = None

    # Phase 1 ---------------------------------------------------------------

    def seed(self) -> None:
        count = self.rng.randint(self.bounds.min_seeds, self.bounds.max_seeds)
        for _ in range(count):
            fresh = self.variables.draw_fresh()
            if fresh is None:
                break
            literal = negation_of(fresh) if self.rng.random() < self.bounds.seed_negation_chance else fresh
            self.variables.use_atomic_assertion(literal)
            self.graph.add_leaf(literal)

    def build(self, difficulty: int) -> None:
        target = self.bounds.target_steps(difficulty)
        tries = target * self.bounds.step_tries_factor
        steps = 0
        while steps < target and tries > 0:
            tries -= 1
            expanded = False
            if self.latest is not None and self.rng.random() < self.bounds.backward_chance:
                expanded = self.expand_backward()
            if not expanded and not self.apply_forward():
                if not self.expand_backward():
                    logger.debug("No rule applicable after %d steps", steps)
                    break
            steps += 1

    def apply_forward(self) -> bool:
        known = self.graph.formulas()
        candidates = self.chooser.applicable(known)
        while candidates:
            forward_rule = self.chooser.choose(candidates)
            if forward_rule is None:
                return False
            candidates.remove(forward_rule)
            applications = [
                app for app in forward_rule.generate(known)
                if app.conclusion not in self.graph
                and len(app.conclusion) <= self.bounds.max_formula_tiles
            ]
            if not applications:
                continue
            if self.latest is not None and self.rng.random() < self.bounds.chain_bias:
                latest = self.graph.node(self.latest).formula
                preferred = [app for app in applications if latest in app.premises]
                if preferred:
                    applications = preferred
            self._record(self.rng.choice(applications))
            self.chooser.mark_used(forward_rule.rule)
            return True
        return False

    def _record(self, application: Application) -> None:
        parents = [self.graph.find(premise) for premise in application.premises]
        self.latest = self.graph.add_derived(application.conclusion, application.rule, parents)
        logger.debug(
            "  %s: %s from %s",
            application.rule.abbreviation,
            application.conclusion.text,
            ", ".join(p.text for p in application.premises),
        )

    def expand_backward(self) -> bool:
        """Derive one leaf from new leaves through a reverse strategy."""
        if self.latest is None:
            return False
        leaves = [
            node_id for node_id in sorted(self.graph.ancestors(self.latest))
            if self.graph.node(node_id).is_leaf
        ]
        self.rng.shuffle(leaves)
        for leaf_id in leaves:
            goal = self.graph.node(leaf_id).formula
            strategies: List[RuleGenerator] = [s for s in ALL_BACKWARD_STRATEGIES if s.can_apply(goal)]
            self.rng.shuffle(strategies)
            for strategy in strategies:
                if self._try_strategy(leaf_id, goal, strategy):
                    return True
        return False

    def _try_strategy(self, leaf_id: int, goal: Formula, strategy: RuleGenerator) -> bool:
        working = self.variables.copy()
        step = strategy.generate(goal, working)
        if step is None:
            return False
        antecedents = step.antecedents
        if any(formula in self.graph for formula in antecedents):
            return False
        if any(len(formula) > self.bounds.max_formula_tiles for formula in antecedents):
            return False
        if not working.use_all(antecedents):
            return False
        self.variables.commit(working)
        parent_ids = [self.graph.add_leaf(formula) for formula in antecedents]
        self.graph.derive_leaf(leaf_id, strategy.rule, parent_ids)
        logger.debug("  %s: %s from %s", strategy.name, goal.text, ", ".join(f.text for f in antecedents))
        return True


class PlannedProblemGenerator:
    """
    Two-phase puzzle generator.

    Randomness comes from the injected ``rng`` (or a ``random.Random`` built
    from ``seed``), so a fixed seed reproduces the same sequence of problems.
    """

    def __init__(
        self,
        bounds: Optional[GeneratorBounds] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        self.bounds = bounds or GeneratorBounds()
        self.rng = rng if rng is not None else random.Random(seed)

    def generate(self, difficulty: int) -> Optional[Problem]:
        """Generate a problem, or None when no attempt within the retry bound succeeds."""
        difficulty = max(1, int(difficulty))
        for attempt in range(1, self.bounds.max_attempts + 1):
            logger.debug("Generation attempt %d (difficulty %d)", attempt, difficulty)
            problem = self._attempt(difficulty)
            if problem is not None:
                logger.info(
                    "Generated problem %s after %d attempt(s): %s", problem.id, attempt, problem
                )
                return problem
        logger.warning(
            "Failed to generate a problem at difficulty %d after %d attempts",
            difficulty,
            self.bounds.max_attempts,
        )
        return None

    def _attempt(self, difficulty: int) -> Optional[Problem]:
        state = _Attempt(self.bounds, self.rng)
        state.seed()
        state.build(difficulty)
        if state.latest is None:
            logger.debug("Attempt produced no derived formula")
            return None

        graph = state.graph
        cut = cut_graph(graph, state.latest, difficulty)
        conclusion = graph.node(state.latest).formula
        premises = tuple(sorted(
            dict.fromkeys(graph.node(n).formula for n in cut.premise_ids),
            key=lambda formula: formula.text,
        ))

        if not cut.hidden_ids or conclusion in premises:
            logger.debug("Rejected: conclusion %s is not hidden", conclusion.text)
            return None
        clash = find_contradiction(list(premises))
        if clash is not None:
            logger.debug("Rejected: premises assert both %s and its negation", clash.text)
            return None

        hidden = len(cut.hidden_ids)
        return Problem(
            premises=premises,
            conclusion=conclusion,
            difficulty=hidden,
            id=f"gen-{problem_fingerprint(premises, conclusion)}",
            name=f"Generated Problem (difficulty {hidden})",
        )


__all__ = [
    "Problem",
    "problem_fingerprint",
    "DerivationNode",
    "DerivationGraph",
    "DifficultyCut",
    "cut_graph",
    "PlannedProblemGenerator",
]
