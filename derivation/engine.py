"""
Inference rule engine: pattern matching for the nine rules of inference.

Every rule enumerates the applications available over a set of known
formulas. An application records the premises it consumes, in the rule's
canonical citation order, and the resulting conclusion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from derivation.rules import InferenceRule
from wff.formula import Formula, tree_to_formula
from wff.tree import (
    Binary,
    FormulaNode,
    conj,
    disj,
    impl,
    is_conjunction,
    is_disjunction,
    is_implication,
    neg,
)


@dataclass(frozen=True, slots=True)
class Application:
    """One way of applying a rule: consumed premises and the conclusion."""
    rule: InferenceRule
    premises: Tuple[Formula, ...]
    conclusion: Formula


_Known = List[Tuple[Formula, FormulaNode]]


def _index(
    known: Iterable[Formula], dedupe: bool = True
) -> Tuple[_Known, Dict[Formula, Formula]]:
    """
    Parse, drop non-WFFs and de-duplicate under normalized equality.

    With ``dedupe`` off, repeated formulas stay as separate entries so a
    list of cited lines can pair a formula with another copy of itself.
    """
    seen: Dict[Formula, Formula] = {}
    parsed: _Known = []
    for formula in known:
        node = formula.node
        if node is None or (dedupe and formula in seen):
            continue
        seen.setdefault(formula, formula)
        parsed.append((formula, node))
    return parsed, seen


def _implications(parsed: _Known) -> List[Tuple[Formula, Binary]]:
    return [(formula, node) for formula, node in parsed if is_implication(node)]


# ---------------------------------------------------------------------------
# Rule patterns
# ---------------------------------------------------------------------------

def _modus_ponens(known: Iterable[Formula], dedupe: bool = True) -> List[Application]:
    """{(A→B), A} ⊢ B"""
    parsed, seen = _index(known, dedupe)
    out: List[Application] = []
    for formula, node in _implications(parsed):
        antecedent = seen.get(tree_to_formula(node.left))
        if antecedent is not None:
            out.append(Application(
                InferenceRule.MODUS_PONENS,
                (formula, antecedent),
                tree_to_formula(node.right),
            ))
    return out


def _modus_tollens(known: Iterable[Formula], dedupe: bool = True) -> List[Application]:
    """{(A→B), ¬B} ⊢ ¬A"""
    parsed, seen = _index(known, dedupe)
    out: List[Application] = []
    for formula, node in _implications(parsed):
        denial = seen.get(tree_to_formula(neg(node.right)))
        if denial is not None:
            out.append(Application(
                InferenceRule.MODUS_TOLLENS,
                (formula, denial),
                tree_to_formula(neg(node.left)),
            ))
    return out


def _hypothetical_syllogism(known: Iterable[Formula], dedupe: bool = True) -> List[Application]:
    """{(A→B), (B→C)} ⊢ (A→C)"""
    parsed, _ = _index(known, dedupe)
    implications = _implications(parsed)
    out: List[Application] = []
    for i, (first, first_node) in enumerate(implications):
        for j, (second, second_node) in enumerate(implications):
            if i != j and first_node.right == second_node.left:
                out.append(Application(
                    InferenceRule.HYPOTHETICAL_SYLLOGISM,
                    (first, second),
                    tree_to_formula(impl(first_node.left, second_node.right)),
                ))
    return out


def _disjunctive_syllogism(known: Iterable[Formula], dedupe: bool = True) -> List[Application]:
    """{(A∨B), ¬A} ⊢ B and {(A∨B), ¬B} ⊢ A"""
    parsed, seen = _index(known, dedupe)
    out: List[Application] = []
    for formula, node in parsed:
        if not is_disjunction(node):
            continue
        for denied, remaining in ((node.left, node.right), (node.right, node.left)):
            denial = seen.get(tree_to_formula(neg(denied)))
            if denial is not None:
                out.append(Application(
                    InferenceRule.DISJUNCTIVE_SYLLOGISM,
                    (formula, denial),
                    tree_to_formula(remaining),
                ))
    return out


def _constructive_dilemma(known: Iterable[Formula], dedupe: bool = True) -> List[Application]:
    """
    {((A→B)∧(C→D)), (A∨C)} ⊢ (B∨D)

    The two implications may also be known only as separate formulas, in
    which case the application consumes both of them plus the disjunction.
    """
    parsed, _ = _index(known, dedupe)
    disjunctions = [(formula, node) for formula, node in parsed if is_disjunction(node)]
    out: List[Application] = []
    if not disjunctions:
        return out

    for formula, node in parsed:
        if not (is_conjunction(node) and is_implication(node.left) and is_implication(node.right)):
            continue
        for disjunction, disj_node in disjunctions:
            if disj_node.left == node.left.left and disj_node.right == node.right.left:
                out.append(Application(
                    InferenceRule.CONSTRUCTIVE_DILEMMA,
                    (formula, disjunction),
                    tree_to_formula(disj(node.left.right, node.right.right)),
                ))

    implications = _implications(parsed)
    for i, (first, first_node) in enumerate(implications):
        for j, (second, second_node) in enumerate(implications):
            if i == j:
                continue
            for disjunction, disj_node in disjunctions:
                if disj_node.left == first_node.left and disj_node.right == second_node.left:
                    out.append(Application(
                        InferenceRule.CONSTRUCTIVE_DILEMMA,
                        (first, second, disjunction),
                        tree_to_formula(disj(first_node.right, second_node.right)),
                    ))
    return out


def _absorption(known: Iterable[Formula], dedupe: bool = True) -> List[Application]:
    """{(A→B)} ⊢ (A→(A∧B))"""
    parsed, _ = _index(known, dedupe)
    return [
        Application(
            InferenceRule.ABSORPTION,
            (formula,),
            tree_to_formula(impl(node.left, conj(node.left, node.right))),
        )
        for formula, node in _implications(parsed)
    ]


def _simplification(known: Iterable[Formula], dedupe: bool = True) -> List[Application]:
    """{(A∧B)} ⊢ A and B"""
    parsed, _ = _index(known, dedupe)
    out: List[Application] = []
    for formula, node in parsed:
        if is_conjunction(node):
            for part in (node.left, node.right):
                out.append(Application(
                    InferenceRule.SIMPLIFICATION, (formula,), tree_to_formula(part)
                ))
    return out


def _conjunction(known: Iterable[Formula], dedupe: bool = True) -> List[Application]:
    """{A, B} ⊢ (A∧B), offered in both orders"""
    parsed, _ = _index(known, dedupe)
    out: List[Application] = []
    for i, (first, first_node) in enumerate(parsed):
        for j, (second, second_node) in enumerate(parsed):
            if i != j:
                out.append(Application(
                    InferenceRule.CONJUNCTION,
                    (first, second),
                    tree_to_formula(conj(first_node, second_node)),
                ))
    return out


def _addition(known: Iterable[Formula], dedupe: bool = True) -> List[Application]:
    """{A} with any other known X ⊢ (A∨X) and (X∨A)"""
    parsed, _ = _index(known, dedupe)
    out: List[Application] = []
    for i, (base, base_node) in enumerate(parsed):
        for j, (other, other_node) in enumerate(parsed):
            if i == j:
                continue
            for result in (disj(base_node, other_node), disj(other_node, base_node)):
                out.append(Application(
                    InferenceRule.ADDITION, (base, other), tree_to_formula(result)
                ))
    return out


_RULE_PATTERNS: Dict[InferenceRule, Callable[..., List[Application]]] = {
    InferenceRule.MODUS_PONENS: _modus_ponens,
    InferenceRule.MODUS_TOLLENS: _modus_tollens,
    InferenceRule.HYPOTHETICAL_SYLLOGISM: _hypothetical_syllogism,
    InferenceRule.DISJUNCTIVE_SYLLOGISM: _disjunctive_syllogism,
    InferenceRule.CONSTRUCTIVE_DILEMMA: _constructive_dilemma,
    InferenceRule.ABSORPTION: _absorption,
    InferenceRule.SIMPLIFICATION: _simplification,
    InferenceRule.CONJUNCTION: _conjunction,
    InferenceRule.ADDITION: _addition,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_possible_applications(rule: InferenceRule, known: Iterable[Formula]) -> List[Application]:
    """All applications of ``rule`` over ``known``, one per distinct conclusion."""
    seen = set()
    unique: List[Application] = []
    for application in _RULE_PATTERNS[rule](list(known)):
        if application.conclusion not in seen:
            seen.add(application.conclusion)
            unique.append(application)
    return unique


def get_possible_conclusions(rule: InferenceRule, known: Iterable[Formula]) -> List[Formula]:
    return [application.conclusion for application in get_possible_applications(rule, known)]


def can_apply(rule: InferenceRule, known: Iterable[Formula]) -> bool:
    return bool(_RULE_PATTERNS[rule](list(known)))


def all_applications(known: Iterable[Formula]) -> List[Application]:
    """Applications of every rule, in catalog order."""
    known = list(known)
    out: List[Application] = []
    for rule in InferenceRule:
        out.extend(get_possible_applications(rule, known))
    return out


def matching_applications(
    rule: InferenceRule,
    premises: Sequence[Formula],
    conclusion: Formula,
) -> List[Application]:
    """
    Applications that consume exactly ``premises`` (in any order) and yield ``conclusion``.

    Each entry of ``premises`` counts once, so a formula cited on two lines
    (or one line cited twice) can fill both slots of a rule.

    Addition from a single premise is matched by shape, since its second
    disjunct may be any formula at all.
    """
    if any(premise.node is None for premise in premises) or conclusion.node is None:
        return []
    if rule is InferenceRule.ADDITION and len(premises) == 1:
        node = conclusion.node
        base = premises[0]
        if is_disjunction(node) and base in (tree_to_formula(node.left), tree_to_formula(node.right)):
            return [Application(rule, (base,), conclusion)]
        return []

    wanted = sorted(premise.key for premise in premises)
    return [
        application
        for application in _RULE_PATTERNS[rule](premises, dedupe=False)
        if application.conclusion == conclusion
        and sorted(p.key for p in application.premises) == wanted
    ]


def is_valid_inference(
    rule: InferenceRule,
    premises: Sequence[Formula],
    conclusion: Formula,
) -> bool:
    """True when ``conclusion`` follows from ``premises`` by one application of ``rule``."""
    return bool(matching_applications(rule, premises, conclusion))


__all__ = [
    "Application",
    "get_possible_applications",
    "get_possible_conclusions",
    "can_apply",
    "all_applications",
    "matching_applications",
    "is_valid_inference",
]
