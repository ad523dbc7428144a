"""
Structural utilities for formulas.

Helpers operate on parsed trees and stay deterministic so callers can
safely memoise results.
"""

from __future__ import annotations

from functools import lru_cache
from typing import FrozenSet, List, Optional, Tuple

from wff.formula import Formula, tree_to_formula
from wff.tree import (
    Binary,
    FormulaNode,
    Unary,
    Variable,
    atoms,
    depth,
    is_negation,
    neg,
    subtrees,
)


@lru_cache(maxsize=8192)
def _assertions(node: FormulaNode) -> Tuple[FormulaNode, ...]:
    found: List[FormulaNode] = []

    def visit(current: FormulaNode) -> None:
        if isinstance(current, Variable):
            found.append(current)
        elif isinstance(current, Unary):
            if isinstance(current.child, Variable):
                found.append(current)
            else:
                visit(current.child)
        elif isinstance(current, Binary):
            visit(current.left)
            visit(current.right)

    visit(node)
    return tuple(dict.fromkeys(found))


def get_atomic_assertions(formula: Formula) -> List[Formula]:
    """
    Literals asserted anywhere in a formula.

    Every variable occurrence counts, negated iff its direct parent is a
    negation: ``(¬p∧q)∨r`` gives [¬p, q, r] and ``¬(p∧q)`` gives [p, q].
    Non-WFFs assert nothing.
    """
    node = formula.node
    if node is None:
        return []
    return [tree_to_formula(literal) for literal in _assertions(node)]


def get_base_variable(formula: Formula) -> Optional[Formula]:
    """Variable under any number of leading negations, or None for compound formulas."""
    node = formula.node
    while node is not None and is_negation(node):
        node = node.child
    if isinstance(node, Variable):
        return tree_to_formula(node)
    return None


def is_literal(formula: Formula) -> bool:
    node = formula.node
    return isinstance(node, Variable) or (
        isinstance(node, Unary) and isinstance(node.child, Variable)
    )


def negation_of(formula: Formula) -> Formula:
    node = formula.node
    if node is None:
        raise ValueError(f"Not a well-formed formula: {formula.text!r}")
    return tree_to_formula(neg(node))


def find_contradiction(formulas: List[Formula]) -> Optional[Formula]:
    """
    Scan the combined literal set of ``formulas`` for some X alongside ¬X.

    Returns the offending positive literal, or None when the set is consistent.
    """
    literals = set()
    for formula in formulas:
        literals.update(get_atomic_assertions(formula))
    for literal in sorted(literals, key=lambda item: item.text):
        node = literal.node
        if isinstance(node, Variable) and negation_of(literal) in literals:
            return literal
    return None


def subformulas(formula: Formula) -> FrozenSet[Formula]:
    node = formula.node
    if node is None:
        return frozenset()
    return frozenset(tree_to_formula(sub) for sub in subtrees(node))


def formula_depth(formula: Formula) -> int:
    node = formula.node
    return depth(node) if node is not None else 0


def atom_frozenset(formula: Formula) -> FrozenSet[str]:
    node = formula.node
    return atoms(node) if node is not None else frozenset()


__all__ = [
    "get_atomic_assertions",
    "get_base_variable",
    "is_literal",
    "negation_of",
    "find_contradiction",
    "subformulas",
    "formula_depth",
    "atom_frozenset",
]
