"""
Rules of replacement: equivalence rewrites applicable to any subformula.

``rewrites(rule, node)`` enumerates every tree obtainable by rewriting
exactly one subtree of ``node`` with an equivalent form, in either
direction of the equivalence.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from derivation.rules import ReplacementRule
from wff.formula import Formula, tree_to_formula
from wff.tree import (
    Binary,
    FormulaNode,
    Unary,
    conj,
    disj,
    iff,
    impl,
    is_biconditional,
    is_conjunction,
    is_disjunction,
    is_implication,
    is_negation,
    neg,
)


def _de_morgan(node: FormulaNode) -> List[FormulaNode]:
    out: List[FormulaNode] = []
    if is_negation(node) and is_conjunction(node.child):
        out.append(disj(neg(node.child.left), neg(node.child.right)))
    if is_negation(node) and is_disjunction(node.child):
        out.append(conj(neg(node.child.left), neg(node.child.right)))
    if is_disjunction(node) and is_negation(node.left) and is_negation(node.right):
        out.append(neg(conj(node.left.child, node.right.child)))
    if is_conjunction(node) and is_negation(node.left) and is_negation(node.right):
        out.append(neg(disj(node.left.child, node.right.child)))
    return out


def _commutation(node: FormulaNode) -> List[FormulaNode]:
    if is_conjunction(node) or is_disjunction(node):
        return [Binary(node.op, node.right, node.left)]
    return []


def _association(node: FormulaNode) -> List[FormulaNode]:
    out: List[FormulaNode] = []
    if not (is_conjunction(node) or is_disjunction(node)):
        return out
    op = node.op
    if isinstance(node.right, Binary) and node.right.op == op:
        # p·(q·r) ⇒ (p·q)·r
        out.append(Binary(op, Binary(op, node.left, node.right.left), node.right.right))
    if isinstance(node.left, Binary) and node.left.op == op:
        # (p·q)·r ⇒ p·(q·r)
        out.append(Binary(op, node.left.left, Binary(op, node.left.right, node.right)))
    return out


def _distribution(node: FormulaNode) -> List[FormulaNode]:
    out: List[FormulaNode] = []
    if is_conjunction(node) and is_disjunction(node.right):
        p, q, r = node.left, node.right.left, node.right.right
        out.append(disj(conj(p, q), conj(p, r)))
    if is_disjunction(node) and is_conjunction(node.right):
        p, q, r = node.left, node.right.left, node.right.right
        out.append(conj(disj(p, q), disj(p, r)))
    if (
        is_disjunction(node)
        and is_conjunction(node.left)
        and is_conjunction(node.right)
        and node.left.left == node.right.left
    ):
        out.append(conj(node.left.left, disj(node.left.right, node.right.right)))
    if (
        is_conjunction(node)
        and is_disjunction(node.left)
        and is_disjunction(node.right)
        and node.left.left == node.right.left
    ):
        out.append(disj(node.left.left, conj(node.left.right, node.right.right)))
    return out


def _double_negation(node: FormulaNode) -> List[FormulaNode]:
    out: List[FormulaNode] = [neg(neg(node))]
    if is_negation(node) and is_negation(node.child):
        out.append(node.child.child)
    return out


def _transposition(node: FormulaNode) -> List[FormulaNode]:
    out: List[FormulaNode] = []
    if is_implication(node):
        out.append(impl(neg(node.right), neg(node.left)))
        if is_negation(node.left) and is_negation(node.right):
            out.append(impl(node.right.child, node.left.child))
    return out


def _material_implication(node: FormulaNode) -> List[FormulaNode]:
    out: List[FormulaNode] = []
    if is_implication(node):
        out.append(disj(neg(node.left), node.right))
    if is_disjunction(node) and is_negation(node.left):
        out.append(impl(node.left.child, node.right))
    return out


def _material_equivalence(node: FormulaNode) -> List[FormulaNode]:
    out: List[FormulaNode] = []
    if is_biconditional(node):
        p, q = node.left, node.right
        out.append(conj(impl(p, q), impl(q, p)))
        out.append(disj(conj(p, q), conj(neg(p), neg(q))))
        return out
    if (
        is_conjunction(node)
        and is_implication(node.left)
        and is_implication(node.right)
        and node.left.left == node.right.right
        and node.left.right == node.right.left
    ):
        out.append(iff(node.left.left, node.left.right))
    if (
        is_disjunction(node)
        and is_conjunction(node.left)
        and is_conjunction(node.right)
        and node.right.left == neg(node.left.left)
        and node.right.right == neg(node.left.right)
    ):
        out.append(iff(node.left.left, node.left.right))
    return out


def _exportation(node: FormulaNode) -> List[FormulaNode]:
    out: List[FormulaNode] = []
    if is_implication(node) and is_conjunction(node.left):
        out.append(impl(node.left.left, impl(node.left.right, node.right)))
    if is_implication(node) and is_implication(node.right):
        out.append(impl(conj(node.left, node.right.left), node.right.right))
    return out


def _tautology(node: FormulaNode) -> List[FormulaNode]:
    out: List[FormulaNode] = [conj(node, node), disj(node, node)]
    if (is_conjunction(node) or is_disjunction(node)) and node.left == node.right:
        out.append(node.left)
    return out


_REWRITERS: Dict[ReplacementRule, Callable[[FormulaNode], List[FormulaNode]]] = {
    ReplacementRule.DE_MORGANS_THEOREM: _de_morgan,
    ReplacementRule.COMMUTATION: _commutation,
    ReplacementRule.ASSOCIATION: _association,
    ReplacementRule.DISTRIBUTION: _distribution,
    ReplacementRule.DOUBLE_NEGATION: _double_negation,
    ReplacementRule.TRANSPOSITION: _transposition,
    ReplacementRule.MATERIAL_IMPLICATION: _material_implication,
    ReplacementRule.MATERIAL_EQUIVALENCE: _material_equivalence,
    ReplacementRule.EXPORTATION: _exportation,
    ReplacementRule.TAUTOLOGY: _tautology,
}


def rewrite_root(rule: ReplacementRule, node: FormulaNode) -> List[FormulaNode]:
    """Equivalent forms of ``node`` itself under ``rule``."""
    return _REWRITERS[rule](node)


def rewrites(rule: ReplacementRule, node: FormulaNode) -> List[FormulaNode]:
    """Every tree reachable by rewriting exactly one subtree of ``node``."""
    out: List[FormulaNode] = list(rewrite_root(rule, node))
    if isinstance(node, Unary):
        out.extend(Unary(node.op, child) for child in rewrites(rule, node.child))
    elif isinstance(node, Binary):
        out.extend(Binary(node.op, left, node.right) for left in rewrites(rule, node.left))
        out.extend(Binary(node.op, node.left, right) for right in rewrites(rule, node.right))
    unique: Dict[FormulaNode, None] = dict.fromkeys(out)
    return list(unique)


def get_possible_replacements(rule: ReplacementRule, formula: Formula) -> List[Formula]:
    node = formula.node
    if node is None:
        return []
    return [tree_to_formula(result) for result in rewrites(rule, node)]


def is_valid_replacement(rule: ReplacementRule, source: Formula, target: Formula) -> bool:
    """True when ``target`` is ``source`` with one subtree rewritten under ``rule``."""
    source_node, target_node = source.node, target.node
    if source_node is None or target_node is None:
        return False
    return target_node in rewrites(rule, source_node)


__all__ = [
    "rewrite_root",
    "rewrites",
    "get_possible_replacements",
    "is_valid_replacement",
]
