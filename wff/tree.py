"""
Expression trees for well-formed formulas.

FormulaNode is a closed sum of three frozen node types. Every consumer
dispatches with isinstance over exactly these variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Union

from wff.tiles import AND, IFF, IMPLIES, LEFT_PAREN, NOT, OR, RIGHT_PAREN, Tile, variable


@dataclass(frozen=True, slots=True)
class Variable:
    """Propositional variable."""
    name: str


@dataclass(frozen=True, slots=True)
class Unary:
    """Unary operator applied to a subtree (only negation exists)."""
    op: Tile
    child: "FormulaNode"


@dataclass(frozen=True, slots=True)
class Binary:
    """Binary connective joining two subtrees."""
    op: Tile
    left: "FormulaNode"
    right: "FormulaNode"


FormulaNode = Union[Variable, Unary, Binary]


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def var(name: str) -> Variable:
    variable(name)  # validates the name
    return Variable(name)


def neg(child: FormulaNode) -> Unary:
    return Unary(NOT, child)


def conj(left: FormulaNode, right: FormulaNode) -> Binary:
    return Binary(AND, left, right)


def disj(left: FormulaNode, right: FormulaNode) -> Binary:
    return Binary(OR, left, right)


def impl(left: FormulaNode, right: FormulaNode) -> Binary:
    return Binary(IMPLIES, left, right)


def iff(left: FormulaNode, right: FormulaNode) -> Binary:
    return Binary(IFF, left, right)


# ---------------------------------------------------------------------------
# Shape predicates
# ---------------------------------------------------------------------------

def is_negation(node: FormulaNode) -> bool:
    return isinstance(node, Unary) and node.op == NOT


def is_conjunction(node: FormulaNode) -> bool:
    return isinstance(node, Binary) and node.op == AND


def is_disjunction(node: FormulaNode) -> bool:
    return isinstance(node, Binary) and node.op == OR


def is_implication(node: FormulaNode) -> bool:
    return isinstance(node, Binary) and node.op == IMPLIES


def is_biconditional(node: FormulaNode) -> bool:
    return isinstance(node, Binary) and node.op == IFF


# ---------------------------------------------------------------------------
# Traversal and rendering
# ---------------------------------------------------------------------------

def subtrees(node: FormulaNode) -> Iterator[FormulaNode]:
    """Yield the node and all of its descendants, pre-order."""
    yield node
    if isinstance(node, Unary):
        yield from subtrees(node.child)
    elif isinstance(node, Binary):
        yield from subtrees(node.left)
        yield from subtrees(node.right)


def atoms(node: FormulaNode) -> FrozenSet[str]:
    return frozenset(n.name for n in subtrees(node) if isinstance(n, Variable))


def depth(node: FormulaNode) -> int:
    """Connective nesting depth; a variable has depth 0."""
    if isinstance(node, Variable):
        return 0
    if isinstance(node, Unary):
        return 1 + depth(node.child)
    return 1 + max(depth(node.left), depth(node.right))


def render_tiles(node: FormulaNode) -> List[Tile]:
    """
    Fully parenthesized token form.

    Every binary node is wrapped in parentheses, the outermost one included;
    negation is a bare prefix.
    """
    if isinstance(node, Variable):
        return [variable(node.name)]
    if isinstance(node, Unary):
        return [node.op] + render_tiles(node.child)
    if isinstance(node, Binary):
        return (
            [LEFT_PAREN]
            + render_tiles(node.left)
            + [node.op]
            + render_tiles(node.right)
            + [RIGHT_PAREN]
        )
    raise TypeError(f"Unknown formula node: {type(node)}")


def render(node: FormulaNode) -> str:
    return "".join(tile.symbol for tile in render_tiles(node))


__all__ = [
    "Variable",
    "Unary",
    "Binary",
    "FormulaNode",
    "var",
    "neg",
    "conj",
    "disj",
    "impl",
    "iff",
    "is_negation",
    "is_conjunction",
    "is_disjunction",
    "is_implication",
    "is_biconditional",
    "subtrees",
    "atoms",
    "depth",
    "render_tiles",
    "render",
]
