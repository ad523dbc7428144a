"""
Formula values: tile sequences with normalized equality.

Two formulas are equal iff their parsed trees are structurally equal, so
``p∨q`` and ``(p∨q)`` compare equal. Formulas that do not parse fall back
to raw token comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional, Tuple, Union

from wff.parser import parse_text, parse_tiles
from wff.tiles import Tile, tokenize
from wff.tree import (
    FormulaNode,
    conj,
    disj,
    iff,
    impl,
    neg,
    render,
    render_tiles,
)


@dataclass(frozen=True, slots=True, eq=False)
class Formula:
    """Ordered sequence of tiles (surface syntax)."""

    tiles: Tuple[Tile, ...]

    @classmethod
    def from_string(cls, text: str) -> "Formula":
        """Build from text, accepting ASCII spellings. Raises ValueError on unknown characters."""
        return cls(tuple(tokenize(text)))

    @classmethod
    def of(cls, tiles: Iterable[Tile]) -> "Formula":
        return cls(tuple(tiles))

    @property
    def text(self) -> str:
        return "".join(tile.symbol for tile in self.tiles)

    @property
    def node(self) -> Optional[FormulaNode]:
        return parse_tiles(self.tiles)

    @property
    def is_wff(self) -> bool:
        return self.node is not None

    @property
    def key(self) -> str:
        """Canonical identity: rendered parse tree, or raw text when not a WFF."""
        return _canonical_key(self.tiles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Formula):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Formula({self.text!r})"

    def __len__(self) -> int:
        return len(self.tiles)


FormulaLike = Union[Formula, FormulaNode]


@lru_cache(maxsize=16384)
def _canonical_key(tiles: Tuple[Tile, ...]) -> str:
    node = parse_tiles(tiles)
    if node is None:
        return "!" + "".join(tile.symbol for tile in tiles)
    return render(node)


# ---------------------------------------------------------------------------
# WffParser entry points
# ---------------------------------------------------------------------------

def parse(formula: Formula) -> Optional[FormulaNode]:
    """Parse a formula into its tree; ``None`` when it is not a WFF."""
    return formula.node


def tree_to_formula(node: FormulaNode) -> Formula:
    """Serialize a tree to fully parenthesized canonical form."""
    return Formula(tuple(render_tiles(node)))


def f(text: str) -> Formula:
    """Shorthand for ``Formula.from_string``."""
    return Formula.from_string(text)


def parse_string(text: str) -> Optional[FormulaNode]:
    """Parse raw text; tokenizer errors and parse failures both give None."""
    return parse_text(text)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def _node(value: FormulaLike) -> FormulaNode:
    if isinstance(value, Formula):
        node = value.node
        if node is None:
            raise ValueError(f"Not a well-formed formula: {value.text!r}")
        return node
    return value


def f_neg(a: FormulaLike) -> Formula:
    return tree_to_formula(neg(_node(a)))


def f_and(a: FormulaLike, b: FormulaLike) -> Formula:
    return tree_to_formula(conj(_node(a), _node(b)))


def f_or(a: FormulaLike, b: FormulaLike) -> Formula:
    return tree_to_formula(disj(_node(a), _node(b)))


def f_implies(a: FormulaLike, b: FormulaLike) -> Formula:
    return tree_to_formula(impl(_node(a), _node(b)))


def f_iff(a: FormulaLike, b: FormulaLike) -> Formula:
    return tree_to_formula(iff(_node(a), _node(b)))


def canonical(formula: Formula) -> Formula:
    """Re-render a WFF in fully parenthesized form."""
    return tree_to_formula(_node(formula))


__all__ = [
    "Formula",
    "FormulaLike",
    "parse",
    "tree_to_formula",
    "f",
    "parse_string",
    "f_neg",
    "f_and",
    "f_or",
    "f_implies",
    "f_iff",
    "canonical",
]
