"""Well-formed formulas: tiles, trees, parsing and structure."""

from wff.formula import (
    Formula,
    f,
    f_and,
    f_iff,
    f_implies,
    f_neg,
    f_or,
    parse,
    parse_string,
    tree_to_formula,
)
from wff.structure import get_atomic_assertions, get_base_variable
from wff.tiles import SymbolType, Tile
from wff.tree import Binary, FormulaNode, Unary, Variable

__all__ = [
    "Formula",
    "f",
    "f_and",
    "f_iff",
    "f_implies",
    "f_neg",
    "f_or",
    "parse",
    "parse_string",
    "tree_to_formula",
    "get_atomic_assertions",
    "get_base_variable",
    "SymbolType",
    "Tile",
    "Binary",
    "FormulaNode",
    "Unary",
    "Variable",
]
