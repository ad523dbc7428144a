"""
Tile alphabet for propositional formulas.

A formula is an ordered sequence of tiles. Each tile carries its display
symbol and its syntactic kind; tiles are immutable and shared.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Tuple


class SymbolType(Enum):
    """Syntactic kind of a tile."""
    VARIABLE = auto()
    UNARY_OPERATOR = auto()
    BINARY_OPERATOR = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()


@dataclass(frozen=True, slots=True)
class Tile:
    symbol: str
    kind: SymbolType

    def __str__(self) -> str:
        return self.symbol


# ---------------------------------------------------------------------------
# Canonical alphabet
# ---------------------------------------------------------------------------

NOT = Tile("¬", SymbolType.UNARY_OPERATOR)
AND = Tile("∧", SymbolType.BINARY_OPERATOR)
OR = Tile("∨", SymbolType.BINARY_OPERATOR)
IMPLIES = Tile("→", SymbolType.BINARY_OPERATOR)
IFF = Tile("↔", SymbolType.BINARY_OPERATOR)
LEFT_PAREN = Tile("(", SymbolType.LEFT_PAREN)
RIGHT_PAREN = Tile(")", SymbolType.RIGHT_PAREN)

VARIABLE_NAMES: Tuple[str, ...] = tuple("abcdefghijklmnopqrstuvwxyz")
PROBLEM_VARIABLE_NAMES: Tuple[str, ...] = ("p", "q", "r", "s", "t", "u", "v", "w")

OPERATORS: Tuple[Tile, ...] = (NOT, AND, OR, IMPLIES, IFF)
BINARY_OPERATORS: Tuple[Tile, ...] = (AND, OR, IMPLIES, IFF)

_VARIABLES: Dict[str, Tile] = {
    name: Tile(name, SymbolType.VARIABLE) for name in VARIABLE_NAMES
}

_BY_SYMBOL: Dict[str, Tile] = {
    tile.symbol: tile for tile in (*OPERATORS, LEFT_PAREN, RIGHT_PAREN)
}
_BY_SYMBOL.update(_VARIABLES)


def variable(name: str) -> Tile:
    """Return the shared tile for a single-letter lowercase variable."""
    try:
        return _VARIABLES[name]
    except KeyError:
        raise ValueError(f"Not a variable name: {name!r}") from None


def tile_for(symbol: str) -> Tile:
    """Look up a tile by its canonical symbol."""
    try:
        return _BY_SYMBOL[symbol]
    except KeyError:
        raise ValueError(f"Unknown symbol: {symbol!r}") from None


def available_tiles(variables: Tuple[str, ...] = PROBLEM_VARIABLE_NAMES) -> List[Tile]:
    """Tiles offered to a user building formulas: variables, operators, parens."""
    return [variable(name) for name in variables] + list(OPERATORS) + [LEFT_PAREN, RIGHT_PAREN]


# ---------------------------------------------------------------------------
# ASCII front-end
# ---------------------------------------------------------------------------

# Longest spellings first so "<->" wins over "->".
_ASCII_MAP = (
    ("<->", "↔"),
    ("<=>", "↔"),
    ("->", "→"),
    ("=>", "→"),
    ("~", "¬"),
    ("!", "¬"),
    ("&", "∧"),
    ("/\\", "∧"),
    ("\\/", "∨"),
    ("|", "∨"),
    ("⇔", "↔"),
    ("⇒", "→"),
    ("⋀", "∧"),
    ("⋁", "∨"),
)


def to_canonical_symbols(text: str) -> str:
    """Map ASCII and alternate Unicode spellings onto the canonical alphabet."""
    for spelling, symbol in _ASCII_MAP:
        if spelling in text:
            text = text.replace(spelling, symbol)
    return text


def tokenize(text: str) -> List[Tile]:
    """
    Convert a formula string into tiles.

    Whitespace is skipped. Raises ValueError at the first character that is
    not part of the alphabet.
    """
    tiles: List[Tile] = []
    for pos, char in enumerate(to_canonical_symbols(text)):
        if char.isspace():
            continue
        tile = _BY_SYMBOL.get(char)
        if tile is None:
            raise ValueError(f"Unexpected character at position {pos}: {char!r}")
        tiles.append(tile)
    return tiles


__all__ = [
    "SymbolType",
    "Tile",
    "NOT",
    "AND",
    "OR",
    "IMPLIES",
    "IFF",
    "LEFT_PAREN",
    "RIGHT_PAREN",
    "VARIABLE_NAMES",
    "PROBLEM_VARIABLE_NAMES",
    "OPERATORS",
    "BINARY_OPERATORS",
    "variable",
    "tile_for",
    "available_tiles",
    "to_canonical_symbols",
    "tokenize",
]
