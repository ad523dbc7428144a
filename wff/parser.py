"""
Recursive-descent WFF parser over tile sequences.

Grammar (lowest precedence first)::

    iff      := implies ("↔" implies)*
    implies  := or ("→" implies)?          right-associative
    or       := and ("∨" and)*
    and      := unary ("∧" unary)*
    unary    := "¬" unary | primary
    primary  := VARIABLE | "(" iff ")"

A failed parse is reported as ``None``; callers treat "no parse" as the
normal failure channel.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional, Sequence, Tuple

from wff.tiles import AND, IFF, IMPLIES, NOT, OR, SymbolType, Tile, tokenize
from wff.tree import Binary, FormulaNode, Unary, Variable


class _Parser:
    """Single-use cursor over a tile sequence. Raises ValueError on bad input."""

    def __init__(self, tiles: Sequence[Tile]):
        self.tiles = tiles
        self.pos = 0

    def current(self) -> Optional[Tile]:
        if self.pos < len(self.tiles):
            return self.tiles[self.pos]
        return None

    def consume(self, kind: SymbolType) -> Tile:
        tile = self.current()
        if tile is None or tile.kind != kind:
            found = "end of input" if tile is None else repr(tile.symbol)
            raise ValueError(f"Expected {kind.name}, got {found} at position {self.pos}")
        self.pos += 1
        return tile

    def at(self, op: Tile) -> bool:
        return self.current() == op

    def parse(self) -> FormulaNode:
        if not self.tiles:
            raise ValueError("Empty formula")
        node = self.parse_iff()
        if self.pos != len(self.tiles):
            raise ValueError(f"Unexpected trailing token at position {self.pos}")
        return node

    def parse_iff(self) -> FormulaNode:
        left = self.parse_implies()
        while self.at(IFF):
            self.pos += 1
            left = Binary(IFF, left, self.parse_implies())
        return left

    def parse_implies(self) -> FormulaNode:
        left = self.parse_or()
        if self.at(IMPLIES):
            self.pos += 1
            return Binary(IMPLIES, left, self.parse_implies())
        return left

    def parse_or(self) -> FormulaNode:
        left = self.parse_and()
        while self.at(OR):
            self.pos += 1
            left = Binary(OR, left, self.parse_and())
        return left

    def parse_and(self) -> FormulaNode:
        left = self.parse_unary()
        while self.at(AND):
            self.pos += 1
            left = Binary(AND, left, self.parse_unary())
        return left

    def parse_unary(self) -> FormulaNode:
        if self.at(NOT):
            self.pos += 1
            return Unary(NOT, self.parse_unary())
        return self.parse_primary()

    def parse_primary(self) -> FormulaNode:
        tile = self.current()
        if tile is not None and tile.kind == SymbolType.VARIABLE:
            self.pos += 1
            return Variable(tile.symbol)
        if tile is not None and tile.kind == SymbolType.LEFT_PAREN:
            self.pos += 1
            node = self.parse_iff()
            self.consume(SymbolType.RIGHT_PAREN)
            return node
        found = "end of input" if tile is None else repr(tile.symbol)
        raise ValueError(f"Expected operand, got {found} at position {self.pos}")


@lru_cache(maxsize=16384)
def parse_tiles(tiles: Tuple[Tile, ...]) -> Optional[FormulaNode]:
    """Parse a tile tuple into a tree, or return None if it is not a WFF."""
    try:
        return _Parser(tiles).parse()
    except ValueError:
        return None


def parse_text(text: str) -> Optional[FormulaNode]:
    """Tokenize and parse a string; unknown characters also yield None."""
    try:
        tiles = tokenize(text)
    except ValueError:
        return None
    return parse_tiles(tuple(tiles))


__all__ = [
    "parse_tiles",
    "parse_text",
]
