"""
Variable allocator with a contradiction guard.

VarLists partitions the variable alphabet into ``available`` and ``used``
buckets. A variable, once committed with one polarity, can never be
committed with the opposite polarity. Each generation attempt owns one
instance; nothing here is shared or global.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from wff.formula import Formula, tree_to_formula
from wff.structure import get_atomic_assertions, get_base_variable, negation_of
from wff.tiles import PROBLEM_VARIABLE_NAMES
from wff.tree import Variable, is_negation


@dataclass
class VarLists:
    available: List[Formula] = field(default_factory=list)
    used: List[Formula] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        rng: Optional[random.Random] = None,
        names: Sequence[str] = PROBLEM_VARIABLE_NAMES,
    ) -> "VarLists":
        """Fresh allocator over ``names``, shuffled by ``rng`` when one is given."""
        available = [tree_to_formula(Variable(name)) for name in names]
        if rng is not None:
            rng.shuffle(available)
        return cls(available=available, used=[])

    def copy(self) -> "VarLists":
        return VarLists(available=list(self.available), used=list(self.used))

    def commit(self, other: "VarLists") -> None:
        """Adopt the buckets of a working copy once its step has succeeded."""
        self.available = list(other.available)
        self.used = list(other.used)

    def draw_fresh(self) -> Optional[Formula]:
        """
        Next available variable, not yet committed.

        The caller commits it through ``use_atomic_assertion`` once it knows
        the polarity it needs.
        """
        return self.available[0] if self.available else None

    def use_atomic_assertion(self, literal: Formula) -> Optional[Formula]:
        """
        Commit a literal (a variable under zero or more negations).

        The polarity follows the parity of the negations, so ``¬¬p`` commits
        ``p``. Returns the committed literal when it is new or already
        committed with the same polarity; returns None on an opposite-polarity
        clash, for non-literals, and for variables outside the alphabet.
        """
        base = get_base_variable(literal)
        if base is None:
            return None
        node = literal.node
        negations = 0
        while is_negation(node):
            negations += 1
            node = node.child
        positive = negations % 2 == 0
        normalized = base if positive else negation_of(base)

        if normalized in self.used:
            return normalized
        opposite = negation_of(base) if positive else base
        if opposite in self.used:
            return None
        if base in self.available:
            self.available.remove(base)
            self.used.append(normalized)
            return normalized
        return None

    def use_all(self, formulas: Iterable[Formula]) -> bool:
        """Commit every atomic assertion of ``formulas``; False on the first clash."""
        for formula in formulas:
            for literal in get_atomic_assertions(formula):
                if self.use_atomic_assertion(literal) is None:
                    return False
        return True

    def is_used(self, variable_formula: Formula) -> bool:
        base = get_base_variable(variable_formula)
        if base is None:
            return False
        return base in self.used or negation_of(base) in self.used


__all__ = ["VarLists"]
