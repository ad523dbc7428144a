"""
Tests for the rules of replacement.
"""

import pytest

from derivation.replacement import get_possible_replacements, is_valid_replacement, rewrite_root
from derivation.rules import ReplacementRule as R


class TestEquivalences:
    """Each equivalence holds in both directions."""

    @pytest.mark.parametrize(
        "rule, left, right",
        [
            (R.DE_MORGANS_THEOREM, "¬(p∧q)", "(¬p∨¬q)"),
            (R.DE_MORGANS_THEOREM, "¬(p∨q)", "(¬p∧¬q)"),
            (R.COMMUTATION, "(p∧q)", "(q∧p)"),
            (R.COMMUTATION, "(p∨q)", "(q∨p)"),
            (R.ASSOCIATION, "(p∨(q∨r))", "((p∨q)∨r)"),
            (R.ASSOCIATION, "(p∧(q∧r))", "((p∧q)∧r)"),
            (R.DISTRIBUTION, "(p∧(q∨r))", "((p∧q)∨(p∧r))"),
            (R.DISTRIBUTION, "(p∨(q∧r))", "((p∨q)∧(p∨r))"),
            (R.DOUBLE_NEGATION, "p", "¬¬p"),
            (R.TRANSPOSITION, "(p→q)", "(¬q→¬p)"),
            (R.MATERIAL_IMPLICATION, "(p→q)", "(¬p∨q)"),
            (R.MATERIAL_EQUIVALENCE, "(p↔q)", "((p→q)∧(q→p))"),
            (R.MATERIAL_EQUIVALENCE, "(p↔q)", "((p∧q)∨(¬p∧¬q))"),
            (R.EXPORTATION, "((p∧q)→r)", "(p→(q→r))"),
            (R.TAUTOLOGY, "p", "(p∧p)"),
            (R.TAUTOLOGY, "p", "(p∨p)"),
        ],
    )
    def test_both_directions(self, rule, left, right, f):
        assert is_valid_replacement(rule, f(left), f(right))
        assert is_valid_replacement(rule, f(right), f(left))

    def test_commutation_does_not_apply_to_implication(self, f):
        assert not is_valid_replacement(R.COMMUTATION, f("(p→q)"), f("(q→p)"))

    def test_de_morgan_keeps_operator_pairing(self, f):
        assert not is_valid_replacement(R.DE_MORGANS_THEOREM, f("¬(p∧q)"), f("(¬p∧¬q)"))

    def test_root_rewrites_only(self, f):
        assert rewrite_root(R.COMMUTATION, f("(p∧q)→r").node) == []


class TestSubformulaRewrites:
    """A replacement may rewrite any single subformula."""

    def test_rewrite_inside_implication(self, f):
        assert is_valid_replacement(R.DOUBLE_NEGATION, f("(p→q)"), f("(p→¬¬q)"))
        assert is_valid_replacement(R.DOUBLE_NEGATION, f("(p→q)"), f("(¬¬p→q)"))

    def test_rewrite_under_negation(self, f):
        assert is_valid_replacement(R.COMMUTATION, f("¬(p∨q)"), f("¬(q∨p)"))

    def test_only_one_subtree_per_step(self, f):
        assert not is_valid_replacement(R.COMMUTATION, f("((p∧q)∨(r∧s))"), f("((q∧p)∨(s∧r))"))

    def test_possible_replacements_are_canonical(self, f):
        results = get_possible_replacements(R.COMMUTATION, f("(p∧q)∨r"))
        assert {formula.text for formula in results} == {"(r∨(p∧q))", "((q∧p)∨r)"}

    def test_non_wff_has_no_replacements(self, f):
        assert get_possible_replacements(R.DOUBLE_NEGATION, f("(p∧")) == []
        assert not is_valid_replacement(R.DOUBLE_NEGATION, f("(p∧"), f("¬¬(p∧"))
