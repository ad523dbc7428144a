"""
Tests for the rules of inference and the forward catalog.
"""

import random

import pytest

from derivation import engine
from derivation.forward import ALL_FORWARD_RULES, DEFAULT_WEIGHTS, WeightedRuleChooser, build_catalog
from derivation.rules import InferenceRule, rule_by_abbreviation, ReplacementRule


def conclusions(rule, known):
    return set(engine.get_possible_conclusions(rule, known))


class TestModusPonens:
    """{(A→B), A} ⊢ B"""

    def test_derives_consequent(self, f):
        assert conclusions(InferenceRule.MODUS_PONENS, [f("p→q"), f("p")]) == {f("q")}

    def test_valid_inference(self, f):
        assert engine.is_valid_inference(InferenceRule.MODUS_PONENS, [f("(p→q)"), f("p")], f("q"))
        assert not engine.is_valid_inference(InferenceRule.MODUS_PONENS, [f("(p→q)"), f("p")], f("p"))

    def test_requires_matching_antecedent(self, f):
        assert not engine.can_apply(InferenceRule.MODUS_PONENS, [f("p→q"), f("q")])

    def test_compound_antecedent(self, f):
        known = [f("(p∧q)→r"), f("p∧q")]
        assert conclusions(InferenceRule.MODUS_PONENS, known) == {f("r")}

    def test_premises_in_citation_order(self, f):
        (application,) = engine.get_possible_applications(
            InferenceRule.MODUS_PONENS, [f("p"), f("p→q")]
        )
        assert application.premises == (f("p→q"), f("p"))


class TestModusTollens:
    """{(A→B), ¬B} ⊢ ¬A"""

    def test_derives_negated_antecedent(self, f):
        assert conclusions(InferenceRule.MODUS_TOLLENS, [f("p→q"), f("¬q")]) == {f("¬p")}

    def test_negated_compound(self, f):
        known = [f("(p∧q)→(r∨s)"), f("¬(r∨s)")]
        assert conclusions(InferenceRule.MODUS_TOLLENS, known) == {f("¬(p∧q)")}

    def test_affirming_consequent_is_not_tollens(self, f):
        assert not engine.can_apply(InferenceRule.MODUS_TOLLENS, [f("p→q"), f("q")])


class TestHypotheticalSyllogism:
    """{(A→B), (B→C)} ⊢ (A→C)"""

    def test_exact_chain(self, f):
        assert conclusions(InferenceRule.HYPOTHETICAL_SYLLOGISM, [f("p→q"), f("q→r")]) == {f("p→r")}

    def test_no_shared_middle(self, f):
        assert engine.get_possible_applications(
            InferenceRule.HYPOTHETICAL_SYLLOGISM, [f("p→q"), f("r→s")]
        ) == []

    def test_order_of_known_irrelevant(self, f):
        assert conclusions(InferenceRule.HYPOTHETICAL_SYLLOGISM, [f("q→r"), f("p→q")]) == {f("p→r")}


class TestDisjunctiveSyllogism:
    """{(A∨B), ¬A} ⊢ B and {(A∨B), ¬B} ⊢ A"""

    def test_deny_left(self, f):
        assert conclusions(InferenceRule.DISJUNCTIVE_SYLLOGISM, [f("p∨q"), f("¬p")]) == {f("q")}

    def test_deny_right(self, f):
        assert conclusions(InferenceRule.DISJUNCTIVE_SYLLOGISM, [f("p∨q"), f("¬q")]) == {f("p")}

    def test_affirming_a_disjunct_yields_nothing(self, f):
        assert engine.get_possible_applications(
            InferenceRule.DISJUNCTIVE_SYLLOGISM, [f("p∨q"), f("p")]
        ) == []


class TestConjunction:
    """{A, B} ⊢ (A∧B) and (B∧A)"""

    def test_both_orders_offered(self, f):
        assert conclusions(InferenceRule.CONJUNCTION, [f("p"), f("q")]) == {f("p∧q"), f("q∧p")}

    def test_order_independent(self, f):
        assert conclusions(InferenceRule.CONJUNCTION, [f("q"), f("p")]) == conclusions(
            InferenceRule.CONJUNCTION, [f("p"), f("q")]
        )

    def test_no_self_conjunction(self, f):
        assert not engine.can_apply(InferenceRule.CONJUNCTION, [f("p"), f("(p)")])

    def test_repeated_premise_validates(self, f):
        conj = InferenceRule.CONJUNCTION
        assert engine.is_valid_inference(conj, [f("p"), f("p")], f("(p∧p)"))
        assert not engine.is_valid_inference(conj, [f("p")], f("(p∧p)"))


class TestSimplification:
    def test_both_conjuncts(self, f):
        assert conclusions(InferenceRule.SIMPLIFICATION, [f("p∧¬q")]) == {f("p"), f("¬q")}

    def test_needs_conjunction(self, f):
        assert not engine.can_apply(InferenceRule.SIMPLIFICATION, [f("p∨q")])


class TestAddition:
    """{A} plus another known X ⊢ (A∨X) and (X∨A)"""

    def test_pairs_with_known_formulas(self, f):
        assert conclusions(InferenceRule.ADDITION, [f("p"), f("q")]) == {f("p∨q"), f("q∨p")}

    def test_single_premise_validates_by_shape(self, f):
        assert engine.is_valid_inference(InferenceRule.ADDITION, [f("p")], f("p∨(r→s)"))
        assert engine.is_valid_inference(InferenceRule.ADDITION, [f("p")], f("(r→s)∨p"))
        assert not engine.is_valid_inference(InferenceRule.ADDITION, [f("p")], f("q∨r"))
        assert not engine.is_valid_inference(InferenceRule.ADDITION, [f("p")], f("p∧q"))


class TestAbsorption:
    def test_absorbs_antecedent(self, f):
        assert conclusions(InferenceRule.ABSORPTION, [f("p→q")]) == {f("p→(p∧q)")}


class TestConstructiveDilemma:
    """{((A→B)∧(C→D)), (A∨C)} ⊢ (B∨D)"""

    def test_conjoined_implications(self, f):
        known = [f("(p→q)∧(r→s)"), f("p∨r")]
        assert conclusions(InferenceRule.CONSTRUCTIVE_DILEMMA, known) == {f("q∨s")}

    def test_separate_implications(self, f):
        known = [f("p→q"), f("r→s"), f("p∨r")]
        (application,) = engine.get_possible_applications(InferenceRule.CONSTRUCTIVE_DILEMMA, known)
        assert application.conclusion == f("q∨s")
        assert application.premises == (f("p→q"), f("r→s"), f("p∨r"))

    def test_disjunction_order_selects_pairing(self, f):
        known = [f("p→q"), f("r→s"), f("r∨p")]
        assert conclusions(InferenceRule.CONSTRUCTIVE_DILEMMA, known) == {f("s∨q")}

    def test_unrelated_disjunction(self, f):
        assert not engine.can_apply(
            InferenceRule.CONSTRUCTIVE_DILEMMA, [f("p→q"), f("r→s"), f("p∨t")]
        )


class TestEnumeration:
    """Shared behaviour across the catalog."""

    def test_deduplicates_conclusions(self, f):
        known = [f("p→q"), f("(p→q)"), f("p")]
        assert len(engine.get_possible_applications(InferenceRule.MODUS_PONENS, known)) == 1

    def test_ignores_non_wffs(self, f):
        assert engine.get_possible_applications(InferenceRule.SIMPLIFICATION, [f("(p∧q")]) == []

    def test_matching_requires_all_premises_consumed(self, f):
        assert engine.matching_applications(
            InferenceRule.MODUS_PONENS, [f("p→q"), f("p"), f("r")], f("q")
        ) == []

    def test_all_applications_spans_rules(self, f):
        rules = {app.rule for app in engine.all_applications([f("p→q"), f("p")])}
        assert {InferenceRule.MODUS_PONENS, InferenceRule.ABSORPTION, InferenceRule.CONJUNCTION} <= rules


class TestRuleCatalog:
    def test_nine_forward_rules(self):
        assert {fr.rule for fr in ALL_FORWARD_RULES} == set(InferenceRule)

    def test_forward_rule_generate(self, f):
        mp = next(fr for fr in ALL_FORWARD_RULES if fr.rule is InferenceRule.MODUS_PONENS)
        assert mp.can_apply([f("p→q"), f("p")])
        assert [app.conclusion for app in mp.generate([f("p→q"), f("p")])] == [f("q")]

    def test_weight_overrides(self):
        catalog = build_catalog({InferenceRule.ADDITION: 0.0})
        weights = {fr.rule: fr.weight for fr in catalog}
        assert weights[InferenceRule.ADDITION] == 0.0
        assert weights[InferenceRule.MODUS_PONENS] == DEFAULT_WEIGHTS[InferenceRule.MODUS_PONENS]

    def test_chooser_skips_zero_weight_and_decays(self):
        catalog = build_catalog({rule: 0.0 for rule in InferenceRule if rule is not InferenceRule.ABSORPTION})
        chooser = WeightedRuleChooser(catalog, random.Random(0))
        assert chooser.choose(catalog).rule is InferenceRule.ABSORPTION
        chooser.mark_used(InferenceRule.ABSORPTION)
        assert chooser.weights[InferenceRule.ABSORPTION] == pytest.approx(2.5)

    def test_abbreviations(self):
        assert [rule.abbreviation for rule in InferenceRule] == [
            "MP", "MT", "HS", "DS", "CD", "Abs", "Simp", "Conj", "Add",
        ]
        assert rule_by_abbreviation("mp") is InferenceRule.MODUS_PONENS
        assert rule_by_abbreviation("DM") is ReplacementRule.DE_MORGANS_THEOREM
        assert rule_by_abbreviation("nope") is None
