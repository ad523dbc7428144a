"""
Tests for next-line suggestions.
"""

from derivation.rules import Inference, InferenceRule, Premise, Proof, Replacement, ReplacementRule
from derivation.suggest import backward_suggestions, inference_suggestions, replacement_suggestions
from derivation.validator import validate


def premises(f, *texts):
    proof = Proof()
    for text in texts:
        proof.append(f(text), Premise())
    return proof


class TestInferenceSuggestions:
    def test_modus_ponens_cites_in_order(self, f):
        proof = premises(f, "p", "(p→q)")
        (suggestion,) = inference_suggestions(InferenceRule.MODUS_PONENS, proof.lines)
        assert suggestion.formula == f("q")
        assert suggestion.justification == Inference(InferenceRule.MODUS_PONENS, (2, 1))

    def test_suggestions_validate(self, f):
        proof = premises(f, "(p∨q)", "¬q", "(q→r)")
        for rule in InferenceRule:
            for suggestion in inference_suggestions(rule, proof.lines):
                candidate = Proof(list(proof.lines))
                candidate.append(suggestion.formula, suggestion.justification)
                assert validate(candidate).is_valid, (rule, suggestion)

    def test_addition_cites_single_line(self, f):
        proof = premises(f, "p", "q")
        suggestions = inference_suggestions(InferenceRule.ADDITION, proof.lines)
        assert {s.formula for s in suggestions} == {f("(p∨q)"), f("(q∨p)")}
        assert all(len(s.justification.line_references) == 1 for s in suggestions)

    def test_skips_formulas_already_selected(self, f):
        proof = premises(f, "(p∧q)", "p")
        suggestions = inference_suggestions(InferenceRule.SIMPLIFICATION, proof.lines)
        assert [s.formula for s in suggestions] == [f("q")]


class TestReplacementSuggestions:
    def test_de_morgan(self, f):
        proof = premises(f, "¬(p∧q)")
        (suggestion,) = replacement_suggestions(ReplacementRule.DE_MORGANS_THEOREM, proof.lines[0])
        assert suggestion.formula == f("(¬p∨¬q)")
        assert suggestion.justification == Replacement(ReplacementRule.DE_MORGANS_THEOREM, 1)

    def test_no_rewrite_available(self, f):
        proof = premises(f, "(p→q)")
        assert replacement_suggestions(ReplacementRule.COMMUTATION, proof.lines[0]) == []


class TestBackwardSuggestions:
    def test_does_not_mutate_variables(self, f, make_varlists):
        variables = make_varlists("s", "t")
        suggestions = backward_suggestions(f("(p→q)"), variables)
        assert {strategy.rule for strategy, _ in suggestions} == {
            InferenceRule.HYPOTHETICAL_SYLLOGISM,
            InferenceRule.MODUS_PONENS,
            InferenceRule.DISJUNCTIVE_SYLLOGISM,
        }
        assert variables.used == []
        assert variables.available == [f("s"), f("t")]

    def test_exhausted_variables_leave_conjunction(self, f, make_varlists):
        variables = make_varlists("s")
        variables.use_atomic_assertion(f("s"))
        suggestions = backward_suggestions(f("(p∧q)"), variables)
        assert [strategy.rule for strategy, _ in suggestions] == [InferenceRule.CONJUNCTION]
