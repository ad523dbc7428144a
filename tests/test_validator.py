"""
Tests for sequential proof validation.
"""

import pytest

from derivation.rules import (
    Assumption,
    ImplicationIntroduction,
    Inference,
    InferenceRule,
    Premise,
    Proof,
    ProofLine,
    ReductioAdAbsurdum,
    Reiteration,
    Replacement,
    ReplacementRule,
    describe,
)
from derivation.validator import VALID_MESSAGE, ProofValidator, validate

MP = InferenceRule.MODUS_PONENS


def build(f, *entries):
    """Proof from (formula text, justification) pairs, numbered from 1."""
    proof = Proof()
    for text, justification in entries:
        proof.append(f(text), justification)
    return proof


class TestBasicProofs:
    def test_modus_ponens_proof(self, f):
        proof = build(f, ("(p→q)", Premise()), ("p", Premise()), ("q", Inference(MP, (1, 2))))
        result = validate(proof)
        assert result.is_valid
        assert result.error_message == VALID_MESSAGE

    def test_swapped_citation_order_rejected(self, f):
        proof = build(f, ("(p→q)", Premise()), ("p", Premise()), ("q", Inference(MP, (2, 1))))
        result = validate(proof)
        assert not result.is_valid
        assert result.error_message == (
            "Line 3: Modus Ponens expects its cited lines in the order implication, antecedent."
        )

    def test_conjunction_is_order_insensitive(self, f):
        conj = InferenceRule.CONJUNCTION
        proof = build(f, ("p", Premise()), ("q", Premise()), ("(p∧q)", Inference(conj, (2, 1))))
        assert validate(proof).is_valid

    def test_wrong_conclusion(self, f):
        proof = build(f, ("(p→q)", Premise()), ("p", Premise()), ("p", Inference(MP, (1, 2))))
        assert validate(proof).error_message == "Line 3: Does not follow by Modus Ponens."

    def test_empty_proof_is_valid(self):
        assert validate(Proof()).is_valid

    def test_premises_and_assumptions_always_valid(self, f):
        proof = build(f, ("(p∧¬p)", Premise()), ("q", Assumption()))
        assert validate(proof).is_valid

    def test_result_is_truthy_when_valid(self, f):
        assert validate(build(f, ("p", Premise())))
        assert not validate(build(f, ("p", Inference(MP, (1, 2)))))


class TestReferences:
    def test_reference_to_missing_line(self, f):
        proof = build(f, ("(p→q)", Premise()), ("q", Inference(MP, (1, 7))))
        assert validate(proof).error_message == "Line 2 references non-existent line 7."

    def test_forward_reference(self, f):
        proof = build(f, ("q", Inference(MP, (2, 3))), ("(p→q)", Premise()), ("p", Premise()))
        assert validate(proof).error_message == "Line 1 references non-existent line 2."

    def test_self_reference(self, f):
        proof = build(f, ("p", Premise()), ("(p∨q)", Inference(InferenceRule.ADDITION, (2,))))
        assert not validate(proof).is_valid

    def test_wrong_reference_count(self, f):
        proof = build(f, ("(p→q)", Premise()), ("p", Premise()), ("q", Inference(MP, (1,))))
        assert validate(proof).error_message == "Line 3: Modus Ponens requires 2 reference line(s)."

    def test_stops_at_first_failure(self, f):
        proof = build(
            f,
            ("p", Premise()),
            ("q", Inference(MP, (1, 1))),
            ("r", Inference(MP, (9, 9))),
        )
        assert validate(proof).error_message.startswith("Line 2")


class TestLineStructure:
    def test_numbers_must_start_at_one(self, f):
        lines = [ProofLine(2, f("p"), Premise())]
        assert not validate(lines).is_valid

    def test_numbers_must_increase(self, f):
        lines = [ProofLine(1, f("p"), Premise()), ProofLine(1, f("q"), Premise())]
        assert not validate(lines).is_valid

    def test_non_wff_line(self, f):
        proof = build(f, ("(p∧", Premise()))
        assert "not a well-formed formula" in validate(proof).error_message

    def test_nested_depth_unsupported(self, f):
        lines = [ProofLine(1, f("p"), Assumption(), depth=1)]
        assert validate(lines).error_message == "Line 1: sub-proofs are not supported."

    @pytest.mark.parametrize(
        "justification",
        [ImplicationIntroduction(1, 2), ReductioAdAbsurdum(1, 2)],
    )
    def test_subproof_rules_unsupported(self, justification, f):
        proof = build(f, ("p", Premise()), ("(p→p)", justification))
        assert "not supported" in validate(proof).error_message

    def test_reiteration(self, f):
        assert validate(build(f, ("p∧q", Premise()), ("(p∧q)", Reiteration(1)))).is_valid
        assert not validate(build(f, ("p∧q", Premise()), ("(q∧p)", Reiteration(1)))).is_valid


class TestRuleCitations:
    """Every rule of inference validated through the proof checker."""

    @pytest.mark.parametrize(
        "premises, conclusion, rule, refs",
        [
            (["(p→q)", "¬q"], "¬p", InferenceRule.MODUS_TOLLENS, (1, 2)),
            (["(p→q)", "(q→r)"], "(p→r)", InferenceRule.HYPOTHETICAL_SYLLOGISM, (1, 2)),
            (["(p∨q)", "¬p"], "q", InferenceRule.DISJUNCTIVE_SYLLOGISM, (1, 2)),
            (["(p∨q)", "¬q"], "p", InferenceRule.DISJUNCTIVE_SYLLOGISM, (1, 2)),
            (["((p→q)∧(r→s))", "(p∨r)"], "(q∨s)", InferenceRule.CONSTRUCTIVE_DILEMMA, (1, 2)),
            (["(p→q)", "(r→s)", "(p∨r)"], "(q∨s)", InferenceRule.CONSTRUCTIVE_DILEMMA, (1, 2, 3)),
            (["(p→q)"], "(p→(p∧q))", InferenceRule.ABSORPTION, (1,)),
            (["(p∧q)"], "q", InferenceRule.SIMPLIFICATION, (1,)),
            (["p"], "(p∨(q→r))", InferenceRule.ADDITION, (1,)),
            (["p", "q"], "(q∧p)", InferenceRule.CONJUNCTION, (1, 2)),
        ],
    )
    def test_valid(self, premises, conclusion, rule, refs, f):
        entries = [(text, Premise()) for text in premises]
        entries.append((conclusion, Inference(rule, refs)))
        assert validate(build(f, *entries)).is_valid

    def test_hypothetical_syllogism_order(self, f):
        hs = InferenceRule.HYPOTHETICAL_SYLLOGISM
        proof = build(f, ("(p→q)", Premise()), ("(q→r)", Premise()), ("(p→r)", Inference(hs, (2, 1))))
        assert "expects its cited lines in the order" in validate(proof).error_message

    def test_constructive_dilemma_reference_counts(self, f):
        cd = InferenceRule.CONSTRUCTIVE_DILEMMA
        proof = build(f, ("(p∨r)", Premise()), ("(q∨s)", Inference(cd, (1,))))
        assert validate(proof).error_message == (
            "Line 2: Constructive Dilemma requires 2 or 3 reference line(s)."
        )

    def test_same_line_cited_twice(self, f):
        conj = InferenceRule.CONJUNCTION
        proof = build(f, ("p", Premise()), ("(p∧p)", Inference(conj, (1, 1))))
        assert validate(proof).is_valid

    def test_repeated_formula_on_distinct_lines(self, f):
        conj = InferenceRule.CONJUNCTION
        proof = build(f, ("p", Premise()), ("p", Premise()), ("(p∧p)", Inference(conj, (1, 2))))
        assert validate(proof).is_valid

    def test_hypothetical_syllogism_over_repeated_implication(self, f):
        hs = InferenceRule.HYPOTHETICAL_SYLLOGISM
        proof = build(
            f,
            ("(p→p)", Premise()),
            ("(p→p)", Premise()),
            ("(p→p)", Inference(hs, (1, 2))),
        )
        assert validate(proof).is_valid

    def test_multi_step_proof(self, f):
        proof = build(
            f,
            ("(p→q)", Premise()),
            ("(q→r)", Premise()),
            ("p", Premise()),
            ("(p→r)", Inference(InferenceRule.HYPOTHETICAL_SYLLOGISM, (1, 2))),
            ("r", Inference(MP, (4, 3))),
            ("(r∨s)", Inference(InferenceRule.ADDITION, (5,))),
        )
        assert ProofValidator().validate(proof).is_valid


class TestReplacementLines:
    def test_de_morgan_on_subformula(self, f):
        proof = build(
            f,
            ("(¬(p∧q)→r)", Premise()),
            ("((¬p∨¬q)→r)", Replacement(ReplacementRule.DE_MORGANS_THEOREM, 1)),
        )
        assert validate(proof).is_valid

    def test_wrong_rule(self, f):
        proof = build(
            f,
            ("(p∧q)", Premise()),
            ("(q∧p)", Replacement(ReplacementRule.DOUBLE_NEGATION, 1)),
        )
        assert validate(proof).error_message == "Line 2: Does not follow by Double Negation."

    def test_missing_reference(self, f):
        proof = build(f, ("(q∧p)", Replacement(ReplacementRule.COMMUTATION, 4)))
        assert validate(proof).error_message == "Line 1 references non-existent line 4."


class TestDescribe:
    def test_display_forms(self):
        assert describe(Premise()) == "Premise"
        assert describe(Inference(MP, (1, 2))) == "MP 1,2"
        assert describe(Replacement(ReplacementRule.DE_MORGANS_THEOREM, 3)) == "DM 3"
