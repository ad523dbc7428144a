"""
Sequential proof validation.

Lines are checked strictly in order against already-accepted earlier
lines. Validation stops at the first failure and reports a single
diagnostic message.

Citation policy:
    Asymmetric rules cite their lines in a fixed order (Modus Ponens cites
    the implication, then the antecedent). Conjunction is order-insensitive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from derivation.engine import matching_applications
from derivation.replacement import is_valid_replacement
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
)
from wff.formula import Formula

VALID_MESSAGE = "Proof is valid!"

REFERENCE_COUNTS: Dict[InferenceRule, Tuple[int, ...]] = {
    InferenceRule.MODUS_PONENS: (2,),
    InferenceRule.MODUS_TOLLENS: (2,),
    InferenceRule.HYPOTHETICAL_SYLLOGISM: (2,),
    InferenceRule.DISJUNCTIVE_SYLLOGISM: (2,),
    InferenceRule.CONSTRUCTIVE_DILEMMA: (2, 3),
    InferenceRule.ABSORPTION: (1,),
    InferenceRule.SIMPLIFICATION: (1,),
    InferenceRule.CONJUNCTION: (2,),
    InferenceRule.ADDITION: (1,),
}

# Expected citation order for rules whose premises play different roles.
CITATION_ORDER: Dict[Tuple[InferenceRule, int], Tuple[str, ...]] = {
    (InferenceRule.MODUS_PONENS, 2): ("implication", "antecedent"),
    (InferenceRule.MODUS_TOLLENS, 2): ("implication", "negated consequent"),
    (InferenceRule.HYPOTHETICAL_SYLLOGISM, 2): ("first implication", "second implication"),
    (InferenceRule.DISJUNCTIVE_SYLLOGISM, 2): ("disjunction", "negated disjunct"),
    (InferenceRule.CONSTRUCTIVE_DILEMMA, 2): ("conjunction of implications", "disjunction"),
    (InferenceRule.CONSTRUCTIVE_DILEMMA, 3): ("first implication", "second implication", "disjunction"),
}


@dataclass(frozen=True, slots=True)
class ValidationResult:
    is_valid: bool
    error_message: str = VALID_MESSAGE

    def __bool__(self) -> bool:
        return self.is_valid


def _failure(message: str) -> ValidationResult:
    return ValidationResult(False, message)


class ProofValidator:
    """Pure checker; one instance may validate any number of independent proofs."""

    def validate(self, proof: Proof | Sequence[ProofLine]) -> ValidationResult:
        lines = proof.lines if isinstance(proof, Proof) else list(proof)
        accepted: Dict[int, Formula] = {}
        previous = 0

        for line in lines:
            number = line.line_number
            if number <= previous or (previous == 0 and number != 1):
                return _failure(
                    f"Line {number}: line numbers must increase from 1 (previous was {previous})."
                )
            previous = number
            if line.formula.node is None:
                return _failure(f"Line {number}: '{line.formula.text}' is not a well-formed formula.")
            if line.depth != 0:
                return _failure(f"Line {number}: sub-proofs are not supported.")

            error = self._check_line(line, accepted)
            if error is not None:
                return _failure(error)
            accepted[number] = line.formula

        return ValidationResult(True, VALID_MESSAGE)

    # ------------------------------------------------------------------

    def _check_line(self, line: ProofLine, accepted: Dict[int, Formula]) -> Optional[str]:
        justification = line.justification
        number = line.line_number

        if isinstance(justification, (Premise, Assumption)):
            return None

        if isinstance(justification, Inference):
            return self._check_inference(line, justification, accepted)

        if isinstance(justification, Replacement):
            ref = justification.line_reference
            if ref not in accepted:
                return f"Line {number} references non-existent line {ref}."
            if not is_valid_replacement(justification.rule, accepted[ref], line.formula):
                return f"Line {number}: Does not follow by {justification.rule.rule_name}."
            return None

        if isinstance(justification, Reiteration):
            ref = justification.line_reference
            if ref not in accepted:
                return f"Line {number} references non-existent line {ref}."
            if accepted[ref] != line.formula:
                return f"Line {number}: Reiteration must repeat line {ref} exactly."
            return None

        if isinstance(justification, ImplicationIntroduction):
            return f"Line {number}: Implication Introduction requires sub-proofs, which are not supported."

        if isinstance(justification, ReductioAdAbsurdum):
            return f"Line {number}: Reductio ad Absurdum requires sub-proofs, which are not supported."

        raise TypeError(f"Unknown justification: {type(justification)}")

    def _check_inference(
        self,
        line: ProofLine,
        justification: Inference,
        accepted: Dict[int, Formula],
    ) -> Optional[str]:
        rule = justification.rule
        number = line.line_number
        refs = justification.line_references

        expected_counts = REFERENCE_COUNTS[rule]
        if len(refs) not in expected_counts:
            counts = " or ".join(str(count) for count in expected_counts)
            return f"Line {number}: {rule.rule_name} requires {counts} reference line(s)."
        for ref in refs:
            if ref not in accepted:
                return f"Line {number} references non-existent line {ref}."

        cited = [accepted[ref] for ref in refs]
        matches = matching_applications(rule, cited, line.formula)
        if not matches:
            return f"Line {number}: Does not follow by {rule.rule_name}."

        order = CITATION_ORDER.get((rule, len(refs)))
        if order is not None and not any(list(app.premises) == cited for app in matches):
            return (
                f"Line {number}: {rule.rule_name} expects its cited lines in the order "
                f"{', '.join(order)}."
            )
        return None


def validate(proof: Proof | Sequence[ProofLine]) -> ValidationResult:
    return ProofValidator().validate(proof)


__all__ = [
    "VALID_MESSAGE",
    "REFERENCE_COUNTS",
    "CITATION_ORDER",
    "ValidationResult",
    "ProofValidator",
    "validate",
]
