"""Curated problem chapters for guided practice."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from derivation.planner import Problem
from wff.formula import f


@dataclass(frozen=True, slots=True)
class ProblemSet:
    title: str
    description: str
    problems: Tuple[Problem, ...]


def _problem(problem_id: str, name: str, premises: Sequence[str], conclusion: str, difficulty: int) -> Problem:
    return Problem(
        premises=tuple(f(text) for text in premises),
        conclusion=f(conclusion),
        difficulty=difficulty,
        id=problem_id,
        name=name,
    )


CHAPTER_1 = ProblemSet(
    title="Chapter 1: Modus Ponens",
    description="Affirm the antecedent to detach the consequent.",
    problems=(
        _problem("1-1", "Simple Modus Ponens", ["(p→q)", "p"], "q", 1),
        _problem("1-2", "Modus Ponens with Negation", ["(¬r→s)", "¬r"], "s", 1),
        _problem("1-3", "Chained Modus Ponens", ["(p→q)", "(q→r)", "p"], "r", 2),
        _problem("1-4", "Compound Antecedent", ["((p∧q)→r)", "p", "q"], "r", 2),
    ),
)

CHAPTER_2 = ProblemSet(
    title="Chapter 2: Modus Tollens and Syllogisms",
    description="Deny the consequent, chain implications, eliminate disjuncts.",
    problems=(
        _problem("2-1", "Simple Modus Tollens", ["(p→q)", "¬q"], "¬p", 1),
        _problem("2-2", "Hypothetical Syllogism", ["(p→q)", "(q→r)"], "(p→r)", 1),
        _problem("2-3", "Disjunctive Syllogism", ["(p∨q)", "¬p"], "q", 1),
        _problem("2-4", "Tollens then Syllogism", ["(p→q)", "¬q", "(p∨r)"], "r", 2),
    ),
)

CHAPTER_3 = ProblemSet(
    title="Chapter 3: Combining Rules",
    description="Conjunction, Simplification, Addition, Absorption and Constructive Dilemma.",
    problems=(
        _problem("3-1", "Simplify and Detach", ["(p∧q)", "(p→r)"], "r", 2),
        _problem("3-2", "Build a Conjunction", ["(p→q)", "p", "r"], "(q∧r)", 2),
        _problem("3-3", "Constructive Dilemma", ["(p→q)", "(r→s)", "p"], "(q∨s)", 2),
        _problem("3-4", "Absorption", ["(p→q)", "p"], "(p∧q)", 2),
        _problem("3-5", "Addition then Syllogism", ["(p→q)", "p", "((q∨r)→s)"], "s", 3),
    ),
)

CHAPTERS: Tuple[ProblemSet, ...] = (CHAPTER_1, CHAPTER_2, CHAPTER_3)


def all_problems() -> Dict[str, Problem]:
    return {problem.id: problem for chapter in CHAPTERS for problem in chapter.problems}


def find_problem(problem_id: str) -> Optional[Problem]:
    return all_problems().get(problem_id)


__all__ = [
    "ProblemSet",
    "CHAPTER_1",
    "CHAPTER_2",
    "CHAPTER_3",
    "CHAPTERS",
    "all_problems",
    "find_problem",
]
