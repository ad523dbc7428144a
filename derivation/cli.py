"""Command-line entry point: generate puzzles, search for proofs, inspect formulas."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from derivation.bounds import GeneratorBounds, GeneratorConfigError, load_bounds_from_env
from derivation.planner import PlannedProblemGenerator
from derivation.problem_sets import CHAPTERS
from derivation.search import prove
from derivation.validator import validate
from wff.formula import Formula, tree_to_formula
from wff.structure import get_atomic_assertions


def _read_formula(text: str) -> Formula:
    try:
        formula = Formula.from_string(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    if formula.node is None:
        raise argparse.ArgumentTypeError(f"Not a well-formed formula: {text!r}")
    return formula


def _load_bounds(config: Optional[str]) -> GeneratorBounds:
    if config:
        return GeneratorBounds.from_file(config)
    return load_bounds_from_env()


def cmd_generate(args: argparse.Namespace) -> int:
    bounds = _load_bounds(args.config)
    generator = PlannedProblemGenerator(bounds=bounds, seed=args.seed)
    failures = 0
    for index in range(args.count):
        problem = generator.generate(args.difficulty)
        if problem is None:
            failures += 1
            print(f"#{index + 1}: no problem found", file=sys.stderr)
            continue
        print(f"#{index + 1} [{problem.id}] difficulty={problem.difficulty}")
        for number, premise in enumerate(problem.premises, start=1):
            print(f"  {number}. {premise.text}")
        print(f"  ⊢ {problem.conclusion.text}")
        if args.solve:
            proof = prove(
                problem.premises,
                problem.conclusion,
                max_rounds=max(bounds.search_max_rounds, 2 * problem.difficulty + 2),
                max_formulas=bounds.search_max_formulas,
                max_formula_tiles=bounds.max_formula_tiles,
            )
            print("  proof:" if proof is not None else "  proof: not found")
            if proof is not None:
                for line in proof.lines:
                    print(f"    {line}")
    return 1 if failures == args.count else 0


def cmd_prove(args: argparse.Namespace) -> int:
    proof = prove(args.premise, args.goal, max_rounds=args.max_rounds)
    if proof is None:
        print(f"No proof of {args.goal.text} found within {args.max_rounds} round(s).")
        return 1
    print(proof)
    result = validate(proof)
    print(result.error_message)
    return 0 if result.is_valid else 1


def cmd_parse(args: argparse.Namespace) -> int:
    formula: Formula = args.formula
    literals = ", ".join(literal.text for literal in get_atomic_assertions(formula))
    print(f"canonical: {tree_to_formula(formula.node).text}")
    print(f"literals:  {literals}")
    return 0


def cmd_chapters(args: argparse.Namespace) -> int:
    for chapter in CHAPTERS:
        print(chapter.title)
        for problem in chapter.problems:
            print(f"  {problem.id} {problem.name}: {problem}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wff-tutor",
        description="Propositional logic proof puzzles: generation, proof search, parsing.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    gen = subparsers.add_parser("generate", help="Generate puzzles at a difficulty")
    gen.add_argument("--difficulty", "-d", type=int, default=3)
    gen.add_argument("--count", "-n", type=int, default=1)
    gen.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    gen.add_argument("--config", "-c", default=None, help="Generator YAML config path")
    gen.add_argument("--solve", action="store_true", help="Also print a proof for each puzzle")
    gen.set_defaults(func=cmd_generate)

    prv = subparsers.add_parser("prove", help="Search for a proof from premises")
    prv.add_argument("--premise", "-p", type=_read_formula, action="append", default=[])
    prv.add_argument("--goal", "-g", type=_read_formula, required=True)
    prv.add_argument("--max-rounds", type=int, default=8)
    prv.set_defaults(func=cmd_prove)

    prs = subparsers.add_parser("parse", help="Show the canonical form of a formula")
    prs.add_argument("formula", type=_read_formula)
    prs.set_defaults(func=cmd_parse)

    chp = subparsers.add_parser("chapters", help="List curated problem chapters")
    chp.set_defaults(func=cmd_chapters)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    if not args.command:
        parser.print_help()
        return 1
    try:
        return args.func(args)
    except GeneratorConfigError as exc:
        print(f"[FAIL] {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
