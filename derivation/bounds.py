"""
Generator configuration.

GeneratorBounds fixes every knob of puzzle generation so that a run with a
given seed is deterministic and reproducible. Bounds can be loaded from a
YAML file; ``load_bounds_from_env`` picks the file named by
``WFF_GENERATOR_CONFIG`` (default ``config/generator.yaml``).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

import yaml

from derivation.forward import DEFAULT_WEIGHTS
from derivation.rules import InferenceRule, rule_by_abbreviation
from wff.tiles import PROBLEM_VARIABLE_NAMES, VARIABLE_NAMES

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WFF_GENERATOR_CONFIG"
DEFAULT_CONFIG_PATH = "config/generator.yaml"


class GeneratorConfigError(Exception):
    """Raised when generator configuration is missing or malformed."""
    pass


@dataclass(frozen=True, slots=True)
class GeneratorBounds:
    """
    Deterministic limits for puzzle generation.

    Attributes:
        variables: Variable alphabet handed to each attempt's VarLists.
        min_seeds: Fewest fresh literals seeded into the pool.
        max_seeds: Most fresh literals seeded into the pool.
        seed_negation_chance: Probability that a seed literal is negated.
        base_steps: Forward steps taken regardless of difficulty.
        steps_per_difficulty: Extra forward steps per unit of difficulty.
        step_tries_factor: Step attempts allowed per target step before giving up.
        backward_chance: Probability that a step expands a leaf backward.
        chain_bias: Probability of preferring applications that consume the latest node.
        weight_decay: Factor applied to a rule's weight each time it is used.
        max_formula_tiles: Longest formula (in tiles) admitted into the pool.
        max_attempts: Generation attempts before reporting failure.
        search_max_rounds: Forward-closure rounds for the derivability search.
        search_max_formulas: Cap on formulas held by the derivability search.
        rule_weights: Selection weight per rule of inference.
    """

    variables: Tuple[str, ...] = PROBLEM_VARIABLE_NAMES
    min_seeds: int = 2
    max_seeds: int = 4
    seed_negation_chance: float = 0.25
    base_steps: int = 1
    steps_per_difficulty: int = 2
    step_tries_factor: int = 8
    backward_chance: float = 0.35
    chain_bias: float = 0.75
    weight_decay: float = 0.5
    max_formula_tiles: int = 31
    max_attempts: int = 50
    search_max_rounds: int = 8
    search_max_formulas: int = 5000
    rule_weights: Dict[InferenceRule, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))

    def __post_init__(self) -> None:
        unknown = [name for name in self.variables if name not in VARIABLE_NAMES]
        if unknown:
            raise GeneratorConfigError(f"Unknown variable names: {unknown}")
        if len(set(self.variables)) < 2:
            raise GeneratorConfigError("At least two distinct variables are required")
        if not 1 <= self.min_seeds <= self.max_seeds:
            raise GeneratorConfigError(
                f"Seed range must satisfy 1 <= min <= max, got {self.min_seeds}..{self.max_seeds}"
            )
        for name in ("seed_negation_chance", "backward_chance", "chain_bias"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise GeneratorConfigError(f"{name} must be within [0, 1], got {value}")
        if not 0.0 < self.weight_decay <= 1.0:
            raise GeneratorConfigError(f"weight_decay must be within (0, 1], got {self.weight_decay}")
        if self.max_attempts < 1:
            raise GeneratorConfigError("max_attempts must be positive")
        if any(weight < 0 for weight in self.rule_weights.values()):
            raise GeneratorConfigError("Rule weights must be non-negative")

    def target_steps(self, difficulty: int) -> int:
        """Forward steps Phase 1 aims for at ``difficulty``."""
        return self.base_steps + self.steps_per_difficulty * max(1, difficulty)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GeneratorBounds":
        seeding = data.get("seeding", {}) or {}
        steps = data.get("steps", {}) or {}
        attempts = data.get("attempts", {}) or {}
        search = data.get("search", {}) or {}
        weights = dict(DEFAULT_WEIGHTS)
        for name, value in (data.get("weights", {}) or {}).items():
            rule = rule_by_abbreviation(str(name))
            if not isinstance(rule, InferenceRule):
                raise GeneratorConfigError(f"Unknown inference rule in weights: {name!r}")
            weights[rule] = float(value)
        try:
            return cls(
                variables=tuple(str(v) for v in data.get("variables", PROBLEM_VARIABLE_NAMES)),
                min_seeds=int(seeding.get("min", 2)),
                max_seeds=int(seeding.get("max", 4)),
                seed_negation_chance=float(seeding.get("negation_chance", 0.25)),
                base_steps=int(steps.get("base", 1)),
                steps_per_difficulty=int(steps.get("per_difficulty", 2)),
                step_tries_factor=int(steps.get("tries_factor", 8)),
                backward_chance=float(steps.get("backward_chance", 0.35)),
                chain_bias=float(steps.get("chain_bias", 0.75)),
                weight_decay=float(steps.get("weight_decay", 0.5)),
                max_formula_tiles=int(steps.get("max_formula_tiles", 31)),
                max_attempts=int(attempts.get("max", 50)),
                search_max_rounds=int(search.get("max_rounds", 8)),
                search_max_formulas=int(search.get("max_formulas", 5000)),
                rule_weights=weights,
            )
        except (TypeError, ValueError) as exc:
            raise GeneratorConfigError(f"Invalid generator configuration: {exc}") from exc

    @classmethod
    def from_file(cls, path: Path | str) -> "GeneratorBounds":
        path = Path(path)
        if not path.exists():
            raise GeneratorConfigError(f"Generator config not found at: {path}")
        try:
            with open(path, "r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise GeneratorConfigError(f"Error parsing YAML file: {path}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise GeneratorConfigError(f"Malformed generator config: expected a mapping in {path}")
        return cls.from_mapping(data)


def load_bounds_from_env() -> GeneratorBounds:
    """Load bounds from the configured YAML file, or the defaults when it is absent."""
    path = Path(os.getenv(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))
    if not path.exists():
        logger.debug("No generator config at %s; using defaults", path)
        return GeneratorBounds()
    return GeneratorBounds.from_file(path)


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "GeneratorConfigError",
    "GeneratorBounds",
    "load_bounds_from_env",
]
