"""Rules of inference and replacement, proof validation and puzzle generation."""

from .backward import ALL_BACKWARD_STRATEGIES, GenerationStep, RuleGenerator
from .bounds import GeneratorBounds, GeneratorConfigError, load_bounds_from_env
from .engine import Application, get_possible_applications, is_valid_inference
from .forward import ALL_FORWARD_RULES, ForwardRule
from .planner import DerivationGraph, PlannedProblemGenerator, Problem
from .rules import (
    Assumption,
    ImplicationIntroduction,
    Inference,
    InferenceRule,
    Justification,
    Premise,
    Proof,
    ProofLine,
    ReductioAdAbsurdum,
    Reiteration,
    Replacement,
    ReplacementRule,
)
from .search import is_derivable, prove
from .validator import ProofValidator, ValidationResult, validate
from .varlists import VarLists

__all__ = [
    "ALL_BACKWARD_STRATEGIES",
    "GenerationStep",
    "RuleGenerator",
    "GeneratorBounds",
    "GeneratorConfigError",
    "load_bounds_from_env",
    "Application",
    "get_possible_applications",
    "is_valid_inference",
    "ALL_FORWARD_RULES",
    "ForwardRule",
    "DerivationGraph",
    "PlannedProblemGenerator",
    "Problem",
    "Assumption",
    "ImplicationIntroduction",
    "Inference",
    "InferenceRule",
    "Justification",
    "Premise",
    "Proof",
    "ProofLine",
    "ReductioAdAbsurdum",
    "Reiteration",
    "Replacement",
    "ReplacementRule",
    "is_derivable",
    "prove",
    "ProofValidator",
    "ValidationResult",
    "validate",
    "VarLists",
]
