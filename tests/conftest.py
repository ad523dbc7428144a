# tests/conftest.py
import random
from pathlib import Path

import pytest

from derivation.bounds import GeneratorBounds
from derivation.planner import PlannedProblemGenerator
from derivation.varlists import VarLists
from wff.formula import Formula

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def f():
    """Formula builder accepting ASCII or Unicode spellings."""
    return Formula.from_string


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def bounds():
    return GeneratorBounds()


@pytest.fixture
def generator(bounds, rng):
    return PlannedProblemGenerator(bounds=bounds, rng=rng)


@pytest.fixture
def make_varlists():
    """VarLists over an explicit, unshuffled alphabet."""

    def _make(*names):
        return VarLists.create(rng=None, names=names or ("p", "q", "r", "s", "t", "u", "v", "w"))

    return _make


@pytest.fixture
def config_path():
    return PROJECT_ROOT / "config" / "generator.yaml"
