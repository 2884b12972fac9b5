"""Shared fixtures for level generation tests."""

import pytest

from mission_gen.config import GenerationOptions
from mission_gen.generation.pipeline import LevelGenerator

SWEEP_SEEDS = range(20)


@pytest.fixture(scope="session")
def sweep_results():
    """(seed, GenerationResult) for a sweep of default-option levels."""
    return [
        (seed, LevelGenerator(seed).run(GenerationOptions(seed=seed)))
        for seed in SWEEP_SEEDS
    ]
