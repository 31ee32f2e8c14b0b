"""Shared test fixtures for the kinsim test suite."""

from __future__ import annotations

import random

import pytest

from src.config import SimulationConfig
from src.evolution.population import World


@pytest.fixture
def config() -> SimulationConfig:
    """Small config for fast tests."""
    return SimulationConfig(
        seed=42,
        species_count=2,
        founders_per_species=8,
        species_capacity=12,
        offspring_per_pair=4,
        generations=10,
        runs=1,
    )


@pytest.fixture
def world(config: SimulationConfig) -> World:
    """An empty world (no founders yet) with a seeded random source."""
    return World(config, rng=random.Random(1234))


@pytest.fixture
def populated_world(config: SimulationConfig) -> World:
    """A world with the founder generation in place."""
    world = World(config)
    world.populate()
    return world
