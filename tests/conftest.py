"""Pytest configuration and fixtures for mob simulation tests."""

import random

import pytest

from mobsim.behavior.spawning import NocturnalSpawnPool
from mobsim.breeding import BreedingPolicy
from mobsim.entities.mob import Mob
from mobsim.entities.species import Species
from mobsim.environment import EnvironmentState
from mobsim.simulation.step_context import StepContext
from mobsim.spatial.field import Field
from mobsim.spatial.location import Location


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def small_field(seeded_rng):
    """An empty 10x10 field with the default environment."""
    return Field(10, 10, rng=seeded_rng)


@pytest.fixture
def make_context(seeded_rng):
    """Factory for a step context over a fresh pair of fields.

    Keyword args:
        rng: RNG to use instead of the seeded one
        environment: Environment for both generations
        depth / width: Field size (default 10x10)
        policy: Breeding policy (default limits when omitted)
    """

    def _make(rng=None, environment=None, depth=10, width=10, policy=None):
        rng = rng or seeded_rng
        env = environment or EnvironmentState()
        current = Field(depth, width, rng=rng, environment=env, generation=0)
        next_field = Field(depth, width, rng=rng, environment=env, generation=1)
        return StepContext(
            current=current,
            next_field=next_field,
            rng=rng,
            policy=policy or BreedingPolicy(),
            spawn_pools={Species.ZOMBIE: NocturnalSpawnPool(Species.ZOMBIE)},
        )

    return _make


@pytest.fixture
def place_mob():
    """Create a mob and place it in a field in one call."""

    def _place(field, species, row, col, **kwargs):
        mob = Mob(species, **kwargs)
        assert field.place_object(mob, Location(row, col))
        return mob

    return _place


@pytest.fixture
def simulator():
    """A small seeded, populated headless simulator."""
    from mobsim.config.simulation_config import FieldConfig, SimulationConfig
    from mobsim.simulation.engine import Simulator

    config = SimulationConfig.headless_fast(seed=42).with_overrides(
        field=FieldConfig(depth=20, width=30)
    )
    return Simulator(config)
