"""Tests for the Simulator: stepping, viability, reset and world build."""

import random

import pytest

from mobsim.config.simulation_config import (
    BreedingConfig,
    FieldConfig,
    PopulationConfig,
    SimulationConfig,
)
from mobsim.entities.mob import Mob
from mobsim.entities.plant import Grass
from mobsim.entities.species import PlantKind, Species
from mobsim.environment import TimeOfDay
from mobsim.exceptions import ConfigurationError, SimulationError
from mobsim.simulation.engine import Simulator
from mobsim.simulation.step_context import StepReport
from mobsim.spatial.location import Location

EMPTY_WORLD = PopulationConfig(
    creeper_probability=0,
    zombie_probability=0,
    cow_probability=0,
    pig_probability=0,
    villager_probability=0,
    grass_probability=0,
)


def _config(depth=20, width=30, **overrides):
    return SimulationConfig.headless_fast(seed=42).with_overrides(
        field=FieldConfig(depth=depth, width=width), **overrides
    )


class RecordingView:
    """View that records every status update and stops after ``limit`` steps."""

    def __init__(self, limit=None):
        self.limit = limit
        self.steps = []

    def show_status(self, step, field, report):
        self.steps.append(step)

    def is_viable(self, field):
        return self.limit is None or len(self.steps) <= self.limit


class TestConstruction:
    def test_invalid_dimensions_fall_back_to_defaults(self, caplog):
        sim = Simulator(_config(), depth=0, width=5, populate=False)
        assert (sim.depth, sim.width) == (80, 120)
        assert (sim.field.depth, sim.field.width) == (80, 120)
        assert "default" in caplog.text

    def test_invalid_config_is_rejected(self):
        with pytest.raises(ConfigurationError):
            Simulator(_config(step_delay_ms=-1))

    def test_injected_rng_is_used(self):
        rng = random.Random(5)
        sim = Simulator(_config(), rng=rng, populate=False)
        assert sim.rng is rng
        assert sim.seed is None

    def test_breeding_limits_come_from_config(self):
        config = _config(breeding=BreedingConfig(prey_limits=(50, 10, 0.5)))
        sim = Simulator(config, populate=False)
        cow = sim.policy.limits_for(Species.COW)
        assert (cow.carrying_capacity, cow.repopulation_threshold, cow.base_probability) == (
            50,
            10,
            0.5,
        )

    def test_zombies_have_a_spawn_pool(self, simulator):
        assert set(simulator.spawn_pools) == {Species.ZOMBIE}


class TestPopulate:
    def test_creation_probabilities(self):
        sim = Simulator(_config(depth=50, width=50))
        cells = 50 * 50
        for species, probability in (
            (Species.ZOMBIE, 0.04),
            (Species.CREEPER, 0.04),
            (Species.COW, 0.13),
            (Species.VILLAGER, 0.13),
        ):
            expected = cells * probability
            assert expected * 0.6 < sim.field.get_population(species) < expected * 1.4
        assert sim.field.get_population(PlantKind.GRASS) > cells * 0.11

    def test_mobs_start_with_random_ages(self, simulator):
        ages = {mob.age for mob in simulator.field.get_mobs()}
        assert len(ages) > 10

    def test_empty_world(self):
        sim = Simulator(_config(population=EMPTY_WORLD))
        assert sim.field.get_mobs() == []
        assert not sim.is_viable()


class TestStepping:
    def test_step_counter_and_report(self, simulator):
        report = simulator.simulate_one_step()
        assert isinstance(report, StepReport)
        assert report.step == simulator.step == 1
        assert simulator.last_report is report
        assert simulator.field.generation == 1

    def test_cells_are_never_shared(self, simulator):
        for _ in range(15):
            simulator.simulate_one_step()
            seen = set()
            for mob in simulator.field.get_mobs():
                assert mob.location not in seen
                seen.add(mob.location)
                assert simulator.field.get_mob_at(mob.location) is mob

    def test_dead_entities_are_pruned_every_step(self, simulator):
        for _ in range(15):
            simulator.simulate_one_step()
            assert all(mob.is_alive for mob in simulator.field.get_mobs())
            assert all(plant.is_alive for plant in simulator.field.get_plants())

    def test_deaths_are_reported(self, simulator):
        deaths = 0
        for _ in range(15):
            deaths += simulator.simulate_one_step().total_deaths
        assert deaths > 0

    def test_plants_are_carried_forward(self):
        sim = Simulator(_config(population=EMPTY_WORLD))
        grass = Grass(Location(3, 3))
        sim.field.place_object(grass, Location(3, 3))

        sim.simulate_one_step()
        assert sim.field.get_plant_at(Location(3, 3)) is grass

    def test_environment_advances_with_steps(self):
        sim = Simulator(_config(population=EMPTY_WORLD))
        for _ in range(100):
            sim.simulate_one_step()
        assert sim.field.time_of_day is TimeOfDay.NIGHT
        assert sim.environment.time_of_day is TimeOfDay.NIGHT

    def test_zombie_spawns_released_by_day(self):
        sim = Simulator(_config(population=EMPTY_WORLD))
        sim.field.place_object(Mob(Species.ZOMBIE, age=20, food_level=200), Location(10, 10))
        sim.spawn_pools[Species.ZOMBIE].pending = 1

        report = sim.simulate_one_step()
        assert report.spawned[Species.ZOMBIE] == 1
        assert sim.field.get_population(Species.ZOMBIE) == 2
        assert sim.spawn_pools[Species.ZOMBIE].pending == 0


class TestSimulate:
    def test_runs_the_requested_steps(self, simulator):
        assert simulator.simulate(5) == 5
        assert simulator.step == 5

    def test_empty_world_runs_no_steps(self):
        sim = Simulator(_config(population=EMPTY_WORLD))
        assert sim.simulate(10) == 0
        assert sim.step == 0

    def test_stops_when_last_mob_dies(self, caplog):
        sim = Simulator(_config(population=EMPTY_WORLD))
        sim.field.place_object(Mob(Species.ZOMBIE, age=298), Location(5, 5))

        with caplog.at_level("INFO"):
            assert sim.simulate(10) == 2
        assert not sim.is_viable()
        assert "Ended at step: 2" in caplog.text

    def test_view_is_notified_and_can_stop_the_run(self):
        view = RecordingView(limit=3)
        sim = Simulator(_config(), view=view)
        assert sim.simulate(10) == 3
        assert view.steps == [0, 1, 2, 3]

    def test_negative_step_budget_is_rejected(self, simulator):
        with pytest.raises(SimulationError):
            simulator.simulate(-1)

    def test_long_simulation_is_bounded(self):
        sim = Simulator(_config(population=EMPTY_WORLD))
        assert sim.run_long_simulation() == 0


class TestReset:
    def test_reset_returns_to_step_zero(self, simulator):
        simulator.simulate(5)
        simulator.spawn_pools[Species.ZOMBIE].pending = 4

        simulator.reset()

        assert simulator.step == 0
        assert simulator.last_report is None
        assert simulator.field.generation == 0
        assert simulator.is_viable()
        assert simulator.spawn_pools[Species.ZOMBIE].pending == 0
        assert simulator.environment.time_of_day is TimeOfDay.DAY
