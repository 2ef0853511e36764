"""Nocturnal spawning: kills made at night turn into new mobs by day."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mobsim.config.species import NOCTURNAL_SPAWN_CAP
from mobsim.entities.mob import Mob
from mobsim.entities.species import Species
from mobsim.environment import TimeOfDay
from mobsim.util.rng import require_rng

if TYPE_CHECKING:
    from mobsim.simulation.step_context import StepContext

logger = logging.getLogger(__name__)


class NocturnalSpawnPool:
    """Pending spawns banked by one species' night-time kills.

    Attributes:
        species: Species that spawns from this pool
        pending: Spawns banked but not yet released
        cap: Upper bound on ``pending``
    """

    def __init__(self, species: Species, cap: int = NOCTURNAL_SPAWN_CAP) -> None:
        self.species = species
        self.cap = cap
        self.pending = 0

    def record_kill(self, time_of_day: TimeOfDay) -> None:
        if time_of_day is TimeOfDay.NIGHT:
            self.pending = min(self.pending + 1, self.cap)

    def reset(self) -> None:
        self.pending = 0

    def spawn(self, ctx: "StepContext") -> int:
        """Release banked spawns into the next field during the day.

        Up to ``min(pending, living members)`` spawns are attempted. Each
        copies a random living parent's species, starts with a random age
        below half the max age and random food below a third of the hunger
        limit, and lands on a random free neighbor of the parent.

        Returns:
            Number of mobs actually spawned
        """
        field = ctx.next_field
        if field.time_of_day is not TimeOfDay.DAY or self.pending <= 0:
            return 0

        parents = field.get_mobs(self.species, living_only=True)
        if not parents:
            return 0

        traits = self.species.traits
        rng = require_rng(ctx, "NocturnalSpawnPool.spawn")
        attempts = min(self.pending, len(parents))
        spawned = 0
        for _ in range(attempts):
            parent = rng.choice(parents)
            free = field.get_free_adjacent_locations(field.location_of(parent))
            if not free:
                continue
            spawn_at = rng.choice(free)
            young = Mob(
                self.species,
                age=rng.randrange(traits.max_age // 2),
                food_level=rng.randrange(traits.hunger_limit // 3),
                is_male=rng.random() < 0.5,
            )
            if field.place_object(young, spawn_at):
                spawned += 1

        self.pending -= spawned
        if spawned:
            ctx.report.spawned[self.species] += spawned
            logger.debug(f"{spawned} {self.species} spawned at step {field.generation}")
        return spawned


def bank_night_kill(predator: Mob, prey: Mob, ctx: "StepContext") -> None:
    """Kill hook: bank a nocturnal spawn for the predator's species."""
    pool = ctx.spawn_pools.get(predator.species)
    if pool is not None:
        pool.record_kill(ctx.current.time_of_day)
