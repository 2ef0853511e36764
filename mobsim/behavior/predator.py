"""Predator behavior: hunting, rain kills and kin breeding."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

from mobsim.config.field import HUNT_RADIUS
from mobsim.config.species import PREDATOR_MAX_BREEDING_NEIGHBORS
from mobsim.entities.mob import Mob
from mobsim.environment import Weather
from mobsim.spatial.location import Location

if TYPE_CHECKING:
    from mobsim.simulation.step_context import StepContext
    from mobsim.spatial.field import Field

logger = logging.getLogger(__name__)

KillHook = Callable[[Mob, Mob, "StepContext"], None]


def predator_breed_gate(mob: Mob, ctx: "StepContext") -> bool:
    """Predators breed when fed and not already crowded by their own kind."""
    if mob.food_level <= mob.traits.breed_food_threshold:
        return False
    nearby = ctx.current.count_nearby_mobs(mob.location, mob.species)
    return nearby < PREDATOR_MAX_BREEDING_NEIGHBORS


def find_kin(mob: Mob, field: "Field") -> Optional[Mob]:
    """Find any living same-species neighbor in ``field``."""
    for loc in field.get_adjacent_locations(mob.location):
        other = field.get_mob_at(loc)
        if other is not None and other is not mob and other.is_alive and other.species is mob.species:
            return other
    return None


def _eat(predator: Mob, prey: Mob, ctx: "StepContext", on_kill: Optional[KillHook]) -> None:
    ctx.record_kill(predator, prey)
    predator.feed(prey.traits.food_value)
    logger.debug(f"{predator!r} killed {prey.species}#{prey.mob_id}")
    if on_kill is not None:
        on_kill(predator, prey, ctx)


def _living_prey_at(field: "Field", loc: Location) -> Optional[Mob]:
    mob = field.get_mob_at(loc)
    if mob is not None and mob.is_alive and mob.is_prey:
        return mob
    return None


def kill_adjacent_prey(predator: Mob, ctx: "StepContext", on_kill: Optional[KillHook] = None) -> int:
    """Kill every living prey adjacent to ``predator`` without moving."""
    field = ctx.current
    killed = 0
    for loc in field.get_adjacent_locations(predator.location):
        prey = _living_prey_at(field, loc)
        if prey is not None:
            _eat(predator, prey, ctx, on_kill)
            killed += 1
    return killed


def make_hunt(
    *, rain_massacre: bool = False, on_kill: Optional[KillHook] = None
) -> Callable[[Mob, "StepContext"], Optional[Location]]:
    """Build a species' hunt action.

    Args:
        rain_massacre: Kill all adjacent prey first when it is raining
        on_kill: Called after every kill (e.g. to bank nocturnal spawns)

    Returns:
        A forage callable returning the cell of the prey that was eaten
    """

    def hunt(mob: Mob, ctx: "StepContext") -> Optional[Location]:
        field = ctx.current
        if rain_massacre and field.weather is Weather.RAINY:
            kill_adjacent_prey(mob, ctx, on_kill)

        for loc in field.get_nearby_locations(mob.location, HUNT_RADIUS):
            prey = _living_prey_at(field, loc)
            if prey is not None:
                _eat(mob, prey, ctx, on_kill)
                return loc
        return None

    return hunt
