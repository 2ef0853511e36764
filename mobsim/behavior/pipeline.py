"""The per-step action pipeline shared by every species.

Order of a living mob's step (it stops as soon as the mob dies):

    1. age
    2. hunger
    3. disease roll and spread (current field)
    4. free neighbors in the next field
    5. breeding
    6. grazing / hunting when hungry enough
    7. dispersal move when nothing was eaten
    8. settle into the next field, or starve in place when stuck

Mobs only sense the current field. The next field is used for free-cell
queries, the mate search, the breeding population read, and placement.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from mobsim.behavior.registry import SpeciesBehavior, behavior_for
from mobsim.disease import try_to_infect
from mobsim.entities.mob import DeathCause, Mob
from mobsim.spatial.location import Location

if TYPE_CHECKING:
    from mobsim.simulation.step_context import StepContext

logger = logging.getLogger(__name__)


def act(mob: Mob, ctx: StepContext, behavior: Optional[SpeciesBehavior] = None) -> None:
    """Run one step of ``mob``'s life against ``ctx``."""
    if not mob.is_alive:
        return
    behavior = behavior or behavior_for(mob.species)

    mob.increment_age()
    if not mob.is_alive:
        return
    mob.increment_hunger()
    if not mob.is_alive:
        return

    ctx.report.infections += try_to_infect(
        mob, ctx.current, ctx.rng, ctx.winter_disease_multiplier
    )
    if not mob.is_alive:
        return

    origin = mob.location
    free_locations = ctx.next_field.get_free_adjacent_locations(origin)

    try_to_breed(mob, ctx, behavior, free_locations)

    target: Optional[Location] = None
    if mob.food_level < mob.traits.forage_food_threshold:
        target = behavior.forage(mob, ctx)
    if target is None and free_locations:
        target = mob.find_best_move(free_locations, ctx.rng)

    if target is not None:
        _settle(mob, ctx, target, origin)
        return

    mob.starve_in_place()
    if mob.is_alive:
        _settle(mob, ctx, origin, origin)


def try_to_breed(
    mob: Mob,
    ctx: StepContext,
    behavior: SpeciesBehavior,
    free_locations: List[Location],
) -> int:
    """Attempt one breeding event.

    Newborns take cells from the front of ``free_locations``, which is
    consumed in place so the parent cannot move onto them afterwards.

    Returns:
        Number of newborns placed
    """
    if not free_locations:
        return 0
    if not behavior.breed_gate(mob, ctx) or not mob.can_breed_by_age():
        return 0
    if not ctx.policy.can_breed(mob.species, ctx.next_field, ctx.rng):
        return 0
    if behavior.find_mate(mob, ctx.next_field) is None:
        return 0

    births = ctx.rng.randint(1, mob.traits.max_litter_size)
    born = 0
    while born < births and free_locations:
        birth_at = free_locations.pop(0)
        young = Mob.create(mob.species, ctx.rng)
        if ctx.next_field.place_object(young, birth_at):
            born += 1

    if born:
        ctx.report.births[mob.species] += born
        logger.debug(f"{mob!r} produced {born} young")
    return born


def _settle(mob: Mob, ctx: StepContext, target: Location, origin: Optional[Location]) -> None:
    """Place ``mob`` at ``target`` in the next field, else back at ``origin``.

    A mob that can do neither has been crowded out of the world.
    """
    field = ctx.next_field
    if field.place_object(mob, target):
        return
    if origin is not None and origin != target and field.place_object(mob, origin):
        logger.debug(f"{mob!r} lost contested cell {target}, stayed put")
        return
    mob.set_dead(DeathCause.CROWDED)
    ctx.report.crowded_out += 1
    logger.debug(f"Mob#{mob.mob_id} ({mob.species}) crowded out at {target}")
