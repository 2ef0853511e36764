"""Prey behavior: grazing and opposite-gender mate search."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from mobsim.config.species import PREY_MIN_BREEDING_FOOD
from mobsim.entities.mob import Mob
from mobsim.entities.plant import Grass
from mobsim.spatial.location import Location

if TYPE_CHECKING:
    from mobsim.simulation.step_context import StepContext
    from mobsim.spatial.field import Field


def prey_breed_gate(mob: Mob, ctx: "StepContext") -> bool:
    """Prey breed only when well fed."""
    return (
        mob.food_level > mob.traits.breed_food_threshold
        and mob.food_level >= PREY_MIN_BREEDING_FOOD
    )


def find_partner(mob: Mob, field: "Field") -> Optional[Mob]:
    """Find a living same-species neighbor of the opposite gender in ``field``."""
    for loc in field.get_adjacent_locations(mob.location):
        other = field.get_mob_at(loc)
        if other is None or other is mob or not other.is_alive:
            continue
        if other.species is mob.species and other.is_male != mob.is_male:
            return other
    return None


def graze(mob: Mob, ctx: "StepContext") -> Optional[Location]:
    """Eat grown grass on an orthogonal neighbor of the current field.

    Returns:
        The grazed cell as the next target, or None if nothing was eaten
    """
    field = ctx.current
    for loc in field.get_orthogonal_locations(mob.location):
        plant = field.get_object_at(loc)
        if isinstance(plant, Grass) and plant.is_grown:
            mob.feed(plant.eat())
            return loc
    return None
