"""Per-species behavior descriptors.

Each species is described by its traits plus a small function table: the
breeding gate, the mate search, the forage/hunt action and an optional
species-wide action run once per step. The shared pipeline in
``mobsim.behavior.pipeline`` drives every species through these hooks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Optional

from mobsim.behavior.predator import find_kin, make_hunt, predator_breed_gate
from mobsim.behavior.prey import find_partner, graze, prey_breed_gate
from mobsim.behavior.spawning import bank_night_kill
from mobsim.entities.mob import Mob
from mobsim.entities.species import Species, SpeciesTraits
from mobsim.spatial.location import Location

if TYPE_CHECKING:
    from mobsim.simulation.step_context import StepContext
    from mobsim.spatial.field import Field


@dataclass(frozen=True)
class SpeciesBehavior:
    """Function table for one species.

    Attributes:
        traits: Shared species constants
        breed_gate: Food/density check before any breeding attempt
        find_mate: Mate search over the field being written this step
        forage: Grazing or hunting, run only below the forage threshold; returns
            the cell to move onto, if any
        nocturnal_spawning: Whether the species banks night kills and
            spawns from them during the day
    """

    traits: SpeciesTraits
    breed_gate: Callable[[Mob, "StepContext"], bool]
    find_mate: Callable[[Mob, "Field"], Optional[Mob]]
    forage: Callable[[Mob, "StepContext"], Optional[Location]]
    nocturnal_spawning: bool = False

    @property
    def species(self) -> Species:
        return self.traits.species


def _prey_behavior(species: Species) -> SpeciesBehavior:
    return SpeciesBehavior(
        traits=species.traits,
        breed_gate=prey_breed_gate,
        find_mate=find_partner,
        forage=graze,
    )


BEHAVIORS: Dict[Species, SpeciesBehavior] = {
    Species.COW: _prey_behavior(Species.COW),
    Species.PIG: _prey_behavior(Species.PIG),
    Species.VILLAGER: _prey_behavior(Species.VILLAGER),
    Species.ZOMBIE: SpeciesBehavior(
        traits=Species.ZOMBIE.traits,
        breed_gate=predator_breed_gate,
        find_mate=find_kin,
        forage=make_hunt(on_kill=bank_night_kill),
        nocturnal_spawning=True,
    ),
    Species.CREEPER: SpeciesBehavior(
        traits=Species.CREEPER.traits,
        breed_gate=predator_breed_gate,
        find_mate=find_kin,
        forage=make_hunt(rain_massacre=True),
    ),
}


def behavior_for(species: Species) -> SpeciesBehavior:
    return BEHAVIORS[species]
