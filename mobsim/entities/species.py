"""Species tags and their shared life-history traits.

Species identity is an explicit enum tag carried by every mob; all numeric
behavior constants live in the ``SPECIES_TRAITS`` table keyed by that tag.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from mobsim.config import species as cfg


class TrophicRole(Enum):
    PREY = "prey"
    PREDATOR = "predator"


class Species(Enum):
    """Recognized animal species."""

    COW = "Cow"
    PIG = "Pig"
    VILLAGER = "Villager"
    ZOMBIE = "Zombie"
    CREEPER = "Creeper"

    def __str__(self) -> str:
        return self.value

    @property
    def traits(self) -> "SpeciesTraits":
        return SPECIES_TRAITS[self]

    @property
    def is_prey(self) -> bool:
        return self.traits.role is TrophicRole.PREY


class PlantKind(Enum):
    GRASS = "Grass"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SpeciesTraits:
    """Constants shared by every member of a species.

    Attributes:
        species: The species these traits describe
        role: Prey or predator
        breeding_age: Minimum age before the mob may breed
        max_age: Age at which the mob dies of old age
        max_litter_size: Upper bound on offspring per breeding event
        hunger_limit: Food level ceiling
        food_value: Food a predator gains from eating one (0 for predators)
        disease_rate: Per-step chance of a spontaneous infection
        disease_spread_rate: Per-neighbor chance of passing the disease on
    """

    species: Species
    role: TrophicRole
    breeding_age: int
    max_age: int
    max_litter_size: int
    hunger_limit: int
    food_value: int = 0
    disease_rate: float = cfg.DISEASE_RATE
    disease_spread_rate: float = cfg.DISEASE_SPREAD_RATE

    @property
    def is_prey(self) -> bool:
        return self.role is TrophicRole.PREY

    @property
    def breed_food_threshold(self) -> float:
        """Food level that must be exceeded before breeding is attempted."""
        if self.is_prey:
            return self.hunger_limit * cfg.PREY_BREED_FOOD_FRACTION
        return self.hunger_limit * cfg.PREDATOR_BREED_FOOD_FRACTION

    @property
    def forage_food_threshold(self) -> float:
        """Food level below which the mob forages (prey) or hunts (predators)."""
        if self.is_prey:
            return self.hunger_limit * cfg.PREY_FORAGE_FOOD_FRACTION
        return self.hunger_limit * cfg.PREDATOR_HUNT_FOOD_FRACTION

    @property
    def stationary_decay(self) -> int:
        """Food lost in a step where the mob cannot move."""
        return int(self.hunger_limit * cfg.STATIONARY_STARVATION_FRACTION)

    def initial_food(self, rng: random.Random) -> int:
        """Starting food level for a newly created member of the species."""
        if self.is_prey:
            return rng.randrange(self.hunger_limit // 2, self.hunger_limit)
        return self.hunger_limit // 3

    def random_age(self, rng: random.Random) -> int:
        return rng.randrange(self.max_age)


def _prey(species: Species, breeding_age: int, max_age: int, max_litter: int) -> SpeciesTraits:
    return SpeciesTraits(
        species=species,
        role=TrophicRole.PREY,
        breeding_age=breeding_age,
        max_age=max_age,
        max_litter_size=max_litter,
        hunger_limit=cfg.PREY_HUNGER_LIMIT,
        food_value=cfg.PREY_FOOD_VALUE,
    )


def _predator(species: Species, breeding_age: int, max_age: int, max_litter: int) -> SpeciesTraits:
    return SpeciesTraits(
        species=species,
        role=TrophicRole.PREDATOR,
        breeding_age=breeding_age,
        max_age=max_age,
        max_litter_size=max_litter,
        hunger_limit=cfg.PREDATOR_HUNGER_LIMIT,
    )


SPECIES_TRAITS: Dict[Species, SpeciesTraits] = {
    Species.COW: _prey(
        Species.COW, cfg.COW_BREEDING_AGE, cfg.COW_MAX_AGE, cfg.COW_MAX_LITTER_SIZE
    ),
    Species.PIG: _prey(
        Species.PIG, cfg.PIG_BREEDING_AGE, cfg.PIG_MAX_AGE, cfg.PIG_MAX_LITTER_SIZE
    ),
    Species.VILLAGER: _prey(
        Species.VILLAGER,
        cfg.VILLAGER_BREEDING_AGE,
        cfg.VILLAGER_MAX_AGE,
        cfg.VILLAGER_MAX_LITTER_SIZE,
    ),
    Species.ZOMBIE: _predator(
        Species.ZOMBIE, cfg.ZOMBIE_BREEDING_AGE, cfg.ZOMBIE_MAX_AGE, cfg.ZOMBIE_MAX_LITTER_SIZE
    ),
    Species.CREEPER: _predator(
        Species.CREEPER,
        cfg.CREEPER_BREEDING_AGE,
        cfg.CREEPER_MAX_AGE,
        cfg.CREEPER_MAX_LITTER_SIZE,
    ),
}

PREY_SPECIES = tuple(s for s in Species if SPECIES_TRAITS[s].is_prey)
PREDATOR_SPECIES = tuple(s for s in Species if not SPECIES_TRAITS[s].is_prey)
