"""The generic mob record shared by every animal species.

A ``Mob`` holds only per-individual state (age, food, location, gender,
disease). Everything species-specific comes from ``mob.traits`` and from the
behavior descriptor registered for ``mob.species``.

Life cycle is one-way: ALIVE -> DEAD. Dying records a ``DeathCause`` once
and clears the location; nothing can bring a mob back.
"""

from __future__ import annotations

import itertools
import random
from enum import Enum
from typing import List, Optional

from mobsim.entities.species import Species, SpeciesTraits
from mobsim.spatial.location import Location


_mob_ids = itertools.count(1)


class DeathCause(Enum):
    OLD_AGE = "old_age"
    STARVATION = "starvation"
    PREDATION = "predation"
    DISEASE = "disease"
    CROWDED = "crowded"
    REMOVED = "removed"


class Mob:
    """A single animal.

    Attributes:
        mob_id: Unique, increasing identifier (diagnostics only)
        species: Species tag used for every same-species check
        age: Steps lived; never decreases
        food_level: Remaining food; the mob starves at or below zero
        location: Current cell, or None once dead
        diseased: Whether the mob carries the disease
        is_male: Gender, fixed at creation
        death_cause: Why the mob died (None while alive)
    """

    def __init__(
        self,
        species: Species,
        *,
        age: int = 0,
        food_level: Optional[int] = None,
        is_male: bool = True,
        location: Optional[Location] = None,
    ) -> None:
        self.mob_id = next(_mob_ids)
        self.species = species
        self.traits: SpeciesTraits = species.traits
        self.age = age
        self.food_level = food_level if food_level is not None else self.traits.hunger_limit // 2
        self.is_male = is_male
        self.location = location
        self.diseased = False
        self.death_cause: Optional[DeathCause] = None
        self._alive = True

    @classmethod
    def create(
        cls,
        species: Species,
        rng: random.Random,
        *,
        random_age: bool = False,
        location: Optional[Location] = None,
    ) -> "Mob":
        """Create a mob with the species' starting age, food and a random gender.

        Args:
            species: Species of the new mob
            rng: Run RNG
            random_age: Draw a random age in [0, max_age) (world build)
                instead of starting as a newborn
            location: Optional starting location
        """
        traits = species.traits
        age = traits.random_age(rng) if random_age else 0
        return cls(
            species,
            age=age,
            food_level=traits.initial_food(rng),
            is_male=rng.random() < 0.5,
            location=location,
        )

    @property
    def is_alive(self) -> bool:
        return self._alive

    @property
    def is_prey(self) -> bool:
        return self.traits.is_prey

    def set_dead(self, cause: DeathCause) -> None:
        """Mark the mob dead. The first recorded cause wins."""
        if not self._alive:
            return
        self._alive = False
        self.death_cause = cause
        self.location = None

    def increment_age(self, years: int = 1) -> None:
        self.age += years
        if self.age >= self.traits.max_age:
            self.set_dead(DeathCause.OLD_AGE)

    def increment_hunger(self) -> None:
        self.food_level -= 1
        if self.food_level <= 0:
            self.set_dead(DeathCause.STARVATION)

    def feed(self, amount: int) -> None:
        """Gain food, capped at the hunger limit."""
        self.food_level = min(self.food_level + amount, self.traits.hunger_limit)

    def starve_in_place(self) -> None:
        """Apply the stationary starvation penalty for a step spent unable to move."""
        self.food_level -= self.traits.stationary_decay
        if self.food_level <= 0:
            self.set_dead(DeathCause.STARVATION)

    def infect(self) -> bool:
        """Give the mob the disease.

        Becoming diseased adds the mob's current age to its age once, which
        may kill it outright.

        Returns:
            True if the mob was newly infected
        """
        if self.diseased or not self._alive:
            return False
        self.diseased = True
        years = self.age
        self.age += years
        if self.age >= self.traits.max_age:
            self.set_dead(DeathCause.DISEASE)
        return True

    def can_breed_by_age(self) -> bool:
        return self._alive and self.age >= self.traits.breeding_age

    def find_best_move(
        self, free_locations: List[Location], rng: random.Random
    ) -> Optional[Location]:
        """Pick the free cell furthest (Manhattan) from the current location.

        Ties go to the first candidate in list order; the list is already
        shuffled by the field. Falls back to a random candidate when the
        mob has no location to measure from.
        """
        if not free_locations:
            return None
        if self.location is None:
            return rng.choice(free_locations)

        best: Optional[Location] = None
        max_distance = -1
        for loc in free_locations:
            distance = self.location.manhattan_distance(loc)
            if distance > max_distance:
                max_distance = distance
                best = loc
        return best if best is not None else rng.choice(free_locations)

    def __repr__(self) -> str:
        state = "alive" if self._alive else f"dead:{self.death_cause.value}"
        return (
            f"Mob#{self.mob_id}({self.species}, age={self.age}, food={self.food_level}, "
            f"loc={self.location}, {state})"
        )
