"""Population-control policy for breeding.

Each species has a carrying capacity, a repopulation threshold and a base
breeding probability. Breeding probability decays linearly with population
up to the threshold, drops to a fixed fraction of the base between the
threshold and the capacity, and is zero at or above capacity.

On top of that, a per-species block is set once a species reaches its
capacity and is only lifted once it falls back to the repopulation
threshold (hysteresis). The simulator refreshes the block once per step via
``update_thresholds`` before any mob acts.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from mobsim.config.breeding import (
    OVERPOPULATED_BREEDING_FACTOR,
    PREDATOR_BREEDING_LIMITS,
    PREY_BREEDING_LIMITS,
)
from mobsim.entities.species import Species
from mobsim.spatial.field import Field

logger = logging.getLogger(__name__)


@dataclass
class BreedingLimits:
    """Population limits for one species."""

    carrying_capacity: int
    repopulation_threshold: int
    base_probability: float
    blocked: bool = False

    @classmethod
    def from_tuple(cls, limits: Tuple[int, int, float]) -> "BreedingLimits":
        capacity, threshold, base = limits
        return cls(capacity, threshold, base)


class BreedingPolicy:
    """Per-run breeding policy consulted by every mob that tries to breed."""

    def __init__(
        self,
        prey_limits: Tuple[int, int, float] = PREY_BREEDING_LIMITS,
        predator_limits: Tuple[int, int, float] = PREDATOR_BREEDING_LIMITS,
    ) -> None:
        self._limits: Dict[Species, BreedingLimits] = {}
        for species in Species:
            limits = prey_limits if species.is_prey else predator_limits
            self._limits[species] = BreedingLimits.from_tuple(limits)

    def set_population_limits(
        self,
        species: Species,
        carrying_capacity: int,
        repopulation_threshold: int,
        base_probability: float,
    ) -> None:
        """Replace a species' limits. The new entry starts unblocked."""
        self._limits[species] = BreedingLimits(
            carrying_capacity, repopulation_threshold, base_probability
        )

    def limits_for(self, species: Species) -> Optional[BreedingLimits]:
        return self._limits.get(species)

    def is_blocked(self, species: Species) -> bool:
        limits = self._limits.get(species)
        return limits is not None and limits.blocked

    def update_thresholds(self, field: Field) -> None:
        """Refresh every species' breeding block from ``field`` populations."""
        for species, limits in self._limits.items():
            population = field.get_population(species)
            if population >= limits.carrying_capacity:
                if not limits.blocked:
                    logger.info(
                        f"{species} breeding blocked at population {population} "
                        f"(capacity {limits.carrying_capacity})"
                    )
                limits.blocked = True
            elif population <= limits.repopulation_threshold and limits.blocked:
                logger.info(f"{species} breeding resumed at population {population}")
                limits.blocked = False

    def breeding_probability(self, species: Species, field: Field) -> float:
        limits = self._limits.get(species)
        if limits is None:
            return 0.0
        population = field.get_population(species)
        if population >= limits.carrying_capacity:
            return 0.0
        if population > limits.repopulation_threshold:
            return limits.base_probability * OVERPOPULATED_BREEDING_FACTOR
        return limits.base_probability * (1 - population / limits.carrying_capacity)

    def can_breed(self, species: Species, field: Field, rng: random.Random) -> bool:
        """Whether a member of ``species`` may breed this step.

        Always False while the species is blocked or when its probability is
        zero; otherwise a single draw against the probability.
        """
        if self.is_blocked(species):
            return False
        probability = self.breeding_probability(species, field)
        if probability <= 0.0:
            return False
        return rng.random() <= probability
