"""Simulation entities: mobs, plants and species definitions."""

from mobsim.entities.mob import DeathCause, Mob
from mobsim.entities.plant import Grass, Plant
from mobsim.entities.species import (
    PREDATOR_SPECIES,
    PREY_SPECIES,
    SPECIES_TRAITS,
    PlantKind,
    Species,
    SpeciesTraits,
    TrophicRole,
)

__all__ = [
    "DeathCause",
    "Grass",
    "Mob",
    "Plant",
    "PlantKind",
    "PREDATOR_SPECIES",
    "PREY_SPECIES",
    "SPECIES_TRAITS",
    "Species",
    "SpeciesTraits",
    "TrophicRole",
]
