"""Initial world population.

Every cell draws once against the cumulative creation probabilities, in
``creation_order`` order. Mobs are created with a random age; each grass
patch also seeds a small cluster of grass on free neighboring cells.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from typing import List, Optional, Tuple, Union

from mobsim.config.simulation_config import PopulationConfig
from mobsim.entities.mob import Mob
from mobsim.entities.plant import Grass
from mobsim.entities.species import PlantKind, Species
from mobsim.spatial.field import Field
from mobsim.spatial.location import Location
from mobsim.util.rng import require_rng_param

logger = logging.getLogger(__name__)

Kind = Union[Species, PlantKind]


def creation_order(config: PopulationConfig) -> List[Tuple[Kind, float]]:
    return [
        (Species.CREEPER, config.creeper_probability),
        (Species.ZOMBIE, config.zombie_probability),
        (Species.COW, config.cow_probability),
        (Species.PIG, config.pig_probability),
        (Species.VILLAGER, config.villager_probability),
        (PlantKind.GRASS, config.grass_probability),
    ]


class WorldBuilder:
    """Fills an empty field with the starting population."""

    def __init__(self, config: Optional[PopulationConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or PopulationConfig()
        self.rng = require_rng_param(rng, "WorldBuilder.__init__")
        self._order = creation_order(self.config)

    def choose_kind(self) -> Optional[Kind]:
        """Draw the occupant kind for one cell (None leaves the cell empty)."""
        draw = self.rng.random()
        cumulative = 0.0
        for kind, probability in self._order:
            cumulative += probability
            if draw <= cumulative:
                return kind
        return None

    def populate(self, field: Field) -> Counter:
        """Populate ``field`` cell by cell.

        Returns:
            Counter of entities placed, keyed by display name
        """
        placed: Counter = Counter()
        for location in list(field.iter_locations()):
            kind = self.choose_kind()
            if isinstance(kind, Species):
                mob = Mob.create(kind, self.rng, random_age=True)
                if field.place_object(mob, location):
                    placed[str(kind)] += 1
            elif kind is PlantKind.GRASS:
                placed[str(kind)] += self.place_grass(field, location)

        summary = ", ".join(f"{name}={count}" for name, count in sorted(placed.items()))
        logger.info(f"Populated {field.depth}x{field.width} field: {summary}")
        return placed

    def place_grass(self, field: Field, location: Location) -> int:
        """Place a grass patch plus a cluster on its free neighbors.

        Returns:
            Number of grass patches placed
        """
        if field.get_plant_at(location) is not None:
            return 0
        if not field.place_object(Grass(location), location):
            return 0

        placed = 1
        cluster_size = self.rng.randint(self.config.grass_cluster_min, self.config.grass_cluster_max)
        for neighbor in field.get_free_adjacent_locations(location)[:cluster_size]:
            if field.place_object(Grass(neighbor), neighbor):
                placed += 1
        return placed
