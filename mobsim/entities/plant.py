"""Plants: stationary food sources that regrow from seed."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Optional

from mobsim.config.species import GRASS_FOOD_VALUE, GRASS_GROWTH_PROBABILITY
from mobsim.entities.species import PlantKind

if TYPE_CHECKING:
    from mobsim.spatial.field import Field
    from mobsim.spatial.location import Location


class Plant:
    """Base class for plants.

    Plants never move; the simulator carries each one forward into the next
    field at its fixed location before calling ``grow``.
    """

    kind: PlantKind

    def __init__(self, location: Optional["Location"] = None) -> None:
        self.location = location
        self.alive = True

    @property
    def is_alive(self) -> bool:
        return self.alive

    def set_dead(self) -> None:
        self.alive = False
        self.location = None

    def grow(self, current: "Field", next_field: "Field", rng: random.Random) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(location={self.location}, alive={self.alive})"


class Grass(Plant):
    """Edible grass.

    Starts fully grown. Eating it turns it back into a seed, which regrows
    with a small probability each step.
    """

    kind = PlantKind.GRASS
    food_value = GRASS_FOOD_VALUE
    growth_probability = GRASS_GROWTH_PROBABILITY

    def __init__(self, location: Optional["Location"] = None, is_seed: bool = False) -> None:
        super().__init__(location)
        self.is_seed = is_seed

    @property
    def is_grown(self) -> bool:
        return self.alive and not self.is_seed

    def grow(self, current: "Field", next_field: "Field", rng: random.Random) -> None:
        if self.is_seed and rng.random() < self.growth_probability:
            self.is_seed = False

    def eat(self) -> int:
        """Consume the grass and return the food gained (0 if not grown)."""
        if not self.is_grown:
            return 0
        self.is_seed = True
        return self.food_value
