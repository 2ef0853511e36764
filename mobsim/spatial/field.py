"""The rectangular grid holding one generation of mobs and plants.

A new ``Field`` is built every step. Mobs sense the current generation and
write themselves (and their offspring) into the next one, so a field is
only ever mutated by the step that is building it.

Each cell holds at most one mob and, independently, at most one plant.
Placement is first-writer-wins per category: a second mob targeting a cell
already holding a living mob is silently refused. Dead mobs stay in the
registry and occupancy until ``prune_dead`` runs at the end of the step, but
they never block a cell.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, Iterator, List, Optional, Union

from mobsim.config.field import ADJACENT_RADIUS, DEFAULT_DEPTH, DEFAULT_WIDTH
from mobsim.entities.mob import DeathCause, Mob
from mobsim.entities.plant import Plant
from mobsim.entities.species import PlantKind, Species
from mobsim.environment import EnvironmentState, Season, TimeOfDay, Weather
from mobsim.spatial.location import Location
from mobsim.util.rng import require_rng_param

logger = logging.getLogger(__name__)

Entity = Union[Mob, Plant]

_ORTHOGONAL_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Field:
    """One generation of the simulated world.

    Attributes:
        depth: Number of rows
        width: Number of columns
        rng: The run RNG, used for neighbor shuffles
        environment: Time of day, weather and season for this generation
        generation: Step number that produced this field
    """

    def __init__(
        self,
        depth: int = DEFAULT_DEPTH,
        width: int = DEFAULT_WIDTH,
        *,
        rng: Optional[random.Random] = None,
        environment: Optional[EnvironmentState] = None,
        generation: int = 0,
    ) -> None:
        if depth <= 0 or width <= 0:
            logger.warning(
                f"Field dimensions must be positive (got {depth}x{width}); "
                f"using defaults {DEFAULT_DEPTH}x{DEFAULT_WIDTH}"
            )
            depth, width = DEFAULT_DEPTH, DEFAULT_WIDTH
        self.depth = depth
        self.width = width
        self.rng = require_rng_param(rng, "Field.__init__")
        self.environment = environment or EnvironmentState()
        self.generation = generation

        # Occupancy by cell, one map per category
        self._mob_grid: Dict[Location, Mob] = {}
        self._plant_grid: Dict[Location, Plant] = {}

        # Registries: entity -> cell it was placed at, in placement order
        self._mob_cells: Dict[Mob, Location] = {}
        self._plant_cells: Dict[Plant, Location] = {}

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    @property
    def time_of_day(self) -> TimeOfDay:
        return self.environment.time_of_day

    @property
    def weather(self) -> Weather:
        return self.environment.weather

    @property
    def season(self) -> Season:
        return self.environment.season

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def in_bounds(self, location: Optional[Location]) -> bool:
        if location is None:
            return False
        return 0 <= location.row < self.depth and 0 <= location.col < self.width

    def get_mob_at(self, location: Optional[Location]) -> Optional[Mob]:
        """Return the mob registered at ``location`` (possibly dead), or None."""
        if location is None:
            return None
        return self._mob_grid.get(location)

    def get_plant_at(self, location: Optional[Location]) -> Optional[Plant]:
        if location is None:
            return None
        return self._plant_grid.get(location)

    def get_object_at(self, location: Optional[Location]) -> Optional[Entity]:
        """Return the living mob at ``location``, else the plant there, else None."""
        mob = self.get_mob_at(location)
        if mob is not None and mob.is_alive:
            return mob
        return self.get_plant_at(location)

    def is_free(self, location: Location) -> bool:
        """A cell is free when no living mob occupies it (plants don't block)."""
        mob = self._mob_grid.get(location)
        return mob is None or not mob.is_alive

    def location_of(self, entity: Entity) -> Optional[Location]:
        """Cell the entity was placed at in this field, if it was placed here."""
        if isinstance(entity, Mob):
            return self._mob_cells.get(entity)
        return self._plant_cells.get(entity)

    # ------------------------------------------------------------------
    # Neighborhood queries
    # ------------------------------------------------------------------

    def get_adjacent_locations(self, location: Optional[Location]) -> List[Location]:
        """Return the in-bounds 8-neighborhood of ``location`` in random order.

        Every call reshuffles; mate search and disease spread rely on this to
        avoid a fixed directional bias.
        """
        if location is None:
            return []
        locations = self._box(location, ADJACENT_RADIUS)
        self.rng.shuffle(locations)
        return locations

    def get_orthogonal_locations(self, location: Optional[Location]) -> List[Location]:
        """Return the in-bounds N/S/E/W neighbors of ``location`` in random order."""
        if location is None:
            return []
        locations = [
            Location(location.row + dr, location.col + dc) for dr, dc in _ORTHOGONAL_OFFSETS
        ]
        locations = [loc for loc in locations if self.in_bounds(loc)]
        self.rng.shuffle(locations)
        return locations

    def get_nearby_locations(self, location: Optional[Location], radius: int) -> List[Location]:
        """Return every in-bounds cell in the ``radius`` bounding box except ``location``.

        Cells are listed in row-major order.
        """
        if location is None:
            return []
        return self._box(location, radius)

    def get_free_adjacent_locations(self, location: Optional[Location]) -> List[Location]:
        """Neighbors with no living mob, in the shuffled adjacency order."""
        return [loc for loc in self.get_adjacent_locations(location) if self.is_free(loc)]

    def get_free_locations(self) -> List[Location]:
        """Every cell with no living mob, row-major."""
        return [loc for loc in self.iter_locations() if self.is_free(loc)]

    def count_nearby_mobs(self, location: Optional[Location], species: Species) -> int:
        """Count living mobs of ``species`` in the 8-neighborhood of ``location``."""
        count = 0
        for loc in self._box(location, ADJACENT_RADIUS) if location is not None else []:
            mob = self._mob_grid.get(loc)
            if mob is not None and mob.is_alive and mob.species is species:
                count += 1
        return count

    def iter_locations(self) -> Iterator[Location]:
        for row in range(self.depth):
            for col in range(self.width):
                yield Location(row, col)

    def _box(self, location: Location, radius: int) -> List[Location]:
        start_row = max(0, location.row - radius)
        end_row = min(self.depth - 1, location.row + radius)
        start_col = max(0, location.col - radius)
        end_col = min(self.width - 1, location.col + radius)
        return [
            Location(row, col)
            for row in range(start_row, end_row + 1)
            for col in range(start_col, end_col + 1)
            if row != location.row or col != location.col
        ]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def place_object(self, entity: Optional[Entity], location: Optional[Location]) -> bool:
        """Register ``entity`` at ``location``.

        Mobs are refused when a living mob already holds the cell; plants
        when a plant already holds it. Refusals are silent no-ops.

        Returns:
            True if the entity now occupies ``location``
        """
        if entity is None or not self.in_bounds(location):
            return False

        if isinstance(entity, Mob):
            occupant = self._mob_grid.get(location)
            if occupant is not None and occupant is not entity and occupant.is_alive:
                return False
            previous = self._mob_cells.get(entity)
            if previous is not None and self._mob_grid.get(previous) is entity:
                del self._mob_grid[previous]
            self._mob_grid[location] = entity
            self._mob_cells[entity] = location
            entity.location = location
            return True

        occupant_plant = self._plant_grid.get(location)
        if occupant_plant is not None and occupant_plant is not entity:
            return False
        previous = self._plant_cells.get(entity)
        if previous is not None and self._plant_grid.get(previous) is entity:
            del self._plant_grid[previous]
        self._plant_grid[location] = entity
        self._plant_cells[entity] = location
        entity.location = location
        return True

    def remove_object(self, entity: Entity) -> None:
        """Drop ``entity`` from occupancy and the registry and mark it dead."""
        if isinstance(entity, Mob):
            cell = self._mob_cells.pop(entity, None)
            if cell is not None and self._mob_grid.get(cell) is entity:
                del self._mob_grid[cell]
            entity.set_dead(DeathCause.REMOVED)
            return
        cell = self._plant_cells.pop(entity, None)
        if cell is not None and self._plant_grid.get(cell) is entity:
            del self._plant_grid[cell]
        entity.set_dead()

    def prune_dead(self) -> List[Entity]:
        """Remove every dead mob and plant from registries and occupancy.

        Returns:
            The entities that were removed
        """
        removed: List[Entity] = []
        for mob in [m for m in self._mob_cells if not m.is_alive]:
            self.remove_object(mob)
            removed.append(mob)
        for plant in [p for p in self._plant_cells if not p.is_alive]:
            self.remove_object(plant)
            removed.append(plant)
        return removed

    # ------------------------------------------------------------------
    # Registries and population
    # ------------------------------------------------------------------

    def get_mobs(self, species: Optional[Species] = None, living_only: bool = False) -> List[Mob]:
        """Registered mobs in placement order, optionally filtered."""
        return [
            mob
            for mob in self._mob_cells
            if (species is None or mob.species is species) and (mob.is_alive or not living_only)
        ]

    def get_plants(self) -> List[Plant]:
        return list(self._plant_cells)

    def get_population(self, kind: Union[Species, PlantKind]) -> int:
        """Number of living mobs of a species, or living plants of a kind."""
        if isinstance(kind, PlantKind):
            return sum(1 for p in self._plant_cells if p.is_alive and p.kind is kind)
        return sum(1 for m in self._mob_cells if m.is_alive and m.species is kind)

    def get_population_details(self) -> Dict[str, int]:
        """Living counts keyed by display name, every species and plant kind included."""
        details = {str(species): 0 for species in Species}
        details.update({str(kind): 0 for kind in PlantKind})
        for mob in self._mob_cells:
            if mob.is_alive:
                details[str(mob.species)] += 1
        for plant in self._plant_cells:
            if plant.is_alive:
                details[str(plant.kind)] += 1
        return details

    def is_viable(self) -> bool:
        """True while at least one living mob of a recognized species remains."""
        return any(mob.is_alive for mob in self._mob_cells)

    def __repr__(self) -> str:
        return (
            f"Field(gen={self.generation}, {self.depth}x{self.width}, "
            f"mobs={len(self._mob_cells)}, plants={len(self._plant_cells)}, {self.environment})"
        )
