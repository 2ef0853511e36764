"""Field statistics: per-species living counts for reporting."""

from __future__ import annotations

from typing import Dict

from mobsim.entities.species import PlantKind, Species
from mobsim.spatial.field import Field

# Display order for population lines
REPORT_ORDER = (
    str(Species.ZOMBIE),
    str(Species.CREEPER),
    str(Species.COW),
    str(Species.PIG),
    str(Species.VILLAGER),
    str(PlantKind.GRASS),
)


class FieldStats:
    """Counts living occupants of a field, cached until ``reset``.

    The simulator resets the stats after every step so the next query
    recounts the new generation.
    """

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}
        self._counts_valid = False

    def reset(self) -> None:
        self._counts_valid = False
        for name in self._counts:
            self._counts[name] = 0

    def increment_count(self, name: str) -> None:
        self._counts[name] = self._counts.get(name, 0) + 1

    def count_finished(self) -> None:
        self._counts_valid = True

    def counts(self, field: Field) -> Dict[str, int]:
        if not self._counts_valid:
            self._generate_counts(field)
        return dict(self._counts)

    def get_population_details(self, field: Field) -> str:
        """Return a ``"Name: count"`` summary of every counted kind."""
        counts = self.counts(field)
        return " ".join(f"{name}: {counts[name]}" for name in _ordered(counts))

    def is_viable(self, field: Field) -> bool:
        return field.is_viable()

    def _generate_counts(self, field: Field) -> None:
        self.reset()
        for name in REPORT_ORDER:
            self._counts.setdefault(name, 0)
        for mob in field.get_mobs(living_only=True):
            self.increment_count(str(mob.species))
        for plant in field.get_plants():
            if plant.is_alive:
                self.increment_count(str(plant.kind))
        self.count_finished()


def _ordered(counts: Dict[str, int]):
    known = [name for name in REPORT_ORDER if name in counts]
    return known + sorted(name for name in counts if name not in REPORT_ORDER)


def format_population_line(details: Dict[str, int]) -> str:
    """Format living counts as ``"Zombies: 3 | Creepers: 1 | ..."``."""
    return " | ".join(f"{_plural(name)}: {details.get(name, 0)}" for name in _ordered(details))


def _plural(name: str) -> str:
    return name if name == str(PlantKind.GRASS) else f"{name}s"
