"""StepContext - explicit per-step state threaded through mob actions.

One ``StepContext`` is built by the simulator at the start of every step and
handed to each acting mob. It replaces process-wide policy state: the
breeding policy, the run RNG, the spawn pools and both field generations
all travel with it.
"""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict

from mobsim.entities.mob import DeathCause, Mob
from mobsim.entities.species import Species

if TYPE_CHECKING:
    from mobsim.behavior.spawning import NocturnalSpawnPool
    from mobsim.breeding import BreedingPolicy
    from mobsim.spatial.field import Field


@dataclass
class StepReport:
    """What happened during one step.

    Attributes:
        step: Step number
        births: Newborns per species
        deaths: Deaths per cause
        kills: Prey killed per predator species
        infections: New infections
        spawned: Nocturnal spawns per species
        crowded_out: Mobs that could neither move nor stay put
    """

    step: int = 0
    births: Counter = field(default_factory=Counter)
    deaths: Counter = field(default_factory=Counter)
    kills: Counter = field(default_factory=Counter)
    infections: int = 0
    spawned: Counter = field(default_factory=Counter)
    crowded_out: int = 0

    def record_death(self, mob: Mob) -> None:
        if mob.death_cause is not None:
            self.deaths[mob.death_cause] += 1

    @property
    def total_births(self) -> int:
        return sum(self.births.values())

    @property
    def total_deaths(self) -> int:
        return sum(self.deaths.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "births": {str(k): v for k, v in self.births.items()},
            "deaths": {k.value: v for k, v in self.deaths.items()},
            "kills": {str(k): v for k, v in self.kills.items()},
            "infections": self.infections,
            "spawned": {str(k): v for k, v in self.spawned.items()},
            "crowded_out": self.crowded_out,
        }


@dataclass
class StepContext:
    """Everything a mob needs to act during one step.

    Attributes:
        current: Field being read this step (sensing)
        next_field: Field being written this step
        rng: Run RNG
        policy: Breeding policy, thresholds already refreshed for this step
        spawn_pools: Nocturnal spawn pools by species
        report: Counters for this step
        winter_disease_multiplier: Outbreak rate factor applied in Winter
    """

    current: "Field"
    next_field: "Field"
    rng: random.Random
    policy: "BreedingPolicy"
    spawn_pools: Dict[Species, "NocturnalSpawnPool"] = field(default_factory=dict)
    report: StepReport = field(default_factory=StepReport)
    winter_disease_multiplier: float = 2.0

    def record_kill(self, predator: Mob, prey: Mob) -> None:
        prey.set_dead(DeathCause.PREDATION)
        self.report.kills[predator.species] += 1
