"""Simulation configuration dataclasses.

The constants modules hold tuned defaults; these dataclasses gather them so
a run can be described, validated and overridden as a single object.
"""

from dataclasses import asdict, dataclass, replace
from dataclasses import field as dataclass_field
from typing import Any, Dict, Optional, Tuple

from mobsim.config.breeding import PREDATOR_BREEDING_LIMITS, PREY_BREEDING_LIMITS
from mobsim.config.environment import (
    DAY_PERIOD,
    NIGHT_PERIOD,
    SEASON_PERIOD,
    WEATHER_PERIOD,
    WINTER_DISEASE_MULTIPLIER,
)
from mobsim.config.field import DEFAULT_DEPTH, DEFAULT_WIDTH
from mobsim.config.population import (
    COW_CREATION_PROBABILITY,
    CREEPER_CREATION_PROBABILITY,
    DEFAULT_STEP_DELAY_MS,
    GRASS_CLUSTER_MAX,
    GRASS_CLUSTER_MIN,
    GRASS_CREATION_PROBABILITY,
    PIG_CREATION_PROBABILITY,
    VILLAGER_CREATION_PROBABILITY,
    ZOMBIE_CREATION_PROBABILITY,
)
from mobsim.exceptions import ConfigurationError


@dataclass
class FieldConfig:
    """Grid dimensions."""

    depth: int = DEFAULT_DEPTH
    width: int = DEFAULT_WIDTH


@dataclass
class EnvironmentConfig:
    """Periods of the day/night, weather and season cycles (in steps)."""

    day_period: int = DAY_PERIOD
    night_period: int = NIGHT_PERIOD
    weather_period: int = WEATHER_PERIOD
    season_period: int = SEASON_PERIOD
    winter_disease_multiplier: float = WINTER_DISEASE_MULTIPLIER


@dataclass
class PopulationConfig:
    """Per-cell creation probabilities used when the world is built."""

    creeper_probability: float = CREEPER_CREATION_PROBABILITY
    zombie_probability: float = ZOMBIE_CREATION_PROBABILITY
    cow_probability: float = COW_CREATION_PROBABILITY
    pig_probability: float = PIG_CREATION_PROBABILITY
    villager_probability: float = VILLAGER_CREATION_PROBABILITY
    grass_probability: float = GRASS_CREATION_PROBABILITY
    grass_cluster_min: int = GRASS_CLUSTER_MIN
    grass_cluster_max: int = GRASS_CLUSTER_MAX

    def total_probability(self) -> float:
        return (
            self.creeper_probability
            + self.zombie_probability
            + self.cow_probability
            + self.pig_probability
            + self.villager_probability
            + self.grass_probability
        )


@dataclass
class BreedingConfig:
    """Carrying capacity, repopulation threshold and base probability per role."""

    prey_limits: Tuple[int, int, float] = PREY_BREEDING_LIMITS
    predator_limits: Tuple[int, int, float] = PREDATOR_BREEDING_LIMITS


@dataclass
class SimulationConfig:
    """Aggregate configuration for a simulation run.

    Attributes:
        seed: Seed for the run's single RNG (None for a fresh, unseeded run)
        headless: Whether to run without the pygame viewer
        step_delay_ms: Pause between steps when running with a viewer
        report_every: Log population details every N steps (0 disables)
    """

    seed: Optional[int] = None
    headless: bool = True
    step_delay_ms: int = DEFAULT_STEP_DELAY_MS
    report_every: int = 50
    field: FieldConfig = dataclass_field(default_factory=FieldConfig)
    environment: EnvironmentConfig = dataclass_field(default_factory=EnvironmentConfig)
    population: PopulationConfig = dataclass_field(default_factory=PopulationConfig)
    breeding: BreedingConfig = dataclass_field(default_factory=BreedingConfig)

    @classmethod
    def headless_fast(cls, seed: Optional[int] = None) -> "SimulationConfig":
        """Configuration for tests and batch runs: no viewer, no delay."""
        return cls(seed=seed, headless=True, step_delay_ms=0, report_every=0)

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        """Return a copy with top-level fields replaced."""
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a plain dictionary."""
        data = asdict(self)
        data["breeding"] = {key: list(value) for key, value in data["breeding"].items()}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        """Create config from a dictionary, ignoring unknown keys."""
        sections = {
            "field": FieldConfig,
            "environment": EnvironmentConfig,
            "population": PopulationConfig,
            "breeding": BreedingConfig,
        }
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in cls.__dataclass_fields__:
                continue
            section = sections.get(key)
            if section is None:
                kwargs[key] = value
                continue
            known = {k: v for k, v in value.items() if k in section.__dataclass_fields__}
            if section is BreedingConfig:
                known = {k: tuple(v) for k, v in known.items()}
            kwargs[key] = section(**known)
        return cls(**kwargs)

    def validate(self) -> None:
        """Validate configuration parameters.

        Field dimensions are not checked here: the simulator substitutes the
        defaults for non-positive values instead of failing.

        Raises:
            ConfigurationError: If any parameters are invalid
        """
        if self.step_delay_ms < 0:
            raise ConfigurationError(f"step_delay_ms must be >= 0, got {self.step_delay_ms}")
        if self.report_every < 0:
            raise ConfigurationError(f"report_every must be >= 0, got {self.report_every}")

        env = self.environment
        for name in ("day_period", "night_period", "weather_period", "season_period"):
            if getattr(env, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(env, name)}")
        if env.winter_disease_multiplier < 0:
            raise ConfigurationError("winter_disease_multiplier must be >= 0")

        pop = self.population
        for name in (
            "creeper_probability",
            "zombie_probability",
            "cow_probability",
            "pig_probability",
            "villager_probability",
            "grass_probability",
        ):
            value = getattr(pop, name)
            if value < 0 or value > 1:
                raise ConfigurationError(f"{name} must be in [0, 1], got {value}")
        if pop.total_probability() > 1.0 + 1e-9:
            raise ConfigurationError(
                f"Creation probabilities sum to {pop.total_probability():.3f}, must be <= 1"
            )
        if pop.grass_cluster_min < 0 or pop.grass_cluster_max < pop.grass_cluster_min:
            raise ConfigurationError(
                "grass cluster range must satisfy 0 <= grass_cluster_min <= grass_cluster_max"
            )

        for role, limits in (
            ("prey", self.breeding.prey_limits),
            ("predator", self.breeding.predator_limits),
        ):
            capacity, threshold, base = limits
            if capacity <= 0:
                raise ConfigurationError(f"{role} carrying capacity must be positive")
            if threshold < 0 or threshold > capacity:
                raise ConfigurationError(
                    f"{role} repopulation threshold must be in [0, capacity], got {threshold}"
                )
            if base < 0 or base > 1:
                raise ConfigurationError(f"{role} base breeding probability must be in [0, 1]")
