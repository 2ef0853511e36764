"""Cyclic environment state: time of day, weather and season.

The simulator owns one ``EnvironmentCycle`` and advances it once per step,
before the next field is built. Fields only carry the resulting immutable
``EnvironmentState`` snapshot.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from mobsim.config.simulation_config import EnvironmentConfig
from mobsim.util.rng import require_rng_param

logger = logging.getLogger(__name__)


class TimeOfDay(Enum):
    DAY = "Day"
    NIGHT = "Night"

    def __str__(self) -> str:
        return self.value


class Weather(Enum):
    CLEAR = "Clear"
    CLOUDY = "Cloudy"
    RAINY = "Rainy"

    def __str__(self) -> str:
        return self.value


class Season(Enum):
    SUMMER = "Summer"
    AUTUMN = "Autumn"
    WINTER = "Winter"
    SPRING = "Spring"

    def __str__(self) -> str:
        return self.value

    def next(self) -> "Season":
        members = list(Season)
        return members[(members.index(self) + 1) % len(members)]


@dataclass(frozen=True)
class EnvironmentState:
    """Snapshot of the environment triple for one field generation."""

    time_of_day: TimeOfDay = TimeOfDay.DAY
    weather: Weather = Weather.CLEAR
    season: Season = Season.SUMMER

    def __str__(self) -> str:
        return f"{self.time_of_day}, {self.weather}, {self.season}"


class EnvironmentCycle:
    """Advances the environment triple on fixed step periods.

    Rules, evaluated in order for each new step number:
        - Day when ``step % day_period == 0``, else Night when
          ``step % night_period == 0``, otherwise unchanged
        - every ``weather_period`` steps the weather changes to a random
          value different from the current one
        - every ``season_period`` steps the season advances
    """

    def __init__(
        self,
        config: Optional[EnvironmentConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or EnvironmentConfig()
        self.rng = require_rng_param(rng, "EnvironmentCycle.__init__")
        self.state = EnvironmentState()

    def reset(self) -> EnvironmentState:
        self.state = EnvironmentState()
        return self.state

    def advance(self, step: int) -> EnvironmentState:
        """Compute the environment for ``step`` and make it current.

        Args:
            step: The step number being simulated (already incremented)

        Returns:
            The new environment state
        """
        cfg = self.config
        state = self.state

        if step % cfg.day_period == 0:
            state = replace(state, time_of_day=TimeOfDay.DAY)
        elif step % cfg.night_period == 0:
            state = replace(state, time_of_day=TimeOfDay.NIGHT)

        if step % cfg.weather_period == 0:
            state = replace(state, weather=self._pick_new_weather(state.weather))
            logger.info(f"Step {step}: weather changed to {state.weather}")

        if step % cfg.season_period == 0:
            state = replace(state, season=state.season.next())
            logger.info(f"Step {step}: season changed to {state.season}")

        self.state = state
        return state

    def _pick_new_weather(self, current: Weather) -> Weather:
        choices = [w for w in Weather if w is not current]
        return self.rng.choice(choices)
