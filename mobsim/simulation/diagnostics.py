"""Simulation diagnostics and reporting.

This module handles logging and exporting of simulation statistics, keeping
"running the simulation" separate from "reporting on the simulation".
"""

from __future__ import annotations

import json
import logging
import time
from collections import Counter
from typing import TYPE_CHECKING, Any, Dict, Optional

from mobsim.simulation.stats import FieldStats, format_population_line

if TYPE_CHECKING:
    from mobsim.simulation.engine import Simulator
    from mobsim.simulation.step_context import StepReport
    from mobsim.spatial.field import Field

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 72


class LoggingReporter:
    """Headless view: logs population details every ``report_every`` steps.

    Also accumulates run totals (births, deaths by cause, kills) so a final
    summary can be logged or exported once the run ends.
    """

    def __init__(self, report_every: int = 50) -> None:
        self.report_every = report_every
        self.stats = FieldStats()
        self.totals: Dict[str, Counter] = {
            "births": Counter(),
            "deaths": Counter(),
            "kills": Counter(),
            "spawned": Counter(),
        }
        self.infections = 0
        self.last_step = 0

    def show_status(self, step: int, field: "Field", report: Optional["StepReport"]) -> None:
        self.last_step = step
        self.stats.reset()
        if report is not None:
            self._accumulate(report)

        if self.report_every and step % self.report_every == 0:
            logger.info(
                f"Step {step} [{field.environment}] "
                f"{format_population_line(self.stats.counts(field))}"
            )

    def is_viable(self, field: "Field") -> bool:
        return field.is_viable()

    def _accumulate(self, report: "StepReport") -> None:
        self.totals["births"].update({str(k): v for k, v in report.births.items()})
        self.totals["deaths"].update({k.value: v for k, v in report.deaths.items()})
        self.totals["kills"].update({str(k): v for k, v in report.kills.items()})
        self.totals["spawned"].update({str(k): v for k, v in report.spawned.items()})
        self.infections += report.infections

    def summary(self) -> Dict[str, Any]:
        return {
            "steps": self.last_step,
            "births": dict(self.totals["births"]),
            "deaths": dict(self.totals["deaths"]),
            "kills": dict(self.totals["kills"]),
            "spawned": dict(self.totals["spawned"]),
            "infections": self.infections,
        }


def log_simulation_stats(simulator: "Simulator", start_time: float) -> None:
    """Log a final statistics block for a finished run.

    Args:
        simulator: The simulator that ran
        start_time: Wall-clock time when the run started
    """
    elapsed = time.time() - start_time
    field = simulator.field
    logger.info("-" * SEPARATOR_WIDTH)
    logger.info(f"Step: {simulator.step} | Time: {elapsed:.1f}s | {field.environment}")
    logger.info(format_population_line(field.get_population_details()))

    reporter = simulator.view if isinstance(simulator.view, LoggingReporter) else None
    if reporter is not None:
        totals = reporter.summary()
        logger.info(f"Births: {totals['births']}")
        deaths = totals["deaths"]
        if deaths:
            causes = ", ".join(f"{k}: {v}" for k, v in deaths.items())
            logger.info(f"Deaths ({sum(deaths.values())}): {causes}")
        logger.info(f"Kills: {totals['kills']} | Infections: {totals['infections']}")
    logger.info("-" * SEPARATOR_WIDTH)


def export_stats_json(simulator: "Simulator", filename: str, start_time: float) -> None:
    """Export run statistics to a JSON file.

    Args:
        simulator: The simulator that ran
        filename: Output filename
        start_time: Wall-clock time when the run started
    """
    stats: Dict[str, Any] = {
        "step": simulator.step,
        "seed": simulator.seed,
        "environment": {
            "time_of_day": str(simulator.field.time_of_day),
            "weather": str(simulator.field.weather),
            "season": str(simulator.field.season),
        },
        "population": simulator.field.get_population_details(),
        "elapsed_time": time.time() - start_time,
    }
    if isinstance(simulator.view, LoggingReporter):
        stats["totals"] = simulator.view.summary()

    try:
        with open(filename, "w") as f:
            json.dump(stats, f, indent=2)
        logger.info(f"Exported stats to {filename}")
    except OSError as e:
        logger.error(f"Failed to export stats: {e}")
