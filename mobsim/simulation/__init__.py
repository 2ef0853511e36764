"""Simulation package - step orchestration and reporting.

- engine.py: the Simulator orchestrator
- step_context.py: per-step context and report
- population.py: initial world build
- stats.py / diagnostics.py: population counts and logging reporter
- view.py: the observer protocol views implement

Usage:
    from mobsim.simulation import Simulator

    sim = Simulator(seed=42)
    sim.simulate(500)
"""

from mobsim.simulation.engine import Simulator
from mobsim.simulation.step_context import StepContext, StepReport
from mobsim.simulation.view import NullView, SimulatorView

__all__ = [
    "NullView",
    "Simulator",
    "SimulatorView",
    "StepContext",
    "StepReport",
]
