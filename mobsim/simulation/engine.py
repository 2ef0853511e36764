"""The step orchestrator.

The simulator owns the run RNG, the environment cycle, the breeding policy
and the nocturnal spawn pools. Each step builds a fresh next field, lets
every entity of the current field act into it, then swaps the two.

Phase order of ``simulate_one_step``:
    1. STEP_START: increment the step counter
    2. ENVIRONMENT: advance time of day, weather and season
    3. THRESHOLDS: refresh breeding blocks from the current field
    4. PLANTS: carry plants forward and grow them
    5. MOBS: run the action pipeline for every mob, in registry order
    6. SPECIES: species-wide actions (nocturnal spawning)
    7. STEP_END: swap fields, prune the dead, notify the view

Registry order in phase 5 decides which mob wins a contested cell, since
placement into the next field is first-writer-wins.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Dict, List, Optional

from mobsim.behavior.pipeline import act
from mobsim.behavior.registry import BEHAVIORS
from mobsim.behavior.spawning import NocturnalSpawnPool
from mobsim.breeding import BreedingPolicy
from mobsim.config.field import DEFAULT_DEPTH, DEFAULT_WIDTH
from mobsim.config.population import LONG_SIMULATION_STEPS
from mobsim.config.simulation_config import SimulationConfig
from mobsim.entities.species import Species
from mobsim.environment import EnvironmentCycle, EnvironmentState
from mobsim.exceptions import SimulationError
from mobsim.simulation.population import WorldBuilder
from mobsim.simulation.step_context import StepContext, StepReport
from mobsim.simulation.view import NullView, SimulatorView
from mobsim.spatial.field import Entity, Field

logger = logging.getLogger(__name__)


class Simulator:
    """Runs the predator/prey world one generation at a time.

    Attributes:
        config: Validated run configuration
        rng: The single RNG every stochastic decision draws from
        seed: Seed the RNG was built from (None if an RNG was injected)
        view: Observer notified after every step
        policy: Breeding policy for this run
        spawn_pools: Nocturnal spawn pools keyed by species
        last_report: Report of the most recent step
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        *,
        depth: Optional[int] = None,
        width: Optional[int] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        view: Optional[SimulatorView] = None,
        populate: bool = True,
    ) -> None:
        """Initialize the simulator.

        Args:
            config: Aggregate simulation configuration
            depth: Override the configured number of rows
            width: Override the configured number of columns
            rng: Shared random number generator for deterministic runs
            seed: Optional seed (used if rng is not provided)
            view: Observer for step updates (defaults to a no-op view)
            populate: Build the initial population immediately
        """
        self.config = config or SimulationConfig()
        self.config.validate()

        if seed is None:
            seed = self.config.seed
        if rng is not None:
            self.rng: random.Random = rng
            self.seed: Optional[int] = None
        else:
            self.rng = random.Random(seed)
            self.seed = seed

        depth = self.config.field.depth if depth is None else depth
        width = self.config.field.width if width is None else width
        if depth <= 0 or width <= 0:
            logger.warning(
                f"The dimensions must be > 0 (got {depth}x{width}); "
                f"using default values {DEFAULT_DEPTH}x{DEFAULT_WIDTH}"
            )
            depth, width = DEFAULT_DEPTH, DEFAULT_WIDTH
        self.depth = depth
        self.width = width

        self.view: SimulatorView = view if view is not None else NullView()
        self.environment_cycle = EnvironmentCycle(self.config.environment, self.rng)
        self.world_builder = WorldBuilder(self.config.population, self.rng)
        self.policy = self._new_policy()
        self.spawn_pools: Dict[Species, NocturnalSpawnPool] = {
            species: NocturnalSpawnPool(species)
            for species, behavior in BEHAVIORS.items()
            if behavior.nocturnal_spawning
        }
        self.last_report: Optional[StepReport] = None

        self._step = 0
        self._field = self._new_field(self.environment_cycle.state, generation=0)

        logger.info(f"Simulator initialized: {depth}x{width} field, seed={self.seed}")
        if populate:
            self.reset()

    # ------------------------------------------------------------------
    # Read-only state for views and reporters
    # ------------------------------------------------------------------

    @property
    def step(self) -> int:
        return self._step

    @property
    def field(self) -> Field:
        return self._field

    @property
    def environment(self) -> EnvironmentState:
        return self.environment_cycle.state

    def is_viable(self) -> bool:
        return self._field.is_viable()

    # ------------------------------------------------------------------
    # Run control
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Return to step 0 with a freshly populated field."""
        self._step = 0
        self.last_report = None
        self.policy = self._new_policy()
        for pool in self.spawn_pools.values():
            pool.reset()
        state = self.environment_cycle.reset()
        self._field = self._new_field(state, generation=0)
        self.populate()
        self.view.show_status(self._step, self._field, None)

    def populate(self) -> None:
        """Fill the current field with the starting population."""
        self.world_builder.populate(self._field)

    def run_long_simulation(self) -> int:
        """Run the default long simulation."""
        return self.simulate(LONG_SIMULATION_STEPS)

    def simulate(self, num_steps: int, delay_ms: Optional[int] = None) -> int:
        """Run up to ``num_steps`` steps.

        Stops early when the field is no longer viable or the view asks to
        stop.

        Args:
            num_steps: Step budget
            delay_ms: Pause after each step (defaults to the configured delay
                when a viewer is attached, 0 when headless)

        Returns:
            Number of steps actually run

        Raises:
            SimulationError: If ``num_steps`` is negative
        """
        if num_steps < 0:
            raise SimulationError(f"num_steps must be >= 0, got {num_steps}")
        if delay_ms is None:
            delay_ms = 0 if self.config.headless else self.config.step_delay_ms

        steps_run = 0
        while steps_run < num_steps and self._should_continue():
            self.simulate_one_step()
            steps_run += 1
            if delay_ms > 0:
                time.sleep(delay_ms / 1000.0)

        if not self._field.is_viable():
            logger.info(f"Ended at step: {self._step}")
        return steps_run

    def _should_continue(self) -> bool:
        return self._field.is_viable() and self.view.is_viable(self._field)

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def simulate_one_step(self) -> StepReport:
        """Advance the world by one generation.

        Returns:
            What happened during the step
        """
        self._phase_step_start()
        state = self._phase_environment()
        next_field = self._new_field(state, generation=self._step)
        ctx = StepContext(
            current=self._field,
            next_field=next_field,
            rng=self.rng,
            policy=self.policy,
            spawn_pools=self.spawn_pools,
            report=StepReport(step=self._step),
            winter_disease_multiplier=self.config.environment.winter_disease_multiplier,
        )
        self._phase_thresholds(ctx)
        self._phase_plants(ctx)
        self._phase_mobs(ctx)
        self._phase_species(ctx)
        self._phase_step_end(ctx)
        return ctx.report

    def collect_garbage(self) -> List[Entity]:
        """Remove dead mobs and plants from the current field."""
        return self._field.prune_dead()

    def _phase_step_start(self) -> None:
        self._step += 1

    def _phase_environment(self) -> EnvironmentState:
        return self.environment_cycle.advance(self._step)

    def _phase_thresholds(self, ctx: StepContext) -> None:
        self.policy.update_thresholds(ctx.current)

    def _phase_plants(self, ctx: StepContext) -> None:
        for plant in ctx.current.get_plants():
            if not plant.is_alive:
                continue
            if ctx.next_field.location_of(plant) is None:
                ctx.next_field.place_object(plant, plant.location)
            plant.grow(ctx.current, ctx.next_field, ctx.rng)

    def _phase_mobs(self, ctx: StepContext) -> None:
        for mob in ctx.current.get_mobs():
            act(mob, ctx, BEHAVIORS[mob.species])

    def _phase_species(self, ctx: StepContext) -> None:
        for pool in self.spawn_pools.values():
            pool.spawn(ctx)

    def _phase_step_end(self, ctx: StepContext) -> None:
        for mob in ctx.current.get_mobs():
            if not mob.is_alive:
                ctx.report.record_death(mob)

        self._field = ctx.next_field
        self.collect_garbage()
        self.last_report = ctx.report

        if ctx.report.births or ctx.report.deaths:
            logger.debug(
                f"Step {self._step}: births={ctx.report.total_births} "
                f"deaths={ctx.report.total_deaths} infections={ctx.report.infections}"
            )
        self.view.show_status(self._step, self._field, ctx.report)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _new_field(self, state: EnvironmentState, generation: int) -> Field:
        return Field(
            self.depth, self.width, rng=self.rng, environment=state, generation=generation
        )

    def _new_policy(self) -> BreedingPolicy:
        return BreedingPolicy(
            prey_limits=self.config.breeding.prey_limits,
            predator_limits=self.config.breeding.predator_limits,
        )
