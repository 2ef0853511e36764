"""Main entry point for the mob ecosystem simulation.

This module provides command-line options to run the simulation:
- Window mode (default): pygame viewer, one frame per step
- Headless mode: log-only, as fast as possible
"""

import argparse
import logging
import sys
import time

from mobsim.config.population import DEFAULT_STEP_DELAY_MS, LONG_SIMULATION_STEPS
from mobsim.config.simulation_config import FieldConfig, SimulationConfig
from mobsim.exceptions import ConfigurationError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
)

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 72


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Build and validate the run configuration from parsed arguments."""
    config = SimulationConfig(
        seed=args.seed,
        headless=args.headless,
        step_delay_ms=args.delay_ms,
        report_every=args.report_every,
        field=FieldConfig(depth=args.depth, width=args.width),
    )
    config.validate()
    return config


def run(config: SimulationConfig, steps: int, cell_size: int, export_stats=None) -> int:
    """Run the simulation with either the logging reporter or the pygame viewer.

    Args:
        config: Validated run configuration
        steps: Step budget
        cell_size: Pixel size of a cell in window mode
        export_stats: Optional filename to export JSON stats to

    Returns:
        Number of steps run
    """
    from mobsim.simulation.diagnostics import (
        LoggingReporter,
        export_stats_json,
        log_simulation_stats,
    )
    from mobsim.simulation.engine import Simulator

    simulator = Simulator(config, populate=False)
    if config.headless:
        view = LoggingReporter(report_every=config.report_every)
    else:
        from rendering.field_view import FieldView

        view = FieldView(simulator.depth, simulator.width, cell_size=cell_size)
    simulator.view = view

    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("MOB ECOSYSTEM SIMULATION")
    logger.info("=" * SEPARATOR_WIDTH)

    start_time = time.time()
    try:
        simulator.reset()
        steps_run = simulator.simulate(steps)
    finally:
        if hasattr(view, "close"):
            view.close()

    log_simulation_stats(simulator, start_time)
    if export_stats:
        export_stats_json(simulator, export_stats, start_time)
    return steps_run


def main(argv=None) -> int:
    """Parse command-line arguments and run the simulation."""
    parser = argparse.ArgumentParser(
        description="Mob Ecosystem Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Long run in a window (default)
  python main.py

  # Headless run with a fixed seed
  python main.py --headless --steps 500 --seed 42

  # Small world, population logged every 10 steps, stats exported
  python main.py --headless --depth 40 --width 60 --report-every 10 --export-stats run.json
        """,
    )
    parser.add_argument(
        "--headless", action="store_true", help="Run without the pygame window (log only)"
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=LONG_SIMULATION_STEPS,
        help=f"Number of steps to simulate (default: {LONG_SIMULATION_STEPS})",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument("--depth", type=int, default=FieldConfig.depth, help="Grid rows")
    parser.add_argument("--width", type=int, default=FieldConfig.width, help="Grid columns")
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=DEFAULT_STEP_DELAY_MS,
        help=f"Pause between steps in window mode (default: {DEFAULT_STEP_DELAY_MS})",
    )
    parser.add_argument(
        "--report-every",
        type=int,
        default=50,
        help="Log population details every N steps in headless mode (0 disables)",
    )
    parser.add_argument("--cell-size", type=int, default=6, help="Cell size in pixels")
    parser.add_argument(
        "--export-stats",
        type=str,
        default=None,
        metavar="FILENAME",
        help="Export run statistics to a JSON file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args(argv)
    logging.getLogger().setLevel(args.log_level)

    try:
        config = build_config(args)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    run(config, args.steps, args.cell_size, export_stats=args.export_stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
