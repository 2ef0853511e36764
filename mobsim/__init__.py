"""Grid-based predator/prey ecosystem simulation.

This package contains the simulation core with no UI dependencies:

- spatial: grid locations and the per-generation Field
- entities: mobs, plants and species traits
- behavior: the shared action pipeline and species hooks
- disease / breeding: infection rule and population-control policy
- simulation: the Simulator orchestrator and reporting

The pygame viewer lives in the separate ``rendering`` package.
"""

__version__ = "0.1.0"
