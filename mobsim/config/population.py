"""Initial world-build constants.

Creation probabilities are drawn cumulatively, per cell, in the order
given by ``creation_order`` in ``mobsim.simulation.population``.
"""

CREEPER_CREATION_PROBABILITY = 0.04
ZOMBIE_CREATION_PROBABILITY = 0.04
COW_CREATION_PROBABILITY = 0.13
PIG_CREATION_PROBABILITY = 0.13
VILLAGER_CREATION_PROBABILITY = 0.13
GRASS_CREATION_PROBABILITY = 0.11

# Extra grass patches seeded around each placed grass (inclusive range)
GRASS_CLUSTER_MIN = 1
GRASS_CLUSTER_MAX = 3

# Run lengths
LONG_SIMULATION_STEPS = 2000
DEFAULT_STEP_DELAY_MS = 100  # Pause between steps when a viewer is attached
