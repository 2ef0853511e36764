"""Population-control constants used by the breeding policy.

Each tuple is (carrying_capacity, repopulation_threshold, base_probability).
Breeding is blocked once a species reaches its carrying capacity and only
re-enabled after it falls back to the repopulation threshold.
"""

PREY_BREEDING_LIMITS = (1700, 400, 0.27)
PREDATOR_BREEDING_LIMITS = (500, 300, 0.15)

# Probability multiplier applied between the threshold and the capacity
OVERPOPULATED_BREEDING_FACTOR = 0.2
