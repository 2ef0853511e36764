"""Per-species life-history constants.

Every value here is shared by all members of a species; instances only carry
their own age, food level, gender and disease flag.
"""

# Prey (Cow, Pig, Villager)
COW_BREEDING_AGE = 5
COW_MAX_AGE = 100
COW_MAX_LITTER_SIZE = 6

PIG_BREEDING_AGE = 5
PIG_MAX_AGE = 100
PIG_MAX_LITTER_SIZE = 5

VILLAGER_BREEDING_AGE = 5
VILLAGER_MAX_AGE = 100
VILLAGER_MAX_LITTER_SIZE = 5

PREY_HUNGER_LIMIT = 80  # Food level ceiling for prey
PREY_FOOD_VALUE = 60  # Food gained by a predator eating one prey

# Predators (Zombie, Creeper)
ZOMBIE_BREEDING_AGE = 15
ZOMBIE_MAX_AGE = 300
ZOMBIE_MAX_LITTER_SIZE = 3

CREEPER_BREEDING_AGE = 20
CREEPER_MAX_AGE = 230
CREEPER_MAX_LITTER_SIZE = 3

PREDATOR_HUNGER_LIMIT = 260

# Disease
DISEASE_RATE = 0.0005  # Per-step chance of a spontaneous infection
DISEASE_SPREAD_RATE = 0.007  # Per-neighbor chance of catching it from a carrier

# Role thresholds, as fractions of the hunger limit
PREY_BREED_FOOD_FRACTION = 0.6  # Prey breed only when food is above this
PREY_MIN_BREEDING_FOOD = 30  # ...and at least this much absolute food
PREY_FORAGE_FOOD_FRACTION = 0.5  # Prey graze when food is below this
PREDATOR_BREED_FOOD_FRACTION = 0.5
PREDATOR_HUNT_FOOD_FRACTION = 0.6
PREDATOR_MAX_BREEDING_NEIGHBORS = 4  # Predators won't breed when this crowded

# Food lost in a step where the mob could not move at all
STATIONARY_STARVATION_FRACTION = 0.05

# Nocturnal spawning (zombies)
NOCTURNAL_SPAWN_CAP = 400  # Maximum pending spawns banked from night kills

# Grass
GRASS_FOOD_VALUE = 30
GRASS_GROWTH_PROBABILITY = 0.007  # Per-step chance a seed grows back
