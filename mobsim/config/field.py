"""Field (grid) configuration constants."""

# Grid dimensions used when none (or invalid ones) are supplied
DEFAULT_DEPTH = 80  # rows
DEFAULT_WIDTH = 120  # columns

# Neighborhood radii
ADJACENT_RADIUS = 1  # 8-neighborhood used for movement, mates and disease
HUNT_RADIUS = 3  # Bounding box scanned by predators looking for prey
