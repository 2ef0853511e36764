"""Small helpers shared across the simulation packages."""
