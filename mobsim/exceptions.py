"""Mob simulation exception hierarchy.

Centralised base classes so callers can catch simulator failures without
resorting to bare ``except Exception`` blocks.
"""


class MobSimError(Exception):
    """Root of all mob-simulation domain exceptions."""


class SimulationError(MobSimError):
    """Errors during simulation execution (stepping, entities, fields)."""


class ConfigurationError(MobSimError, ValueError):
    """Invalid or missing configuration."""
