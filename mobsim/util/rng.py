"""RNG utilities for deterministic simulation.

Every stochastic decision in a run draws from the single ``random.Random``
owned by the simulator. These helpers fail loudly when a component is
built without that RNG, rather than silently creating an unseeded one.
"""

import random
from typing import Any, Optional


class MissingRNGError(RuntimeError):
    """Raised when an RNG is required but not available.

    This indicates a bug in setup: fields and step contexts should always
    be handed the simulator's RNG.
    """


def require_rng(owner: Any, context: str = "unknown") -> random.Random:
    """Get the RNG from an object exposing an ``rng`` attribute.

    Args:
        owner: A Field, StepContext or anything else carrying ``rng``
        context: Description of the caller (for error messages)

    Returns:
        The owner's RNG

    Raises:
        MissingRNGError: If owner is None or carries no RNG
    """
    if owner is None:
        raise MissingRNGError(f"Cannot get RNG: owner is None (context: {context}).")

    rng = getattr(owner, "rng", None)
    if rng is None:
        raise MissingRNGError(
            f"Cannot get RNG: owner has no 'rng' attribute (context: {context}). "
            "Build fields through the Simulator or pass rng= explicitly."
        )
    return rng


def require_rng_param(rng: Optional[random.Random], context: str) -> random.Random:
    """Validate that an RNG parameter was provided, failing loudly if not.

    Example:
        def __init__(self, depth, width, rng=None):
            self.rng = require_rng_param(rng, "Field.__init__")
    """
    if rng is None:
        raise MissingRNGError(f"RNG required: {context}. Pass the simulator RNG explicitly.")
    return rng
