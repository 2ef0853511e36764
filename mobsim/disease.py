"""Disease outbreak and same-species spread."""

import logging
import random

from mobsim.entities.mob import Mob
from mobsim.environment import Season
from mobsim.config.environment import WINTER_DISEASE_MULTIPLIER
from mobsim.spatial.field import Field

logger = logging.getLogger(__name__)


def try_to_infect(
    mob: Mob,
    field: Field,
    rng: random.Random,
    winter_multiplier: float = WINTER_DISEASE_MULTIPLIER,
) -> int:
    """Roll for a spontaneous infection, then spread from a carrier.

    A healthy mob becomes diseased with probability ``disease_rate``
    (multiplied in Winter). A living carrier then independently infects each
    healthy same-species neighbor in ``field`` with probability
    ``disease_spread_rate``. Infection ages the victim by its current age,
    which can kill it on the spot.

    Args:
        mob: The acting mob
        field: The current (read) field generation
        rng: Run RNG
        winter_multiplier: Factor applied to the outbreak rate in Winter

    Returns:
        Number of mobs newly infected by this call
    """
    traits = mob.traits
    rate = traits.disease_rate
    if field.season is Season.WINTER:
        rate *= winter_multiplier

    infections = 0
    if not mob.diseased and rng.random() < rate:
        if mob.infect():
            infections += 1
            logger.debug(f"{mob!r} fell ill at {field.generation}")

    if not mob.diseased or not mob.is_alive:
        return infections

    for loc in field.get_adjacent_locations(mob.location):
        neighbor = field.get_mob_at(loc)
        if neighbor is None or neighbor is mob or not neighbor.is_alive:
            continue
        if neighbor.species is not mob.species or neighbor.diseased:
            continue
        if rng.random() < traits.disease_spread_rate and neighbor.infect():
            infections += 1
    return infections
