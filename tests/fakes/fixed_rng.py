"""RNG fakes that pin ``random()`` draws while keeping integer draws seeded."""

import random


class FixedDrawRandom(random.Random):
    """``random()`` always returns ``value``; shuffles and ``randint`` stay seeded.

    Useful values:
        0.0   every probability check passes (including disease outbreaks)
        0.001 breeding and growth pass, spontaneous disease does not
        0.999 every probability check fails
    """

    def __init__(self, value: float, seed: int = 42) -> None:
        super().__init__(seed)
        self.value = value

    def random(self) -> float:
        return self.value

    def getrandbits(self, k: int) -> int:
        # Defined here so integer draws keep using the seeded bit generator
        # instead of falling back to the pinned ``random()``.
        return super().getrandbits(k)
