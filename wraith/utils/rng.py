"""Seedable RNG wrapper for deterministic galaxy generation."""

import random


class GameRNG:
    """Wrapper around Python's random.Random for deterministic game behavior.

    All randomness in the game should go through this class so the same seed
    always builds the same galaxy.
    """

    def __init__(self, seed: int):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return random integer in range [a, b], inclusive."""
        return self.rng.randint(a, b)

    def roll(self, count: int, sides: int) -> int:
        """Roll `count` dice with `sides` faces and return the total.

        Args:
            count: Number of dice
            sides: Faces per die

        Returns:
            Sum of the dice
        """
        return sum(self.rng.randint(1, sides) for _ in range(count))
