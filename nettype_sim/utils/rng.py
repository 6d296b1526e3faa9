"""Random source for network type simulation.

Every stochastic decision in the engine draws from an explicitly passed
SimulationRNG so that a fixed seed reproduces a run exactly.
"""

import math
from typing import Optional, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class SimulationRNG:
    """
    A seedable random source backed by a numpy Generator.
    This class supports uniform floats, integers in a half-open range, weighted
    coin flips, picking items from a sequence and Box-Muller normal draws.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the random source with a seed value.

        Args:
            seed (int, optional): Seed for the generator. None draws fresh
                entropy from the operating system.
        """
        self.seed = seed
        self.generator = np.random.default_rng(seed)

    def random(self) -> float:
        """
        Generate a pseudo-random float between 0 and 1.

        Returns:
            float: A pseudo-random number in the range [0, 1).
        """
        return float(self.generator.random())

    def uniform(self, low: float, high: float) -> float:
        """Draw a float uniformly from [low, high)."""
        return low + (high - low) * self.random()

    def randint(self, low: int, high: int) -> int:
        """
        Draw an integer uniformly from [low, high).

        Args:
            low (int): Inclusive lower bound.
            high (int): Exclusive upper bound.

        Returns:
            int: The drawn integer.
        """
        return low + int(self.random() * (high - low))

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self.random() < probability

    def choice(self, items: Sequence[T]) -> T:
        """
        Select a random item from a non-empty sequence.

        Args:
            items (Sequence): The items to choose from.

        Returns:
            Any: A randomly selected item.

        Raises:
            ValueError: If the input sequence is empty.
        """
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        index = int(self.random() * len(items))
        return items[index]

    def normal(self, mean: float, std_dev: float) -> float:
        """
        Draw from a normal distribution using the Box-Muller transform.

        Args:
            mean (float): Mean of the distribution.
            std_dev (float): Standard deviation of the distribution.

        Returns:
            float: A normally distributed sample.
        """
        # u1 lies in (0, 1] so the logarithm is always defined
        u1 = 1.0 - self.random()
        u2 = self.random()
        z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
        return z0 * std_dev + mean

    def token(self, digits: int = 6) -> str:
        """Return a random lowercase hex string of the given length."""
        return f"{self.randint(0, 16**digits):0{digits}x}"


def ensure_rng(rng: Optional[SimulationRNG]) -> SimulationRNG:
    """Return the given random source, or a freshly seeded one if None."""
    return rng if rng is not None else SimulationRNG()
