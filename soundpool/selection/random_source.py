"""
Random source for SoundPool.

Every draw takes an explicit RandomSource instead of reaching for global
randomness, so a pool can be seeded for deterministic replay in tests while
separate pools never share generator state.
"""

import logging
from typing import List, Optional, Sequence, Union

import numpy as np

logger = logging.getLogger(__name__)

_SEED_MASK = (1 << 64) - 1


def _make_generator(seed: Optional[int]) -> np.random.Generator:
    """Create a numpy Generator; negative seeds map to their 64-bit two's complement."""
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(int(seed) & _SEED_MASK)


class RandomSource:
    """
    Seedable randomness source backed by a numpy Generator.

    A seed of None or 0 means "non-deterministic": the generator is seeded
    from OS entropy and draws are not reproducible.

    Attributes:
        seed: The seed this source was created with (None when unseeded)
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the random source.

        Args:
            seed: Integer seed for reproducible draws, or None/0 for entropy
        """
        self.seed: Optional[int] = seed if seed else None
        self._generator = _make_generator(self.seed)

    @property
    def seeded(self) -> bool:
        """True if draws from this source are reproducible."""
        return self.seed is not None

    def random(self) -> float:
        """Return a float in [0.0, 1.0)."""
        return float(self._generator.random())

    def uniform(self, low: float, high: float) -> float:
        """
        Return a float between low and high.

        A degenerate range (low == high) always returns low, so a pinned
        volume or pitch comes back exactly.

        Args:
            low: Lower bound (inclusive)
            high: Upper bound

        Returns:
            Random float with low <= value <= high
        """
        if low == high:
            return float(low)
        value = float(self._generator.uniform(low, high))
        # Guard against float rounding landing just outside the range
        return min(max(value, low), high)

    def index(self, count: int) -> int:
        """
        Return a uniformly random index in [0, count).

        Raises:
            ValueError: If count is not positive
        """
        if count <= 0:
            raise ValueError(f"Cannot draw an index from {count} items")
        return int(self._generator.integers(count))

    def weighted_index(self, weights: Sequence[float]) -> int:
        """
        Return an index with probability proportional to its weight.

        Args:
            weights: Non-negative weights with a positive total

        Returns:
            Selected index

        Raises:
            ValueError: If weights is empty or sums to zero
        """
        if not weights:
            raise ValueError("Cannot draw from empty weights")
        values = np.asarray(weights, dtype=float)
        largest = float(values.max())
        if largest <= 0:
            raise ValueError("Weights must have a positive total")
        # Scale by the largest weight so huge finite weights cannot overflow the sum
        scaled = values / largest
        probabilities = scaled / scaled.sum()
        return int(self._generator.choice(len(probabilities), p=probabilities))

    def permutation(self, count: int) -> List[int]:
        """Return a random ordering of range(count)."""
        return [int(i) for i in self._generator.permutation(count)]

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Restart the generator.

        Args:
            seed: New seed, or None to restart from the current seed.
                  An unseeded source is reseeded from entropy.
        """
        if seed is not None:
            self.seed = seed if seed else None
        self._generator = _make_generator(self.seed)
        logger.debug(f"[SELECTION] Random source reset (seed={self.seed})")

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed})"


RandomLike = Union[RandomSource, int, None]


def resolve_random_source(rng: RandomLike = None) -> RandomSource:
    """
    Turn a draw's randomness argument into a RandomSource.

    Args:
        rng: An existing RandomSource (used as-is), an integer seed
             (a fresh seeded source), or None (a fresh unseeded source)

    Returns:
        RandomSource to draw from
    """
    if isinstance(rng, RandomSource):
        return rng
    return RandomSource(rng)
