"""
Random sources and the unbiased integer sampler
Every random decision in the generators goes through IntegerSampler.random_int
"""
import secrets
import numpy as np
from abc import ABC, abstractmethod
from typing import Optional
import logging
from luckylens.core.config import settings
from luckylens.core.exceptions import SamplerUnavailable, InvalidPoolConfiguration

logger = logging.getLogger(__name__)

UINT32_MAX = 0xFFFFFFFF


class RandomSource(ABC):
    """Supplier of uniformly distributed 32-bit unsigned integers"""

    @abstractmethod
    def next_uint32(self) -> int:
        """Return a value in [0, 2**32 - 1]"""


class SecureRandomSource(RandomSource):
    """Operating system CSPRNG"""

    def next_uint32(self) -> int:
        try:
            return secrets.randbits(32)
        except (OSError, NotImplementedError) as e:
            raise SamplerUnavailable(f"Secure random source unavailable: {e}") from e


class SeededRandomSource(RandomSource):
    """
    Deterministic source for tests and reproducible runs
    Not suitable for real picks
    """

    def __init__(self, seed: int):
        self._seed = seed
        self._rng = np.random.RandomState(seed)

    def next_uint32(self) -> int:
        return int(self._rng.randint(0, UINT32_MAX + 1, dtype=np.int64))


class IntegerSampler:
    """Uniform integers in an inclusive range via rejection sampling"""

    def __init__(
        self,
        source: Optional[RandomSource] = None,
        max_iterations: Optional[int] = None
    ):
        self._source = source or SecureRandomSource()
        self._max_iterations = max_iterations or settings.SAMPLER_MAX_ITERATIONS

    @property
    def source(self) -> RandomSource:
        return self._source

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    def random_int(self, min_value: int, max_value: int) -> int:
        """
        Uniformly distributed integer in [min_value, max_value]

        Draws below discard_threshold map onto the range with equal counts per
        value; draws at or above it are thrown away so the modulo has no bias.

        Raises:
            InvalidPoolConfiguration: empty range or range wider than 32 bits
            SamplerUnavailable: source failed or the guard cap was reached
        """
        value_range = max_value - min_value + 1
        if value_range < 1:
            raise InvalidPoolConfiguration(
                f"Invalid range [{min_value}, {max_value}]: min must not exceed max"
            )
        # A full 2**32 range would make discard_threshold 0 and reject every draw
        if value_range > UINT32_MAX:
            raise InvalidPoolConfiguration(
                f"Range [{min_value}, {max_value}] is wider than a 32-bit draw"
            )

        discard_threshold = UINT32_MAX - (UINT32_MAX % value_range)

        for _ in range(self._max_iterations):
            value = self._source.next_uint32()
            if value < discard_threshold:
                return min_value + (value % value_range)

        raise SamplerUnavailable(
            f"No accepted draw for range {value_range} after {self._max_iterations} attempts"
        )


integer_sampler = IntegerSampler()
