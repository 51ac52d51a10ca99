"""
Weighted (trend-based) number generation
Weighted sampling without replacement over frequency-annotated pools
"""
import math
from dataclasses import dataclass
from typing import List, Mapping, Optional
import logging
from luckylens.models.generation import GamePool, NumberSet
from luckylens.services.number_generator import validate_pool
from luckylens.services.random_source import IntegerSampler, integer_sampler

logger = logging.getLogger(__name__)

FrequencyMap = Mapping[int, int]


@dataclass
class WeightedPoolEntry:
    """A pool value and its selection weight"""
    value: int
    weight: float


def build_weighted_pool(max_value: int, frequencies: Optional[FrequencyMap]) -> List[WeightedPoolEntry]:
    """
    One entry per value in [1, max_value], weight = frequency + 1
    The +1 keeps never-drawn numbers selectable
    """
    frequencies = frequencies or {}
    return [
        WeightedPoolEntry(value=value, weight=frequencies.get(value, 0) + 1)
        for value in range(1, max_value + 1)
    ]


class WeightedNumberGenerator:
    """Generates number sets biased by historical frequencies"""

    def __init__(self, sampler: Optional[IntegerSampler] = None):
        self._sampler = sampler or integer_sampler

    def weighted_select(self, pool: List[WeightedPoolEntry], count: int) -> List[int]:
        """
        Select `count` values without replacement, probability proportional to weight

        Args:
            pool: Candidate entries (not modified)
            count: Number of values to select, clamped to the pool size

        Returns:
            Selected values in draw order
        """
        if not pool or count <= 0:
            return []
        count = min(count, len(pool))

        remaining = list(pool)
        selected: List[int] = []

        for _ in range(count):
            total_weight = sum(entry.weight for entry in remaining)
            bound = math.floor(total_weight)

            if bound <= 0:
                # Degenerate weights: uniform pick among what is left
                index = self._sampler.random_int(0, len(remaining) - 1)
            else:
                target = self._sampler.random_int(0, bound - 1)
                index = len(remaining) - 1
                accumulated = 0
                for i, entry in enumerate(remaining):
                    accumulated += entry.weight
                    if target < accumulated:
                        index = i
                        break

            selected.append(remaining[index].value)
            # Swap-remove
            remaining[index] = remaining[-1]
            remaining.pop()

        return selected

    def generate_weighted_set(
        self,
        pool: GamePool,
        primary_frequencies: Optional[FrequencyMap],
        secondary_frequencies: Optional[FrequencyMap]
    ) -> NumberSet:
        """
        Generate one trend-based set
        Empty frequency maps give every value weight 1 (uniform)
        """
        validate_pool(pool)

        primary_pool = build_weighted_pool(pool.primary_max, primary_frequencies)
        primary = sorted(self.weighted_select(primary_pool, pool.primary_count))

        secondary: List[int] = []
        if pool.secondary_count > 0:
            secondary_pool = build_weighted_pool(pool.secondary_max, secondary_frequencies)
            secondary = self.weighted_select(secondary_pool, pool.secondary_count)

        return NumberSet(primary_numbers=tuple(primary), secondary_numbers=tuple(secondary))


def has_frequency_data(*frequency_maps: Optional[FrequencyMap]) -> bool:
    """True if any map holds at least one entry"""
    return any(bool(freqs) for freqs in frequency_maps)


weighted_number_generator = WeightedNumberGenerator()
