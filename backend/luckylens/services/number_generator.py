"""
Number generation service
Draws uniform number sets without replacement from a game pool
"""
from typing import List, Optional
import logging
from luckylens.core.exceptions import InvalidPoolConfiguration
from luckylens.models.generation import GamePool, NumberSet
from luckylens.services.random_source import IntegerSampler, integer_sampler

logger = logging.getLogger(__name__)


def validate_pool(pool: GamePool) -> None:
    """
    Fail fast on pools that cannot be drawn
    Without this check the uniqueness loop would never finish
    """
    values = {
        "primary_count": pool.primary_count,
        "primary_max": pool.primary_max,
        "secondary_count": pool.secondary_count,
        "secondary_max": pool.secondary_max,
    }
    for field, value in values.items():
        if value < 0:
            raise InvalidPoolConfiguration(f"{field} must not be negative (got {value})", field=field)

    if pool.primary_count > pool.primary_max:
        raise InvalidPoolConfiguration(
            f"Cannot draw {pool.primary_count} distinct numbers from 1-{pool.primary_max}",
            field="primary_count"
        )
    if pool.secondary_count > pool.secondary_max:
        raise InvalidPoolConfiguration(
            f"Cannot draw {pool.secondary_count} distinct bonus numbers from 1-{pool.secondary_max}",
            field="secondary_count"
        )


class NumberGenerator:
    """Generates uniform number sets for lottery games"""

    def __init__(self, sampler: Optional[IntegerSampler] = None):
        self._sampler = sampler or integer_sampler

    @property
    def sampler(self) -> IntegerSampler:
        return self._sampler

    def draw_distinct(self, count: int, max_value: int) -> List[int]:
        """
        Draw `count` distinct values from [1, max_value], in draw order
        Duplicates are rejected and redrawn
        """
        drawn: List[int] = []
        seen = set()
        max_attempts = self._sampler.max_iterations

        attempts = 0
        while len(drawn) < count:
            if attempts >= max_attempts:
                raise InvalidPoolConfiguration(
                    f"Could not collect {count} distinct numbers from 1-{max_value} "
                    f"after {max_attempts} draws"
                )
            attempts += 1

            number = self._sampler.random_int(1, max_value)
            if number in seen:
                continue
            seen.add(number)
            drawn.append(number)

        return drawn

    def generate_set(self, pool: GamePool) -> NumberSet:
        """
        Generate one uniform set

        Args:
            pool: Game pool sizes

        Returns:
            NumberSet with sorted primaries and secondaries in draw order
        """
        validate_pool(pool)

        primary = sorted(self.draw_distinct(pool.primary_count, pool.primary_max))

        if pool.secondary_count == 1:
            secondary = [self._sampler.random_int(1, pool.secondary_max)]
        elif pool.secondary_count > 1:
            secondary = self.draw_distinct(pool.secondary_count, pool.secondary_max)
        else:
            secondary = []

        return NumberSet(primary_numbers=tuple(primary), secondary_numbers=tuple(secondary))


number_generator = NumberGenerator()
