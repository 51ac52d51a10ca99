"""
Validation of hand-picked number sets
"""
from typing import List
from luckylens.core.exceptions import InvalidPickError
from luckylens.models.game import LotteryGame
from luckylens.models.generation import NumberSet


def _check_pool(numbers: List[int], count: int, max_value: int, label: str, field: str) -> None:
    if len(numbers) != count:
        raise InvalidPickError(
            f"Pick exactly {count} {label} (got {len(numbers)})", field=field
        )
    out_of_range = [n for n in numbers if n < 1 or n > max_value]
    if out_of_range:
        raise InvalidPickError(
            f"{label.capitalize()} must be between 1 and {max_value}: {out_of_range}", field=field
        )
    if len(set(numbers)) != len(numbers):
        raise InvalidPickError(f"{label.capitalize()} must be unique", field=field)


def validate_manual_pick(
    game: LotteryGame,
    primary_numbers: List[int],
    secondary_numbers: List[int]
) -> NumberSet:
    """
    Check a manual pick against the game rules
    Returns the pick as a NumberSet with primaries sorted
    """
    _check_pool(primary_numbers, game.primary_count, game.primary_max, "main numbers", "primary_numbers")
    _check_pool(secondary_numbers, game.secondary_count, game.secondary_max, "bonus numbers", "secondary_numbers")
    return NumberSet(
        primary_numbers=tuple(sorted(primary_numbers)),
        secondary_numbers=tuple(secondary_numbers),
    )
