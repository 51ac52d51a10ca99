"""
Trend statistics over historical draws
Frequency tables, hot/cold numbers and per-draw averages (observations, not predictions)
"""
import pandas as pd
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Dict, List, Optional
import logging
from luckylens.models.game import LotteryGame
from luckylens.models.history import HistoricalDraw
from luckylens.services.historical_data import draws_to_frame

logger = logging.getLogger(__name__)


@dataclass
class FrequencyEntry:
    """How often a number was drawn and when it was last seen"""
    number: int
    count: int
    last_drawn: str = "Never"


@dataclass
class FrequencyResult:
    main_frequencies: List[FrequencyEntry] = field(default_factory=list)
    bonus_frequencies: List[FrequencyEntry] = field(default_factory=list)


def _format_date(value: datetime) -> str:
    return f"{value:%b} {value.day}, {value.year}"


def _pool_frequencies(frame: pd.DataFrame, column: str, max_value: int) -> List[FrequencyEntry]:
    counts: Dict[int, int] = {}
    last_seen: Dict[int, datetime] = {}

    if not frame.empty:
        exploded = frame[["date", column]].explode(column).dropna(subset=[column])
        if not exploded.empty:
            exploded[column] = exploded[column].astype(int)
            grouped = exploded.groupby(column)["date"].agg(["count", "max"])
            for number, row in grouped.iterrows():
                counts[int(number)] = int(row["count"])
                last_seen[int(number)] = pd.Timestamp(row["max"]).to_pydatetime()

    entries = [
        FrequencyEntry(
            number=number,
            count=counts.get(number, 0),
            last_drawn=_format_date(last_seen[number]) if number in last_seen else "Never",
        )
        for number in range(1, max_value + 1)
    ]
    # Stable sort keeps ties in ascending number order
    return sorted(entries, key=lambda entry: entry.count, reverse=True)


def compute_frequencies(draws: List[HistoricalDraw], game: LotteryGame) -> FrequencyResult:
    """
    Frequencies for every number in both pools of a game
    Numbers outside the game's ranges are ignored
    """
    frame = draws_to_frame(draws)
    return FrequencyResult(
        main_frequencies=_pool_frequencies(frame, "primary_numbers", game.primary_max),
        bonus_frequencies=_pool_frequencies(frame, "secondary_numbers", game.secondary_max),
    )


def get_hot_numbers(frequencies: List[FrequencyEntry], count: int) -> List[Dict[str, int]]:
    """Top `count` numbers by frequency (input already sorted descending)"""
    return [{"number": f.number, "count": f.count} for f in frequencies[:max(count, 0)]]


def get_cold_numbers(frequencies: List[FrequencyEntry], count: int) -> List[Dict[str, int]]:
    """Least frequent numbers; never-drawn numbers take the coldest positions"""
    if count <= 0:
        return []
    appeared = [f for f in frequencies if f.count > 0]
    never = [f for f in frequencies if f.count == 0]
    result = (appeared[-count:] + never)[-count:]
    return [{"number": f.number, "count": f.count} for f in result]


def compute_even_odd_average(draws: List[HistoricalDraw]) -> Dict[str, float]:
    """Average even/odd primary numbers per draw"""
    if not draws:
        return {"avg_even": 0.0, "avg_odd": 0.0}

    numbers = pd.Series([n for draw in draws for n in draw.primary_numbers], dtype="int64")
    total_even = int((numbers % 2 == 0).sum())
    total_odd = len(numbers) - total_even

    return {
        "avg_even": round(total_even / len(draws), 1),
        "avg_odd": round(total_odd / len(draws), 1),
    }


def compute_high_low_average(draws: List[HistoricalDraw], game: LotteryGame) -> Dict[str, float]:
    """Average high/low primary numbers per draw (high = above primary_max // 2)"""
    if not draws:
        return {"avg_high": 0.0, "avg_low": 0.0}

    midpoint = game.primary_max // 2
    numbers = pd.Series([n for draw in draws for n in draw.primary_numbers], dtype="int64")
    total_high = int((numbers > midpoint).sum())
    total_low = len(numbers) - total_high

    return {
        "avg_high": round(total_high / len(draws), 1),
        "avg_low": round(total_low / len(draws), 1),
    }


def build_trend_summary(
    draws: List[HistoricalDraw],
    game: LotteryGame,
    top_n: int = 10,
    last_sync: Optional[datetime] = None
) -> Dict:
    """Everything the trends view shows for one game"""
    frequencies = compute_frequencies(draws, game)
    return {
        "game_id": game.id,
        "total_draws": len(draws),
        "last_sync": last_sync.isoformat() if last_sync else None,
        "main_frequencies": [asdict(f) for f in frequencies.main_frequencies],
        "bonus_frequencies": [asdict(f) for f in frequencies.bonus_frequencies],
        "hot_numbers": get_hot_numbers(frequencies.main_frequencies, top_n),
        "cold_numbers": get_cold_numbers(frequencies.main_frequencies, top_n),
        "hot_bonus_numbers": get_hot_numbers(frequencies.bonus_frequencies, top_n),
        "even_odd": compute_even_odd_average(draws),
        "high_low": compute_high_low_average(draws, game),
    }
