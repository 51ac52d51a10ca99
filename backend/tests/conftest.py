"""
Shared fixtures
"""
import json
import itertools
import pytest
from datetime import datetime
from typing import Iterable

from luckylens.models.generation import GamePool
from luckylens.models.history import HistoricalDraw
from luckylens.services.historical_data import HistoricalDataService, MagayoClient
from luckylens.services.history_store import HistoryStore
from luckylens.services.random_source import IntegerSampler, RandomSource, SeededRandomSource


class SequenceSource(RandomSource):
    """Replays fixed uint32 values, cycling when exhausted"""

    def __init__(self, values: Iterable[int]):
        self.values = list(values)
        self._cycle = itertools.cycle(self.values)
        self.calls = 0

    def next_uint32(self) -> int:
        self.calls += 1
        return next(self._cycle)


@pytest.fixture
def seeded_sampler():
    return IntegerSampler(SeededRandomSource(20250118))


@pytest.fixture
def powerball_pool():
    return GamePool(primary_count=5, primary_max=69, secondary_count=1, secondary_max=26)


@pytest.fixture
def pick3_pool():
    return GamePool(primary_count=3, primary_max=9, secondary_count=0, secondary_max=0)


@pytest.fixture
def sample_draws():
    return [
        HistoricalDraw(date=datetime(2025, 1, 15), game_id="powerball",
                       primary_numbers=[8, 19, 33, 51, 66], secondary_numbers=[4]),
        HistoricalDraw(date=datetime(2025, 1, 13), game_id="powerball",
                       primary_numbers=[7, 21, 25, 33, 47], secondary_numbers=[20]),
        HistoricalDraw(date=datetime(2025, 1, 11), game_id="powerball",
                       primary_numbers=[1, 5, 12, 30, 61], secondary_numbers=[4]),
        HistoricalDraw(date=datetime(2024, 12, 30), game_id="powerball",
                       primary_numbers=[2, 21, 33, 41, 60], secondary_numbers=[14]),
    ]


@pytest.fixture
def draw_data_dir(tmp_path):
    """Draw files for two games in the bundled JSON format"""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "luckyforlife.json").write_text(json.dumps([
        {"drawDate": "2025-01-16", "mainBalls": [4, 11, 22, 35, 47], "bonusBall": 7, "jackpotAmount": "$1,000/Day"},
        {"drawDate": "2025-01-13", "mainBalls": [1, 11, 19, 30, 42], "bonusBall": 15, "jackpotAmount": "$1,000/Day"},
        {"drawDate": "2024-12-30", "mainBalls": [8, 22, 26, 38, 48], "bonusBall": 7, "jackpotAmount": "$1,000/Day"},
    ]), encoding="utf-8")
    (data_dir / "powerball.json").write_text(json.dumps([
        {"drawDate": "2025-01-18", "mainBalls": [2, 21, 33, 41, 60], "bonusBall": 14, "jackpotAmount": "$87 Million"},
        {"drawDate": "2025-01-15", "mainBalls": [8, 19, 33, 51, 66], "bonusBall": 4, "jackpotAmount": "$70 Million"},
    ]), encoding="utf-8")
    return data_dir


@pytest.fixture
def offline_magayo():
    """Magayo client whose every request fails with a 503"""
    import httpx
    return MagayoClient(
        api_key="test",
        transport=httpx.MockTransport(lambda request: httpx.Response(503))
    )


@pytest.fixture
def historical_service(draw_data_dir, offline_magayo):
    return HistoricalDataService(data_dir=str(draw_data_dir), magayo_client=offline_magayo)


@pytest.fixture
def store(tmp_path):
    return HistoryStore(storage_dir=str(tmp_path / "storage"))


@pytest.fixture
def sequence_source():
    """Factory for SequenceSource"""
    return SequenceSource
