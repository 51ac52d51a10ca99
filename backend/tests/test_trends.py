"""
Tests for trend statistics
"""
from datetime import datetime
from luckylens.models.history import HistoricalDraw
from luckylens.services.game_catalog import get_game_by_id
from luckylens.services.trends import (
    FrequencyEntry,
    build_trend_summary,
    compute_even_odd_average,
    compute_frequencies,
    compute_high_low_average,
    get_cold_numbers,
    get_hot_numbers
)


POWERBALL = get_game_by_id("powerball")


class TestComputeFrequencies:

    def test_counts_every_number(self, sample_draws):
        result = compute_frequencies(sample_draws, POWERBALL)

        assert len(result.main_frequencies) == 69
        assert len(result.bonus_frequencies) == 26
        main = {f.number: f for f in result.main_frequencies}
        assert main[33].count == 3
        assert main[21].count == 2
        assert main[69].count == 0
        bonus = {f.number: f for f in result.bonus_frequencies}
        assert bonus[4].count == 2
        assert bonus[14].count == 1

    def test_sorted_by_count_then_number(self, sample_draws):
        result = compute_frequencies(sample_draws, POWERBALL)

        counts = [f.count for f in result.main_frequencies]
        assert counts == sorted(counts, reverse=True)
        assert [f.number for f in result.main_frequencies[:2]] == [33, 21]
        zero_numbers = [f.number for f in result.main_frequencies if f.count == 0]
        assert zero_numbers == sorted(zero_numbers)

    def test_last_drawn_dates(self, sample_draws):
        main = {f.number: f for f in compute_frequencies(sample_draws, POWERBALL).main_frequencies}

        assert main[33].last_drawn == "Jan 15, 2025"
        assert main[41].last_drawn == "Dec 30, 2024"
        assert main[69].last_drawn == "Never"

    def test_out_of_range_numbers_ignored(self):
        draws = [HistoricalDraw(date=datetime(2025, 1, 1), game_id="powerball",
                                primary_numbers=[1, 2, 3, 4, 99], secondary_numbers=[40])]

        result = compute_frequencies(draws, POWERBALL)

        assert sum(f.count for f in result.main_frequencies) == 4
        assert sum(f.count for f in result.bonus_frequencies) == 0

    def test_no_draws(self):
        result = compute_frequencies([], POWERBALL)
        assert all(f.count == 0 and f.last_drawn == "Never" for f in result.main_frequencies)


class TestHotCold:

    FREQS = [
        FrequencyEntry(number=5, count=9),
        FrequencyEntry(number=1, count=7),
        FrequencyEntry(number=3, count=2),
        FrequencyEntry(number=2, count=1),
        FrequencyEntry(number=4, count=0),
        FrequencyEntry(number=6, count=0),
    ]

    def test_hot_numbers(self):
        assert get_hot_numbers(self.FREQS, 2) == [{"number": 5, "count": 9}, {"number": 1, "count": 7}]

    def test_cold_numbers_prefer_never_drawn(self):
        cold = get_cold_numbers(self.FREQS, 3)
        assert [c["number"] for c in cold] == [2, 4, 6]

    def test_cold_numbers_when_everything_appeared(self):
        cold = get_cold_numbers(self.FREQS[:4], 2)
        assert [c["number"] for c in cold] == [3, 2]

    def test_zero_requested(self):
        assert get_hot_numbers(self.FREQS, 0) == []
        assert get_cold_numbers(self.FREQS, 0) == []


class TestAverages:

    def test_even_odd(self, sample_draws):
        # 20 primaries: evens 8, 66, 12, 30, 2, 60 -> 6 even, 14 odd over 4 draws
        assert compute_even_odd_average(sample_draws) == {"avg_even": 1.5, "avg_odd": 3.5}

    def test_high_low(self, sample_draws):
        # midpoint 34: highs 51, 66, 47, 61, 41, 60 -> 6 high, 14 low
        assert compute_high_low_average(sample_draws, POWERBALL) == {"avg_high": 1.5, "avg_low": 3.5}

    def test_empty_history(self):
        assert compute_even_odd_average([]) == {"avg_even": 0.0, "avg_odd": 0.0}
        assert compute_high_low_average([], POWERBALL) == {"avg_high": 0.0, "avg_low": 0.0}


def test_trend_summary(sample_draws):
    summary = build_trend_summary(sample_draws, POWERBALL, top_n=5)

    assert summary["game_id"] == "powerball"
    assert summary["total_draws"] == 4
    assert summary["hot_numbers"][0] == {"number": 33, "count": 3}
    assert len(summary["cold_numbers"]) == 5
    assert summary["hot_bonus_numbers"][0] == {"number": 4, "count": 2}
    assert summary["main_frequencies"][0]["number"] == 33
