"""
Unit tests for the batch generation engine
"""
import pytest
from luckylens.core.exceptions import InvalidPoolConfiguration
from luckylens.models.generation import GamePool, GenerationMode, NumberSet
from luckylens.services.generator import GenerationEngine
from luckylens.services.random_source import IntegerSampler, SeededRandomSource


class TestGenerateBatch:
    """Batch sizes and modes"""

    def test_single_random_set(self, powerball_pool):
        engine = GenerationEngine()

        sets = engine.generate_batch(powerball_pool, 1, False, None, "random")

        assert len(sets) == 1
        primary = sets[0].primary_numbers
        assert len(primary) == 5
        assert list(primary) == sorted(set(primary))
        assert all(1 <= n <= 69 for n in primary)
        assert len(sets[0].secondary_numbers) == 1
        assert 1 <= sets[0].secondary_numbers[0] <= 26

    @pytest.mark.parametrize("count", [1, 3, 5, 12])
    def test_batch_length_matches_count(self, powerball_pool, count):
        sets = GenerationEngine().generate_batch(powerball_pool, count, True, None)
        assert len(sets) == count

    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_count_returns_empty(self, powerball_pool, count):
        assert GenerationEngine().generate_batch(powerball_pool, count, True, None) == []

    def test_non_positive_count_skips_pool_validation(self):
        invalid = GamePool(primary_count=10, primary_max=3)
        assert GenerationEngine().generate_batch(invalid, 0, False, None) == []

    def test_invalid_pool_raises(self):
        invalid = GamePool(primary_count=10, primary_max=3)
        with pytest.raises(InvalidPoolConfiguration):
            GenerationEngine().generate_batch(invalid, 2, False, None)

    def test_manual_mode_rejected(self, powerball_pool):
        with pytest.raises(ValueError):
            GenerationEngine().generate_batch(powerball_pool, 1, False, None, GenerationMode.MANUAL)

    def test_unknown_mode_rejected(self, powerball_pool):
        with pytest.raises(ValueError):
            GenerationEngine().generate_batch(powerball_pool, 1, False, None, "lucky")


class TestNoRepeat:
    """Best-effort duplicate avoidance"""

    def test_last_saved_set_never_repeated(self, pick3_pool):
        """84 combinations in 3 of 9, so retries practically never run out"""
        engine = GenerationEngine(IntegerSampler(SeededRandomSource(5)))
        last_saved = NumberSet(primary_numbers=(1, 2, 3))

        for _ in range(200):
            sets = engine.generate_batch(pick3_pool, 5, True, last_saved)
            assert len(sets) == 5
            assert all(not s.same_as(last_saved) for s in sets)
            assert len({s.primary_numbers for s in sets}) == 5

    def test_trend_batch_avoids_repeats(self, pick3_pool):
        engine = GenerationEngine(IntegerSampler(SeededRandomSource(8)))
        last_saved = NumberSet(primary_numbers=(4, 5, 6))
        freqs = {4: 3, 5: 3, 6: 3}

        for _ in range(100):
            result = engine.generate_batch_report(
                pick3_pool, 5, True, last_saved, "trend", freqs, {}
            )
            assert not result.used_fallback
            assert all(not s.same_as(last_saved) for s in result.sets)
            assert len({s.primary_numbers for s in result.sets}) == 5

    def test_exhausted_retries_accept_duplicate(self):
        """A pool with a single possible set cannot avoid repeats"""
        pool = GamePool(primary_count=1, primary_max=1, secondary_count=1, secondary_max=1)
        only_set = NumberSet(primary_numbers=(1,), secondary_numbers=(1,))

        result = GenerationEngine().generate_batch_report(pool, 3, True, only_set)

        assert result.sets == [only_set, only_set, only_set]
        assert result.accepted_duplicates == 3

    def test_retries_are_bounded(self, sequence_source):
        """Each slot regenerates at most max_retries times"""
        pool = GamePool(primary_count=1, primary_max=1)
        source = sequence_source([0])
        engine = GenerationEngine(IntegerSampler(source), max_retries=4)

        engine.generate_batch(pool, 2, True, NumberSet(primary_numbers=(1,)))

        assert source.calls == 2 * (1 + 4)

    def test_duplicates_allowed_without_no_repeat(self):
        pool = GamePool(primary_count=1, primary_max=1)

        result = GenerationEngine().generate_batch_report(pool, 3, False, NumberSet(primary_numbers=(1,)))

        assert len(result.sets) == 3
        assert result.accepted_duplicates == 0

    def test_secondary_order_matters_for_equality(self):
        first = NumberSet(primary_numbers=(1, 2), secondary_numbers=(3, 4))
        second = NumberSet(primary_numbers=(1, 2), secondary_numbers=(4, 3))

        assert not first.same_as(second)
        assert first.same_as(NumberSet(primary_numbers=(1, 2), secondary_numbers=(3, 4)))
        assert not first.same_as(None)


class TestTrendMode:
    """Weighted batches and the uniform fallback"""

    def test_empty_frequencies_fall_back_to_random(self, powerball_pool):
        result = GenerationEngine().generate_batch_report(
            powerball_pool, 3, False, None, GenerationMode.TREND, {}, {}
        )

        assert result.used_fallback
        assert len(result.sets) == 3

    def test_missing_frequencies_fall_back_to_random(self, powerball_pool):
        result = GenerationEngine().generate_batch_report(powerball_pool, 2, False, None, "trend")
        assert result.used_fallback

    def test_any_history_keeps_weighted_mode(self, powerball_pool):
        result = GenerationEngine().generate_batch_report(
            powerball_pool, 2, False, None, "trend", {}, {5: 1}
        )
        assert not result.used_fallback

    def test_random_mode_never_reports_fallback(self, powerball_pool):
        result = GenerationEngine().generate_batch_report(powerball_pool, 2, False, None, "random")
        assert not result.used_fallback
        assert result.mode == GenerationMode.RANDOM

    def test_frequencies_drive_selection(self):
        pool = GamePool(primary_count=1, primary_max=10, secondary_count=1, secondary_max=5)

        sets = GenerationEngine(IntegerSampler(SeededRandomSource(1))).generate_batch(
            pool, 5, False, None, "trend", {4: 10 ** 6}, {2: 10 ** 6}
        )

        assert all(s.primary_numbers == (4,) and s.secondary_numbers == (2,) for s in sets)

    def test_identical_inputs_with_seeded_source_are_deterministic(self, powerball_pool):
        freqs = {n: n % 5 for n in range(1, 70)}
        bonus = {n: 1 for n in range(1, 27)}
        last_saved = NumberSet(primary_numbers=(1, 2, 3, 4, 5), secondary_numbers=(6,))

        first = GenerationEngine(IntegerSampler(SeededRandomSource(2024))).generate_batch(
            powerball_pool, 5, True, last_saved, "trend", freqs, bonus
        )
        second = GenerationEngine(IntegerSampler(SeededRandomSource(2024))).generate_batch(
            powerball_pool, 5, True, last_saved, "trend", freqs, bonus
        )

        assert first == second
