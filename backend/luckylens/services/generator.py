"""
Batch generation engine
Produces N sets per request and applies the best-effort no-repeat policy
against the last saved set and against earlier sets of the same batch
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union
import logging
from luckylens.core.config import settings
from luckylens.models.generation import GamePool, GenerationMode, NumberSet
from luckylens.services.number_generator import NumberGenerator, validate_pool
from luckylens.services.random_source import IntegerSampler
from luckylens.services.weighted_generator import (
    FrequencyMap,
    WeightedNumberGenerator,
    has_frequency_data
)

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Sets produced by one batch call plus what happened along the way"""
    sets: List[NumberSet] = field(default_factory=list)
    mode: GenerationMode = GenerationMode.RANDOM
    used_fallback: bool = False
    accepted_duplicates: int = 0


class GenerationEngine:
    """Batch orchestrator over the uniform and weighted generators"""

    def __init__(
        self,
        sampler: Optional[IntegerSampler] = None,
        max_retries: Optional[int] = None
    ):
        self._number_generator = NumberGenerator(sampler)
        self._weighted_generator = WeightedNumberGenerator(self._number_generator.sampler)
        self._max_retries = settings.NO_REPEAT_MAX_RETRIES if max_retries is None else max_retries

    def generate_batch(
        self,
        pool: GamePool,
        count: int,
        no_repeat: bool,
        last_saved_set: Optional[NumberSet] = None,
        mode: Union[GenerationMode, str] = GenerationMode.RANDOM,
        primary_frequencies: Optional[FrequencyMap] = None,
        secondary_frequencies: Optional[FrequencyMap] = None
    ) -> List[NumberSet]:
        """
        Generate `count` sets

        Args:
            pool: Game pool sizes
            count: Number of sets; zero or less returns an empty list
            no_repeat: Avoid last_saved_set and repeats inside the batch
            last_saved_set: Most recently saved set for the game, if any
            mode: "random" (uniform) or "trend" (weighted)
            primary_frequencies: Historical counts for the primary pool (trend only)
            secondary_frequencies: Historical counts for the bonus pool (trend only)

        Returns:
            List of NumberSet, length == count
        """
        return self.generate_batch_report(
            pool,
            count,
            no_repeat,
            last_saved_set=last_saved_set,
            mode=mode,
            primary_frequencies=primary_frequencies,
            secondary_frequencies=secondary_frequencies
        ).sets

    def generate_batch_report(
        self,
        pool: GamePool,
        count: int,
        no_repeat: bool,
        last_saved_set: Optional[NumberSet] = None,
        mode: Union[GenerationMode, str] = GenerationMode.RANDOM,
        primary_frequencies: Optional[FrequencyMap] = None,
        secondary_frequencies: Optional[FrequencyMap] = None
    ) -> BatchResult:
        """Same as generate_batch, also reporting fallback and accepted duplicates"""
        mode = GenerationMode(mode)
        if mode == GenerationMode.MANUAL:
            raise ValueError("Manual sets are not generated")

        result = BatchResult(mode=mode)
        if count <= 0:
            return result

        validate_pool(pool)

        # Decided once per batch: no history at all means plain random sets
        use_weighted = mode == GenerationMode.TREND
        if use_weighted and not has_frequency_data(primary_frequencies, secondary_frequencies):
            logger.info("No frequency data available, trend batch falls back to random generation")
            use_weighted = False
            result.used_fallback = True

        def produce() -> NumberSet:
            if use_weighted:
                return self._weighted_generator.generate_weighted_set(
                    pool, primary_frequencies, secondary_frequencies
                )
            return self._number_generator.generate_set(pool)

        for i in range(count):
            candidate = produce()

            if no_repeat:
                retries = 0
                while self._is_duplicate(candidate, last_saved_set, result.sets):
                    if retries >= self._max_retries:
                        logger.warning(
                            f"Set {i+1}/{count} still repeats after {retries} retries, keeping it"
                        )
                        result.accepted_duplicates += 1
                        break
                    logger.debug(f"Set {i+1}/{count} repeats an earlier set, regenerating")
                    candidate = produce()
                    retries += 1

            result.sets.append(candidate)

        logger.info(
            f"Generated {len(result.sets)} {mode.value} set(s) "
            f"(weighted: {use_weighted}, no_repeat: {no_repeat})"
        )
        return result

    @staticmethod
    def _is_duplicate(
        candidate: NumberSet,
        last_saved_set: Optional[NumberSet],
        accepted: List[NumberSet]
    ) -> bool:
        if candidate.same_as(last_saved_set):
            return True
        return any(candidate.same_as(existing) for existing in accepted)


generation_engine = GenerationEngine()
