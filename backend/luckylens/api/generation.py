"""
Generation API endpoints
"""
import uuid
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
import logging

from luckylens.core.config import settings
from luckylens.core.exceptions import LuckyLensError, UnknownGameError, SamplerUnavailable
from luckylens.models.generation import GenerationRequest, GenerationResponse, GenerationMode
from luckylens.models.history import SavedSet
from luckylens.services.game_catalog import require_game
from luckylens.services.generator import generation_engine
from luckylens.services.historical_data import historical_data_service
from luckylens.services.history_store import history_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate", response_model=GenerationResponse)
async def generate_sets(request: GenerationRequest):
    """
    Generate 1-5 number sets for a game
    Trend mode weights numbers by synced draw history and falls back
    to random generation when no history exists
    """
    if request.count > settings.MAX_SETS_PER_REQUEST:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "code": "COUNT_EXCEEDED",
                "message": f"Count exceeds maximum allowed: {settings.MAX_SETS_PER_REQUEST}",
                "field": "count"
            }
        )

    try:
        game = require_game(request.game_id)
        user_settings = history_store.get_settings()
        no_repeat = user_settings.no_repeat if request.no_repeat is None else request.no_repeat
        save = user_settings.auto_save_generated if request.save is None else request.save

        last_saved_set = history_store.get_last_saved_set(game.id) if no_repeat else None

        primary_frequencies, secondary_frequencies = None, None
        if request.mode == GenerationMode.TREND:
            primary_frequencies, secondary_frequencies = historical_data_service.get_frequencies(game.id)

        result = generation_engine.generate_batch_report(
            game.pool,
            request.count,
            no_repeat,
            last_saved_set=last_saved_set,
            mode=request.mode,
            primary_frequencies=primary_frequencies,
            secondary_frequencies=secondary_frequencies
        )

        batch_id = uuid.uuid4().hex
        if save:
            history_store.save_sets([
                SavedSet(
                    game_id=game.id,
                    primary_numbers=list(number_set.primary_numbers),
                    secondary_numbers=list(number_set.secondary_numbers),
                    generation_type=request.mode,
                    batch_id=batch_id
                )
                for number_set in result.sets
            ])

        return GenerationResponse(
            game_id=game.id,
            mode=request.mode,
            batch_id=batch_id,
            sets=result.sets,
            used_fallback=result.used_fallback,
            accepted_duplicates=result.accepted_duplicates,
            saved=save
        )

    except UnknownGameError as e:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=e.to_dict())
    except SamplerUnavailable as e:
        logger.error(f"Random source failure: {e}", exc_info=True)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=e.to_dict())
    except LuckyLensError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=e.to_dict())
    except Exception as e:
        logger.error(f"Error generating sets: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "code": "INTERNAL_ERROR",
                "message": "Failed to generate sets",
                "field": None
            }
        )
