"""
Saved set history and user settings API endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse
import logging

from luckylens.core.exceptions import InvalidPickError, UnknownGameError
from luckylens.models.generation import GenerationMode
from luckylens.models.history import (
    ManualPickRequest,
    SavedSet,
    SaveSetsRequest,
    UserSettings,
    UserSettingsUpdate
)
from luckylens.services.game_catalog import get_game_by_id, require_game
from luckylens.services.history_store import history_store
from luckylens.services.manual_pick import validate_manual_pick

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/history/manual", response_model=SavedSet)
async def save_manual_pick(request: ManualPickRequest):
    """
    Save a hand-picked set
    """
    try:
        game = require_game(request.game_id)
        number_set = validate_manual_pick(game, request.primary_numbers, request.secondary_numbers)
    except UnknownGameError as e:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=e.to_dict())
    except InvalidPickError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=e.to_dict())

    saved = history_store.save_sets([
        SavedSet(
            game_id=game.id,
            primary_numbers=list(number_set.primary_numbers),
            secondary_numbers=list(number_set.secondary_numbers),
            generation_type=GenerationMode.MANUAL,
            notes=request.notes
        )
    ])
    return saved[0]


@router.post("/history", response_model=List[SavedSet])
async def save_generated_sets(request: SaveSetsRequest):
    """
    Save generated sets after review, keeping their generation type and batch id
    Nothing is stored unless every set is valid for its game
    """
    records = []
    try:
        for item in request.sets:
            game = require_game(item.game_id)
            number_set = validate_manual_pick(game, item.primary_numbers, item.secondary_numbers)
            records.append(SavedSet(
                game_id=game.id,
                primary_numbers=list(number_set.primary_numbers),
                secondary_numbers=list(number_set.secondary_numbers),
                generation_type=item.generation_type,
                notes=item.notes,
                batch_id=item.batch_id
            ))
    except UnknownGameError as e:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=e.to_dict())
    except InvalidPickError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=e.to_dict())

    return history_store.save_sets(records)


@router.get("/history", response_model=List[SavedSet])
async def list_history(
    game_id: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0)
):
    """
    Saved sets, newest first
    """
    return history_store.get_all_sets(game_id=game_id, limit=limit, offset=offset)


@router.get("/history/count")
async def count_history(game_id: Optional[str] = None):
    return {"game_id": game_id, "count": history_store.get_set_count(game_id)}


@router.delete("/history/{set_id}")
async def delete_history_set(set_id: int):
    if not history_store.delete_set(set_id):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "code": "SET_NOT_FOUND",
                "message": f"Saved set {set_id} not found",
                "field": "set_id"
            }
        )
    return {"status": "deleted", "id": set_id}


@router.delete("/history")
async def clear_history(game_id: Optional[str] = None):
    """
    Clear all saved sets, or only those of one game
    """
    if game_id:
        removed = history_store.clear_sets_by_game(game_id)
    else:
        removed = history_store.clear_all_sets()
    return {"status": "cleared", "removed": removed}


@router.get("/settings", response_model=UserSettings)
async def get_settings():
    return history_store.get_settings()


@router.put("/settings", response_model=UserSettings)
async def update_settings(update: UserSettingsUpdate):
    if update.default_game_id is not None and get_game_by_id(update.default_game_id) is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "code": "VALIDATION_ERROR",
                "message": f"Unknown game: {update.default_game_id}",
                "field": "default_game_id"
            }
        )
    return history_store.update_settings(update)
