"""
Draw results, trends and results provider proxy API endpoints
"""
from datetime import datetime
from typing import List, Optional
import httpx
from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse
import logging

from luckylens.core.exceptions import UnknownGameError
from luckylens.models.history import HistoricalDraw, SyncResult
from luckylens.services.game_catalog import require_game
from luckylens.services.historical_data import historical_data_service
from luckylens.services.trends import build_trend_summary

logger = logging.getLogger(__name__)

router = APIRouter()


def _game_not_found(e: UnknownGameError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=e.to_dict())


@router.post("/results/{game_id}/sync", response_model=SyncResult)
async def sync_results(game_id: str, force: bool = False):
    """
    Sync draw results for a game
    Uses the Magayo API for supported games, bundled data otherwise
    """
    try:
        require_game(game_id)
    except UnknownGameError as e:
        return _game_not_found(e)

    result = await historical_data_service.sync_results(game_id, force_refresh=force)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={
                "code": "SYNC_ERROR",
                "message": f"Failed to sync results: {result.error}",
                "field": None
            }
        )
    return result


@router.get("/results/{game_id}", response_model=List[HistoricalDraw])
async def get_results(
    game_id: str,
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$")
):
    """
    Draw results, most recent first
    """
    try:
        require_game(game_id)
    except UnknownGameError as e:
        return _game_not_found(e)

    if month:
        try:
            datetime.strptime(month, "%Y-%m")
        except ValueError:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={
                    "code": "VALIDATION_ERROR",
                    "message": f"Invalid month: {month}",
                    "field": "month"
                }
            )

    return historical_data_service.get_draw_results(game_id, limit=limit, offset=offset, month=month)


@router.get("/results/{game_id}/months")
async def get_result_months(game_id: str):
    try:
        require_game(game_id)
    except UnknownGameError as e:
        return _game_not_found(e)

    last_sync = historical_data_service.get_last_sync_date(game_id)
    return {
        "game_id": game_id,
        "months": historical_data_service.get_available_months(game_id),
        "total_draws": historical_data_service.get_result_count(game_id),
        "last_sync": last_sync.isoformat() if last_sync else None
    }


@router.delete("/results")
async def clear_results(game_id: Optional[str] = None):
    historical_data_service.clear_results(game_id)
    return {"status": "cleared", "game_id": game_id}


@router.get("/trends/{game_id}")
async def get_trends(game_id: str, top: int = Query(10, ge=1, le=50)):
    """
    Frequency statistics for a game's synced draws
    """
    try:
        game = require_game(game_id)
        draws = historical_data_service.get_draw_results(game_id)
        return build_trend_summary(
            draws,
            game,
            top_n=top,
            last_sync=historical_data_service.get_last_sync_date(game_id)
        )
    except UnknownGameError as e:
        return _game_not_found(e)
    except Exception as e:
        logger.error(f"Error computing trends for {game_id}: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "code": "TRENDS_ERROR",
                "message": f"Failed to compute trends: {str(e)}",
                "field": None
            }
        )


@router.get("/lottery")
async def proxy_lottery_results(game: Optional[str] = None):
    """
    Pass-through to the Magayo results API (provider game ids, e.g. us_powerball)
    """
    if not game:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Missing game parameter"}
        )

    try:
        return await historical_data_service.magayo.fetch_raw(game)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Lottery proxy error for {game}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Failed to fetch lottery results",
                "details": str(e)
            }
        )
