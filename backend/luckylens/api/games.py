"""
Game catalog API endpoints
"""
from typing import List
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from luckylens.core.exceptions import UnknownGameError
from luckylens.models.game import GameInfo, LotteryGame
from luckylens.services.game_catalog import list_games, next_draw_date, require_game

router = APIRouter()


@router.get("/games", response_model=List[LotteryGame])
async def get_games():
    return list_games()


@router.get("/games/{game_id}", response_model=GameInfo)
async def get_game(game_id: str):
    """
    Game rules plus the next scheduled draw
    """
    try:
        game = require_game(game_id)
    except UnknownGameError as e:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=e.to_dict())
    return GameInfo(game=game, next_draw=next_draw_date(game))
