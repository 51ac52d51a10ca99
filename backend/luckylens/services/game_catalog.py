"""
Static catalog of supported lottery games
"""
from datetime import datetime, timedelta
from typing import Dict, List, Optional
from luckylens.core.exceptions import UnknownGameError
from luckylens.models.game import LotteryGame


LOTTERY_GAMES: List[LotteryGame] = [
    LotteryGame(
        id="powerball",
        name="Powerball",
        region="USA",
        primary_count=5,
        primary_max=69,
        secondary_count=1,
        secondary_max=26,
        description="America's favorite lottery with massive jackpots",
        draw_days=["Monday", "Wednesday", "Saturday"],
        draw_weekdays=[0, 2, 5],
        draw_time="22:59",
        data_file="powerball.json",
        bonus_ball_label="Powerball",
    ),
    LotteryGame(
        id="megamillions",
        name="Mega Millions",
        region="USA",
        primary_count=5,
        primary_max=70,
        secondary_count=1,
        secondary_max=25,
        description="Huge jackpots with Megaplier option",
        draw_days=["Tuesday", "Friday"],
        draw_weekdays=[1, 4],
        draw_time="23:00",
        data_file="megamillions.json",
        bonus_ball_label="Mega Ball",
    ),
    LotteryGame(
        id="luckyforlife",
        name="Lucky for Life",
        region="USA",
        primary_count=5,
        primary_max=48,
        secondary_count=1,
        secondary_max=18,
        description="Win $1,000 a day for life!",
        draw_days=["Monday", "Thursday"],
        draw_weekdays=[0, 3],
        draw_time="22:35",
        data_file="luckyforlife.json",
        bonus_ball_label="Lucky Ball",
    ),
    LotteryGame(
        id="cash4life",
        name="Cash4Life",
        region="USA",
        primary_count=5,
        primary_max=60,
        secondary_count=1,
        secondary_max=4,
        description="$1,000 a day for life - daily draws!",
        draw_days=["Daily"],
        draw_weekdays=[],
        draw_time="21:00",
        data_file="cash4life.json",
        bonus_ball_label="Cash Ball",
    ),
    LotteryGame(
        id="lottoamerica",
        name="Lotto America",
        region="USA",
        primary_count=5,
        primary_max=52,
        secondary_count=1,
        secondary_max=10,
        description="All-American lottery with Star Ball bonus",
        draw_days=["Monday", "Wednesday", "Saturday"],
        draw_weekdays=[0, 2, 5],
        draw_time="22:00",
        data_file="lottoamerica.json",
        bonus_ball_label="Star Ball",
    ),
]

GAMES_MAP: Dict[str, LotteryGame] = {game.id: game for game in LOTTERY_GAMES}


def list_games() -> List[LotteryGame]:
    return list(LOTTERY_GAMES)


def get_game_by_id(game_id: str) -> Optional[LotteryGame]:
    return GAMES_MAP.get(game_id)


def require_game(game_id: str) -> LotteryGame:
    """Like get_game_by_id but raises UnknownGameError"""
    game = GAMES_MAP.get(game_id)
    if game is None:
        raise UnknownGameError(f"Unknown game: {game_id}", field="game_id")
    return game


def get_default_game() -> LotteryGame:
    return LOTTERY_GAMES[0]


def next_draw_date(game: LotteryGame, now: Optional[datetime] = None) -> datetime:
    """
    Next draw after today
    Weekly games: the first draw weekday strictly after today's weekday,
    wrapping to the first draw weekday of next week. Daily games: tomorrow.
    """
    now = now or datetime.now()
    hour, minute = (int(part) for part in game.draw_time.split(":"))

    if not game.draw_weekdays:
        days_until_draw = 1
    else:
        today = now.weekday()
        later = [day for day in sorted(game.draw_weekdays) if day > today]
        if later:
            days_until_draw = later[0] - today
        else:
            days_until_draw = 7 - today + min(game.draw_weekdays)

    next_draw = now + timedelta(days=days_until_draw)
    return next_draw.replace(hour=hour, minute=minute, second=0, microsecond=0)
