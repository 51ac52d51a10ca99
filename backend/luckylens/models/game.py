"""
Lottery game catalog models
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from .generation import GamePool


class LotteryGame(BaseModel):
    """Static description of a supported lottery game"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    region: str
    primary_count: int
    primary_max: int
    secondary_count: int
    secondary_max: int
    description: str
    draw_days: List[str]
    bonus_ball_label: str
    data_file: Optional[str] = None
    draw_weekdays: List[int] = Field(default_factory=list, description="Python weekdays (Monday=0); empty means daily")
    draw_time: str = "22:00"

    @property
    def pool(self) -> GamePool:
        return GamePool(
            primary_count=self.primary_count,
            primary_max=self.primary_max,
            secondary_count=self.secondary_count,
            secondary_max=self.secondary_max,
        )


class GameInfo(BaseModel):
    """Game description returned by the API"""
    game: LotteryGame
    next_draw: datetime
