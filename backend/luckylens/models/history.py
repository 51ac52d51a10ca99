"""
Saved set history, draw results and user settings models
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from .generation import GenerationMode, NumberSet


class SavedSet(BaseModel):
    """A number set stored in the local history"""
    id: Optional[int] = None
    timestamp: datetime = Field(default_factory=datetime.now)
    game_id: str
    primary_numbers: List[int]
    secondary_numbers: List[int] = Field(default_factory=list)
    generation_type: GenerationMode
    saved: bool = True
    notes: Optional[str] = None
    batch_id: Optional[str] = None

    def to_number_set(self) -> NumberSet:
        return NumberSet(
            primary_numbers=tuple(self.primary_numbers),
            secondary_numbers=tuple(self.secondary_numbers),
        )


class HistoricalDraw(BaseModel):
    """An official draw result"""
    date: datetime
    game_id: str
    primary_numbers: List[int]
    secondary_numbers: List[int] = Field(default_factory=list)
    jackpot: Optional[str] = None
    winners: int = 0


class SyncResult(BaseModel):
    """Outcome of a draw results sync"""
    success: bool
    count: int = 0
    source: Optional[str] = None
    error: Optional[str] = None


class UserSettings(BaseModel):
    """User preferences"""
    default_game_id: str = "powerball"
    notifications_enabled: bool = True
    auto_save_generated: bool = False
    no_repeat: bool = False
    default_set_count: int = Field(1, ge=1, le=5)


class UserSettingsUpdate(BaseModel):
    """Partial settings update"""
    default_game_id: Optional[str] = None
    notifications_enabled: Optional[bool] = None
    auto_save_generated: Optional[bool] = None
    no_repeat: Optional[bool] = None
    default_set_count: Optional[int] = Field(None, ge=1, le=5)


class ManualPickRequest(BaseModel):
    """Numbers picked by hand"""
    game_id: str
    primary_numbers: List[int]
    secondary_numbers: List[int] = Field(default_factory=list)
    notes: Optional[str] = None

    @field_validator('notes')
    @classmethod
    def validate_notes(cls, v):
        if v is not None and len(v) > 500:
            raise ValueError("Notes must be at most 500 characters")
        return v


class GeneratedSetSave(BaseModel):
    """A generated set the user chose to keep"""
    game_id: str
    primary_numbers: List[int]
    secondary_numbers: List[int] = Field(default_factory=list)
    generation_type: GenerationMode = GenerationMode.RANDOM
    batch_id: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator('generation_type')
    @classmethod
    def validate_generation_type(cls, v):
        if v == GenerationMode.MANUAL:
            raise ValueError("Manual sets are saved through /history/manual")
        return v


class SaveSetsRequest(BaseModel):
    """One or more generated sets to store"""
    sets: List[GeneratedSetSave] = Field(..., min_length=1)
