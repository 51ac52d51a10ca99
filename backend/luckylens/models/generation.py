"""
Generation request/response models
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Tuple
from enum import Enum


class GenerationMode(str, Enum):
    """How a set of numbers was produced"""
    RANDOM = "random"  # Uniform draw
    TREND = "trend"    # Weighted by historical frequencies
    MANUAL = "manual"  # Picked by the user


class GamePool(BaseModel):
    """Number pool sizes for a game (read-only configuration)"""
    model_config = ConfigDict(frozen=True)

    primary_count: int
    primary_max: int
    secondary_count: int = 0
    secondary_max: int = 0


class NumberSet(BaseModel):
    """
    One generated combination
    Primary numbers are unique and ascending, secondary numbers keep draw order
    """
    model_config = ConfigDict(frozen=True)

    primary_numbers: Tuple[int, ...]
    secondary_numbers: Tuple[int, ...] = ()

    def same_as(self, other: Optional["NumberSet"]) -> bool:
        """Exact sequence equality of both pools (secondary order matters)"""
        if other is None:
            return False
        return (
            self.primary_numbers == other.primary_numbers
            and self.secondary_numbers == other.secondary_numbers
        )


class GenerationRequest(BaseModel):
    """Generation request model"""
    game_id: str = Field(..., description="Game id from the catalog")
    mode: GenerationMode = Field(GenerationMode.RANDOM, description="random or trend")
    count: int = Field(1, ge=1, description="Number of sets to generate")
    no_repeat: Optional[bool] = Field(None, description="Avoid repeating the last saved set (defaults to user settings)")
    save: Optional[bool] = Field(None, description="Save generated sets to history (defaults to user settings)")

    @field_validator('mode')
    @classmethod
    def validate_mode(cls, v):
        if v == GenerationMode.MANUAL:
            raise ValueError("Manual sets are saved through /history/manual")
        return v


class GenerationResponse(BaseModel):
    """Generation response model"""
    game_id: str
    mode: GenerationMode
    batch_id: str
    sets: List[NumberSet]
    used_fallback: bool = Field(False, description="Trend mode fell back to random (no draw history)")
    accepted_duplicates: int = Field(0, description="Sets kept after no-repeat retries ran out")
    saved: bool = False
