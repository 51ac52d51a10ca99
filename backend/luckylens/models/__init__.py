from .generation import (
    GamePool,
    NumberSet,
    GenerationMode,
    GenerationRequest,
    GenerationResponse
)
from .game import LotteryGame, GameInfo
from .history import (
    SavedSet,
    HistoricalDraw,
    SyncResult,
    UserSettings,
    UserSettingsUpdate,
    ManualPickRequest,
    GeneratedSetSave,
    SaveSetsRequest
)

__all__ = [
    "GamePool",
    "NumberSet",
    "GenerationMode",
    "GenerationRequest",
    "GenerationResponse",
    "LotteryGame",
    "GameInfo",
    "SavedSet",
    "HistoricalDraw",
    "SyncResult",
    "UserSettings",
    "UserSettingsUpdate",
    "ManualPickRequest",
    "GeneratedSetSave",
    "SaveSetsRequest"
]
