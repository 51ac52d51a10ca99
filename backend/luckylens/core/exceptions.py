"""
Domain exceptions
"""


class LuckyLensError(Exception):
    """Base class for all LuckyLens errors"""

    code = "LUCKYLENS_ERROR"

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "field": self.field}


class SamplerUnavailable(LuckyLensError, RuntimeError):
    """The secure random source could not produce a value"""

    code = "SAMPLER_UNAVAILABLE"


class InvalidPoolConfiguration(LuckyLensError, ValueError):
    """Pool sizes make the requested draw impossible"""

    code = "INVALID_POOL_CONFIGURATION"


class InvalidPickError(LuckyLensError, ValueError):
    """A manually picked set breaks the game rules"""

    code = "INVALID_PICK"


class UnknownGameError(LuckyLensError, KeyError):
    """No game with the given id exists in the catalog"""

    code = "GAME_NOT_FOUND"

    def __str__(self):
        return self.message
