"""
Application configuration
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from typing import List


BACKEND_DIR = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Generation
    MAX_SETS_PER_REQUEST: int = 5
    NO_REPEAT_MAX_RETRIES: int = 10
    SAMPLER_MAX_ITERATIONS: int = 10000  # Guard for rejection/collection loops

    # Local storage (saved sets, settings)
    STORAGE_DIR: str = str(BACKEND_DIR / "storage")

    # Draw results
    DRAW_DATA_DIR: str = str(BACKEND_DIR / "data")
    RESULTS_CACHE_TTL: int = 3600  # 1 hour

    # Magayo results provider
    MAGAYO_API_URL: str = "https://www.magayo.com/api/results.php"
    MAGAYO_API_KEY: str = ""
    MAGAYO_TIMEOUT_SECONDS: float = 10.0

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
