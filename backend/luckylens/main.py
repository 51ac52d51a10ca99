"""
LuckyLens Lottery Number Generator
Backend API - FastAPI Application
"""
from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from luckylens.api import generation, games, history, historical
from luckylens.core.config import settings

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="LuckyLens API",
    description="Lottery number generator and personal tracker",
    version="1.0.0"
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(games.router, prefix=settings.API_V1_PREFIX, tags=["games"])
app.include_router(generation.router, prefix=settings.API_V1_PREFIX, tags=["generation"])
app.include_router(history.router, prefix=settings.API_V1_PREFIX, tags=["history"])
app.include_router(historical.router, prefix=settings.API_V1_PREFIX, tags=["results"])


@app.get("/")
async def root():
    """Health check endpoint"""
    return {"status": "ok", "service": "LuckyLens API"}


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    """Request validation errors use the common error body"""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "code": "VALIDATION_ERROR",
            "message": first.get("msg", "Invalid request"),
            "field": ".".join(location) or None
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An internal error occurred",
            "field": None
        }
    )
