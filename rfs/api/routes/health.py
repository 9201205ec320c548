"""Health check and ping."""

from fastapi import APIRouter

from rfs import __version__
from rfs.schemas.system import HealthResponse
from rfs.services import get_file_router, get_selector

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Lightweight liveness check."""
    return HealthResponse(
        version=__version__,
        listing_enabled=get_file_router().listing_enabled,
        non_repeat=get_selector().non_repeat,
    )


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
