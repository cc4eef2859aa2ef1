"""Health check endpoint."""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends

from crowdplex.api.dependencies import get_cache
from crowdplex.services.cache import TTLCache

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check(cache: TTLCache = Depends(get_cache)) -> dict[str, Any]:
    """
    Health check endpoint.

    Returns:
        Status, current time and response-cache statistics
    """
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "cache": cache.stats(),
    }
