"""Liveness endpoint."""

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health() -> Dict[str, str]:
    """Report that the API is up.  Does not touch storage."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": "Cure It API is running successfully!",
    }
