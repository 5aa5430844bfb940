"""Liveness endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from ideaforge import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
