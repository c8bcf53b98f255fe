from __future__ import annotations
from fastapi import APIRouter

from ..config import settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health():
    return {
        "status": "ok",
        "fetch": {
            "timeout_seconds": settings.fetch_timeout_seconds,
            "max_concurrency": settings.fetch_max_concurrency,
            "retries": settings.fetch_retry_max_retries,
        },
    }
