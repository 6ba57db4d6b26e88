"""Health and readiness check routes."""

from fastapi import APIRouter, Depends

from config import settings
from routes.shaders import get_snapshot_cache
from services.cache import SnapshotCache

router = APIRouter()


@router.get("/ready")
async def ready() -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "shader-relay", "commit": settings.git_sha}


@router.get("/health")
async def health(cache: SnapshotCache = Depends(get_snapshot_cache)) -> dict:
    """Report cache state. Never triggers an upstream fetch."""
    snapshot = cache.snapshot
    if snapshot is None:
        state = "empty"
    elif cache.is_fresh():
        state = "fresh"
    else:
        state = "stale"

    age = cache.age()
    return {
        "status": "ok",
        "service": "shader-relay",
        "commit": settings.git_sha,
        "cache": {
            "state": state,
            "age_seconds": round(age, 1) if age is not None else None,
            "ttl_seconds": cache.ttl_seconds,
            "shaders": len(snapshot.shaders) if snapshot else 0,
            "developers": len(snapshot.developers) if snapshot else 0,
        },
    }
