"""Shader repository routes — full sync and filtered search."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from errors import UpstreamError
from services.cache import SnapshotCache
from services.search import filter_shaders

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_snapshot_cache(request: Request) -> SnapshotCache:
    return request.app.state.snapshot_cache


@router.get("/sync")
async def sync(cache: SnapshotCache = Depends(get_snapshot_cache)):
    """Everything the app needs in one call: shaders plus developers."""
    try:
        snapshot = await cache.get_snapshot()
    except UpstreamError as e:
        logger.warning("Sync failed: %s", e)
        return JSONResponse({"error": "Server Error"}, status_code=500)
    except Exception:
        logger.exception("Sync endpoint failed")
        return JSONResponse({"error": "Server Error"}, status_code=500)

    return snapshot.to_dict()


@router.get("/shaders")
async def search_shaders(
    q: str | None = Query(None),
    tag: str | None = Query(None),
    platform: str | None = Query(None),
    cache: SnapshotCache = Depends(get_snapshot_cache),
):
    """Search shaders, e.g. /api/shaders?tag=Ultra&q=Refined."""
    try:
        snapshot = await cache.get_snapshot()
        results = filter_shaders(snapshot.shaders, q=q, tag=tag, platform=platform)
    except UpstreamError as e:
        logger.warning("Search failed: %s", e)
        return JSONResponse({"error": "Search Error"}, status_code=500)
    except Exception:
        logger.exception("Search endpoint failed")
        return JSONResponse({"error": "Search Error"}, status_code=500)

    return results
