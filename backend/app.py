"""FastAPI application entry point for the shader relay."""

import logging
import sys

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import CACHE_TTL_SECONDS, UPSTREAM_BASE_URL, settings
from errors import register_error_handlers
from services.cache import SnapshotCache
from services.repository import RepositoryClient

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def create_app(snapshot_cache: SnapshotCache | None = None) -> FastAPI:
    app = FastAPI(title="Shader Relay", version="1.0.0")

    if snapshot_cache is None:
        snapshot_cache = SnapshotCache(RepositoryClient().fetch_snapshot)
    app.state.snapshot_cache = snapshot_cache

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.shaders import router as shaders_router

    app.include_router(health_router)
    app.include_router(shaders_router)

    @app.on_event("startup")
    async def _validate_config() -> None:
        problems = settings.validate()
        if problems:
            logger.warning("Ignoring malformed env vars (using defaults): %s", ", ".join(problems))
        logger.info("Relaying %s (cache window %ss)", UPSTREAM_BASE_URL, CACHE_TTL_SECONDS)

    return app


app = create_app()


def main() -> None:
    logger.info("Server running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
