"""FastAPI application entry point.

Catalog Match API - supplier offer reconciliation against a product catalog.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_match.routes import api_router
from catalog_match.schemas import ErrorResponse
from catalog_match.services.errors import MatchingError
from catalog_match.settings import get_settings
from catalog_match.stores.postgres import init_db, close_db, ping_db
from catalog_match.stores.redis import init_redis, close_redis

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Connect the database and (when review locks are on) Redis.

    Store init failures are logged, not raised.
    """
    settings = get_settings()
    logger.info(
        f"Matching config: auto_approve_threshold={settings.match_auto_approve_threshold} "
        f"score_cap={settings.match_score_cap} top_n={settings.match_top_n}"
    )

    try:
        await init_db()
        await ping_db()
        logger.info("Database connected")
    except Exception:
        logger.exception("Database init failed")

    if settings.review_locks_enabled:
        try:
            await init_redis()
        except Exception:
            logger.exception("Redis init failed (review actions will fail until it is reachable)")
    else:
        logger.info("Review locks disabled; Redis not initialized")

    yield

    await close_redis()
    await close_db()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Supplier price-list reconciliation API",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MatchingError)
    async def matching_error_handler(request: Request, exc: MatchingError) -> JSONResponse:
        """Domain errors (not found, invalid transition, ...) in the structured format."""
        body = ErrorResponse.build(exc.code, exc.message, exc.detail)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    # Exception handler for structured error format
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        body = ErrorResponse.build(
            "INTERNAL_ERROR",
            str(exc) if settings.debug else "Internal server error",
        )
        return JSONResponse(status_code=500, content=body.model_dump())

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    # Include API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "catalog_match.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
