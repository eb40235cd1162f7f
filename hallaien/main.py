"""
Hallaien FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hallaien import db
from hallaien.errors import HallaienError
from hallaien.middleware.rate_limit import rate_limiter
from hallaien.routes import assistants as assistant_routes
from hallaien.routes import programs as program_routes
from hallaien.routes import share_codes as share_code_routes
from hallaien.routes import student as student_routes
from hallaien.routes import voice as voice_routes

logger = logging.getLogger(__name__)


async def cleanup_task():
    """
    Background task to prune old redemption rate limit entries.

    Runs every 60 seconds. Expired share codes and grants are never
    deleted; reads filter them out.
    """
    while True:
        try:
            removed = rate_limiter.cleanup_old_entries(max_age_hours=2)
            if removed > 0:
                logger.debug("Pruned %d idle rate limit keys", removed)
        except Exception:
            logger.exception("Error in cleanup task")

        await asyncio.sleep(60)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Handles startup and shutdown logic:
    - Initialize database pool
    - Start background cleanup task
    - Close database pool on shutdown
    """
    await db.init_pool()

    cleanup_task_handle = asyncio.create_task(cleanup_task())
    logger.info("Background cleanup task started")

    yield

    cleanup_task_handle.cancel()
    try:
        await cleanup_task_handle
    except asyncio.CancelledError:
        logger.info("Background cleanup task stopped")

    await db.close_pool()


app = FastAPI(
    title="Hallaien",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)


@app.exception_handler(HallaienError)
async def hallaien_error_handler(request: Request, exc: HallaienError) -> JSONResponse:
    """Render domain errors as {"detail": ...} with their status code."""
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Register routes
app.include_router(program_routes.router)
app.include_router(assistant_routes.router)
app.include_router(share_code_routes.router)
app.include_router(student_routes.router)
app.include_router(voice_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
