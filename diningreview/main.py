"""
Dining Review — FastAPI application entry point.
Lifespan: create DB tables → verify connectivity.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from diningreview import __version__
from diningreview.config import settings
from diningreview.database import check_db_connectivity, create_tables, engine
from diningreview.exceptions import DiningReviewError
from diningreview.routers import health, restaurants, reviews, users

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.
    1. Create all tables (idempotent — IF NOT EXISTS).
    2. Verify DB connectivity.
    """
    logger.info("Starting Dining Review (env=%s)", settings.app_env)

    # Step 1: create tables
    await create_tables()
    logger.info("Database tables created/verified.")

    # Step 2: connectivity check
    ok = await check_db_connectivity()
    if not ok:
        logger.error("Database connectivity check FAILED at startup.")
    else:
        logger.info("Database connectivity verified.")

    yield

    logger.info("Shutting down Dining Review.")
    await engine.dispose()


app = FastAPI(
    title="Dining Review",
    description="Allergy-friendliness reviews, moderation and rankings for restaurants.",
    version=__version__,
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────────────────────

app.include_router(health.router)
app.include_router(users.router)
app.include_router(restaurants.router)
app.include_router(reviews.router)


# ── Exception handlers ───────────────────────────────────────────────────────

@app.exception_handler(DiningReviewError)
async def domain_exception_handler(request: Request, exc: DiningReviewError) -> JSONResponse:
    """NotFound → 404, Conflict → 409, InvalidArgument → 400, with a stable code."""
    logger.info(
        "%s %s → %d %s: %s",
        request.method, request.url.path, exc.status_code, exc.code, exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a machine-readable error for any unhandled exception."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "code": "INTERNAL_ERROR"},
    )
