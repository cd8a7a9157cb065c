"""
FastAPI application for learnmatch.

Provides REST API for:
- Module catalog and admin content management
- Generated quizzes and grading
- Learner progress
- Mentorship opportunities, matches and requests
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from config import get_settings
from learnmatch import __version__
from learnmatch.db.database import check_database, init_db
from learnmatch.errors import LearnMatchError
from learnmatch.logging_setup import configure_logging

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    configure_logging(settings)
    logger.info("Starting learnmatch service...")
    init_db()
    logger.info(f"Service started on {settings.api_host}:{settings.api_port}")

    yield

    # Shutdown
    logger.info("Shutting down learnmatch service...")


app = FastAPI(
    title="LearnMatch",
    description="""
    E-learning catalog with generated quizzes, progress tracking and
    mentor/learner matching.

    ## Authentication

    Requests carry the verified user id in the `X-User-Id` header
    (configurable via `AUTH_USER_HEADER`).
    """,
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ========================================
# Error Handlers
# ========================================


@app.exception_handler(LearnMatchError)
async def learnmatch_error_handler(request: Request, exc: LearnMatchError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ========================================
# Health & Status Endpoints
# ========================================


@app.get("/", tags=["Health"])
def root() -> dict[str, str]:
    """Root endpoint returning service info."""
    return {
        "service": "learnmatch",
        "version": __version__,
        "status": "ok",
    }


@app.get("/api/health", tags=["Health"])
def health_check() -> dict[str, Any]:
    """Health check that runs a live database query."""
    db_status, db_error = check_database()

    result: dict[str, Any] = {
        "status": "healthy" if db_status == "ok" else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {"database": db_status},
    }
    if db_error:
        result["errors"] = {"database": db_error}
    return result


# ========================================
# Import and mount routers
# ========================================

from learnmatch.api.routers import (  # noqa: E402
    admin_router,
    mentorship_router,
    modules_router,
    users_router,
)

app.include_router(modules_router.router, prefix="/api/modules", tags=["Modules"])
app.include_router(users_router.router, prefix="/api/users", tags=["Users"])
app.include_router(admin_router.router, prefix="/api/admin", tags=["Admin"])
app.include_router(mentorship_router.router, prefix="/api", tags=["Mentorship"])
