"""Buddy Schedule API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BuddyScheduleError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Storage initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static assets mounted last so /api/* and /healthz take precedence
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.error_handlers import register_error_handlers
from app.api.routes import auth, health, schedules, shifts, templates
from app.config import get_settings
from app.infrastructure import database
from app.infrastructure.observability import setup_logging
from app.infrastructure.storage import init_repository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_repository(settings)
    logger.info(f"Buddy Schedule API started ({settings.storage_backend} storage)")
    yield
    if database.db_manager is not None:
        await database.db_manager.dispose()
    logger.info("Buddy Schedule API shutting down")


app = FastAPI(
    title="Buddy Schedule API", version="0.1.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(schedules.router)
app.include_router(shifts.router)
app.include_router(templates.router)

register_error_handlers(app)

# html=True serves index.html for unknown paths (single-page frontend)
if os.path.isdir(settings.static_dir):
    app.mount(
        "/", StaticFiles(directory=settings.static_dir, html=True), name="static",
    )
