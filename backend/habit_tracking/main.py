"""Habit Tracking API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map HabitTrackingError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup only when the SQL repository is selected

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from habit_tracking import __version__
from habit_tracking.api.error_handlers import register_error_handlers
from habit_tracking.api.routes import habits, health
from habit_tracking.config import get_settings
from habit_tracking.infrastructure.database import init_db
from habit_tracking.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = None
    if settings.uses_sql:
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    logger.info(
        f"Habit Tracking API started (repository={settings.habit_repository})",
    )
    yield
    if manager:
        await manager.dispose()
    logger.info("Habit Tracking API shutting down")


app = FastAPI(
    title="Habit Tracking API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(habits.router)

register_error_handlers(app)
