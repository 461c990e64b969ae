"""Exoplanet Analysis API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ExoplanetApiError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized (and schema ensured) on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: ExoplanetApiError (domain), RequestValidationError
      (Pydantic), Exception (catch-all); never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from exoplanet_api import __version__
from exoplanet_api.api.error_handlers import register_error_handlers
from exoplanet_api.api.routes import analyses, health
from exoplanet_api.infrastructure.database import init_db
from exoplanet_api.infrastructure.observability import setup_logging
from exoplanet_api.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_schema:
        await manager.create_schema()
    logger.info("Exoplanet Analysis API started")
    yield
    await manager.dispose()
    logger.info("Exoplanet Analysis API shutting down")


app = FastAPI(
    title="Exoplanet Analysis API", version=__version__, lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(analyses.router)

register_error_handlers(app)
