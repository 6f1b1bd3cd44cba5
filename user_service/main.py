"""User Service API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserServiceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database pool and service registry created on startup, pool disposed on shutdown

Design Decisions:
    - create_app() factory: tests and the uvicorn entry point build identical apps
    - Lifespan over on_event hooks: cleaner cleanup
    - Services stored on app.state and injected per request, no import-time globals
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_service.api.error_handlers import register_error_handlers
from user_service.api.routes import health, users
from user_service.config import get_settings
from user_service.infrastructure.database import close_db, init_db
from user_service.infrastructure.observability import setup_logging
from user_service.services.registry import build_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Connecting to database: {settings.safe_database_target()}")
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        ssl=settings.is_production,
    )
    app.state.services = build_services(manager)
    logger.info("User Service API started")
    yield
    logger.info("User Service API shutting down")
    await close_db()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="User Service API",
        description="API for user management",
        version="1.0.0",
        docs_url="/docs",
        lifespan=lifespan,
    )

    # CORS — configured from settings, not hardcoded
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(users.router)
    return app


app = create_app()
