"""Huly Tool Server API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers registered from api/error_handlers.py
    - CORS configured from settings (not hardcoded)
    - Database and workspace initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/cleanup pairing
    - Workspace on app.state: routes take it through a dependency, tests replace it
    - SQLite URLs get tables created on startup; Postgres is migrated by alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.api.error_handlers import register_error_handlers
from app.api.routes import health, tool_calls
from app.config import get_settings
from app.infrastructure.database import init_db
from app.infrastructure.memory_workspace import InMemoryWorkspace
from app.infrastructure.observability import setup_logging

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
    if settings.database_url.startswith("sqlite"):
        await manager.create_tables()
    if getattr(app.state, "workspace", None) is None:
        app.state.workspace = InMemoryWorkspace()
    logger.info("Huly tool server started")
    yield
    await manager.dispose()
    logger.info("Huly tool server shutting down")


app = FastAPI(
    title="Huly Tool Server", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(tool_calls.router)

register_error_handlers(app)
