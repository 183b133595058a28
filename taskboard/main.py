"""Task Board API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskBoardError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Store, identity store and board created on startup via lifespan; the
      board's initial load runs before the first request is served

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - One TaskBoard per process on app.state: the API fronts a single client's
      mirror, exactly like the browser page it replaces
    - A failed initial load does not abort startup: the board reports it as its
      current error and /board/reload can retry
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.api.error_handlers import register_error_handlers
from taskboard.api.routes import board, health, session, tasks, users
from taskboard.config import get_settings
from taskboard.infrastructure.database import init_db
from taskboard.infrastructure.identity_store import FileIdentityStore
from taskboard.infrastructure.observability import setup_logging
from taskboard.infrastructure.sql_gateway import SqlStoreGateway
from taskboard.services.task_board import TaskBoard

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.create_schema_on_startup:
        await db.create_schema()
    app.state.board = TaskBoard(
        SqlStoreGateway(db), FileIdentityStore(settings.identity_path),
    )
    await app.state.board.start()
    logger.info("Task board API started")
    yield
    logger.info("Task board API shutting down")
    await db.dispose()


app = FastAPI(
    title="Task Board API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(session.router)
app.include_router(board.router)
app.include_router(tasks.router)

register_error_handlers(app)
