"""Microblog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MicroblogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Storage and services initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - storage_backend=memory skips the database entirely (single-process demos)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from microblog.api.dependencies import init_container
from microblog.api.error_handlers import register_error_handlers
from microblog.api.routes import accounts, health, posts, users
from microblog.config import get_settings
from microblog.infrastructure import database
from microblog.infrastructure.observability import setup_logging
from microblog.infrastructure.repositories import build_repositories

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = None
    if settings.storage_backend == "sql":
        db = database.init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        await db.create_all()
    init_container(build_repositories(db), settings.bcrypt_rounds)
    logger.info(f"Microblog API started ({settings.storage_backend} storage)")
    yield
    if db is not None:
        await db.dispose()
    logger.info("Microblog API shutting down")


app = FastAPI(title="Microblog API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(accounts.router)
app.include_router(users.router)
app.include_router(posts.router)

register_error_handlers(app)
