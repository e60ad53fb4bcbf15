"""SimpleBlog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly under settings.api_prefix (no auto-discovery)
    - Global error handlers map BlogError → {statusCode, message} responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py so tests can build their own app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from simpleblog import __version__
from simpleblog.api.error_handlers import register_error_handlers
from simpleblog.api.routes import categories, comments, health, posts
from simpleblog.config import get_settings
from simpleblog.infrastructure.database import close_db, init_db
from simpleblog.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("SimpleBlog API started")
    yield
    logger.info("SimpleBlog API shutting down")
    await close_db()


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(
        title=settings.app_title, version=__version__, lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )

    # Collection routes are declared before /{id} inside each router
    for module in (health, categories, posts, comments):
        application.include_router(module.router, prefix=settings.api_prefix)

    register_error_handlers(application)
    return application


app = create_app()
