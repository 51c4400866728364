"""Blogify API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Identity middleware resolves request.state.actor before any route runs
    - Global error handlers map BlogifyError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - CORS allows credentials: the session travels in a cookie
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blogify.api.error_handlers import register_error_handlers
from blogify.api.identity_middleware import IdentityMiddleware
from blogify.api.routes import health, posts, users
from blogify.config import get_settings
from blogify.infrastructure.database import close_db, init_db
from blogify.infrastructure.observability import setup_logging

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
    logger.info("Blogify API started")
    yield
    await close_db()
    logger.info("Blogify API shutting down")


app = FastAPI(
    title="Blogify API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    IdentityMiddleware, cookie_name=settings.session_cookie_name,
)
# Added last so it wraps the identity middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(posts.router)

register_error_handlers(app)
