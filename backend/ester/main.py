"""Ester API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EsterError -> structured JSON responses
    - CORS configured from settings and exposes the alert/pagination headers
    - Database initialized on startup and disposed on shutdown via the lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ester.api.error_handlers import register_error_handlers
from ester.api.routes import health, libraries
from ester.config import get_settings
from ester.core.header_util import exposed_header_names
from ester.infrastructure.database import close_db, init_db
from ester.infrastructure.observability import setup_logging

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
    logger.info("Ester API started")
    yield
    await close_db()
    logger.info("Ester API shutting down")


app = FastAPI(title="Ester API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=exposed_header_names(settings.application_name),
)

app.include_router(health.router)
app.include_router(libraries.router)

register_error_handlers(app)
