"""Probe API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Every path goes through core.routing via the catch-all route
    - Global error handlers map ProbeApiError → plain-text responses
    - Logging configured on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - docs/openapi routes disabled: they would shadow paths the router must 404
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from probe_api.api.error_handlers import register_error_handlers
from probe_api.api.routes.dispatch import register_dispatch_route
from probe_api.config import get_settings
from probe_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Probe API started")
    yield
    logger.info("Probe API shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Probe API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    register_dispatch_route(app)
    register_error_handlers(app)
    return app


app = create_app()
