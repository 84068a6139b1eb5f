"""Error Handlers — global exception handlers for the server adapter.

Invariants:
    - ProbeApiError → its own plain-text response (same body as route())
    - Exception (catch-all) → 500 plain text, never leaks internal details

Design Decisions:
    - Two-layer handler: domain (ProbeApiError) and catch-all (Exception);
      no validation layer since the catch-all route takes no typed parameters
    - route() converts its own ProbeApiErrors, so the domain handler only sees
      errors raised by adapter-level code outside the router
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse

from probe_api.core.errors import INTERNAL_ERROR_BODY, ProbeApiError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    @app.exception_handler(ProbeApiError)
    async def probe_api_error_handler(request: Request, exc: ProbeApiError):
        """Handle request-terminating errors raised outside the router."""
        logger.error(
            f"ProbeApiError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return PlainTextResponse(exc.body, status_code=exc.http_status)


def _register_generic_error_handler(app: FastAPI) -> None:
    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all. Never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return PlainTextResponse(
            INTERNAL_ERROR_BODY,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
