"""Function URL Adapter — AWS Lambda handler for function-URL (payload v2.0) events.

Invariants:
    - Empty rawPath → "/"; method upper-cased; missing keys treated as empty
    - Response mirrors core.routing.route() exactly (status, headers, body)
    - Unexpected exceptions → 500 "internal error", never a Lambda invocation error

Design Decisions:
    - Plain dict in, plain dict out: no Lambda SDK needed at runtime
    - Logging configured once per cold start, not per invocation; only
      LOG_LEVEL/LOG_FORMAT are read since this variant binds no port
"""

import logging
import os
from typing import Any

from probe_api.config import LoggingSettings
from probe_api.core.domain_types import Response
from probe_api.core.errors import INTERNAL_ERROR_BODY
from probe_api.core.routing import route
from probe_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def configure_logging(environ=None) -> logging.Handler | None:
    """Cold-start logging. Inside Lambda, the runtime's root handler is kept."""
    env = os.environ if environ is None else environ
    settings = LoggingSettings()
    return setup_logging(
        settings.log_level,
        settings.log_format,
        keep_existing=bool(env.get("AWS_LAMBDA_FUNCTION_NAME")),
    )


configure_logging()


def _extract(event: dict[str, Any]) -> tuple[str, str, str]:
    http = (event.get("requestContext") or {}).get("http") or {}
    return (
        (http.get("method") or "").upper(),
        event.get("rawPath") or "/",
        event.get("rawQueryString") or "",
    )


def to_function_url_response(response: Response) -> dict[str, Any]:
    return {
        "statusCode": response.status_code,
        "headers": dict(response.headers),
        "body": response.body,
        "isBase64Encoded": False,
    }


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Lambda entry point."""
    method, path, raw_query = _extract(event or {})
    request_id = getattr(context, "aws_request_id", None)
    try:
        response = route(method, path, raw_query)
    except Exception:
        logger.error(
            f"Unhandled exception on {path}",
            exc_info=True,
            extra={"method": method, "path": path, "request_id": request_id},
        )
        response = Response.text(500, INTERNAL_ERROR_BODY)
    return to_function_url_response(response)
