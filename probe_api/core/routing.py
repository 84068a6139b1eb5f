"""Request Router — maps (method, path, raw query) to a response descriptor.

Invariants:
    - Exact, case-sensitive path match; unknown path → 404 for any method
    - Known path with a non-GET method → 405, for every route in the table
    - route() never raises for NOT_FOUND / METHOD_NOT_ALLOWED / ENCODING_ERROR;
      those are converted to plain-text responses at the boundary
    - APP_VERSION is read on every /feature-probe call (no caching)

Design Decisions:
    - Table of plain handler functions over a framework router: both adapters
      share this module unchanged
    - Clock and environment injectable via keyword arguments; defaults are
      the real UTC clock and os.environ
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from probe_api.assets import home_html
from probe_api.config import current_app_version
from probe_api.core.domain_types import HttpMethod, Request, Response
from probe_api.core.errors import (
    ErrorSeverity,
    MethodNotAllowedError,
    ProbeApiError,
    RouteNotFoundError,
)
from probe_api.core.query import query_value
from probe_api.schemas.payload import ApiPayload

logger = logging.getLogger(__name__)

DEFAULT_NAME = "world"
FEATURE_PROBE_NAME = "probe"
RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


@dataclass(frozen=True)
class RouteContext:
    """Everything a handler may read."""
    request: Request
    now: datetime
    environ: Mapping[str, str] | None = None


Handler = Callable[[RouteContext], Response]


def format_rfc3339(moment: datetime) -> str:
    """Second-precision UTC timestamp with a Z suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime(RFC3339_FORMAT)


# ─── Handlers ───────────────────────────────────────────────────

def _home(ctx: RouteContext) -> Response:
    return Response.html(200, home_html())


def _healthz(ctx: RouteContext) -> Response:
    payload = ApiPayload(status="ok", time=format_rfc3339(ctx.now))
    return Response.json(200, payload.to_json())


def _hello(ctx: RouteContext) -> Response:
    name = query_value(ctx.request.raw_query, "name", DEFAULT_NAME)
    payload = ApiPayload(message=f"hello, {name}")
    return Response.json(200, payload.to_json())


def _feature_probe(ctx: RouteContext) -> Response:
    payload = ApiPayload(
        status="ok",
        feature=FEATURE_PROBE_NAME,
        version=current_app_version(ctx.environ),
    )
    return Response.json(200, payload.to_json())


ROUTES: dict[str, tuple[HttpMethod, Handler]] = {
    "/": (HttpMethod.GET, _home),
    "/healthz": (HttpMethod.GET, _healthz),
    "/hello": (HttpMethod.GET, _hello),
    "/feature-probe": (HttpMethod.GET, _feature_probe),
}


# ─── Dispatch ───────────────────────────────────────────────────

def dispatch(ctx: RouteContext) -> Response:
    """Resolve and run the handler. Raises ProbeApiError on terminal outcomes."""
    request = ctx.request
    entry = ROUTES.get(request.path)
    if entry is None:
        raise RouteNotFoundError(request.path)
    allowed, handler = entry
    if request.method != allowed.value:
        raise MethodNotAllowedError(request.method, request.path)
    return handler(ctx)


def route(
    method: str,
    path: str,
    raw_query: str = "",
    *,
    now: datetime | None = None,
    environ: Mapping[str, str] | None = None,
) -> Response:
    """Route one request. Always returns a Response."""
    ctx = RouteContext(
        request=Request.normalize(method, path, raw_query),
        now=now or datetime.now(timezone.utc),
        environ=environ,
    )
    try:
        return dispatch(ctx)
    except ProbeApiError as exc:
        _log_error(exc, ctx.request)
        return exc.to_response()


def _log_error(exc: ProbeApiError, request: Request) -> None:
    logger.log(
        _LOG_LEVELS[exc.severity],
        f"{exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "method": request.method,
            "path": request.path,
            "status_code": exc.http_status,
        },
    )
