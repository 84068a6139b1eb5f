"""Dispatch Route — hands every request to the core router.

Invariants:
    - Every method reaches route(); FastAPI never answers 405 on its own
    - Path and query taken from the undecoded request target (raw_path,
      query_string), the same bytes the function-URL adapter sees as rawPath
    - Status, headers and body copied verbatim from the core Response

Design Decisions:
    - ASGI class endpoint with methods=None over api_route: api_route needs an
      explicit method list, and function endpoints default to GET only
"""

from fastapi import FastAPI, Request
from fastapi.responses import Response as HTTPResponse

from probe_api.core.domain_types import Response
from probe_api.core.routing import route

CATCH_ALL_PATH = "/{full_path:path}"


def request_target(request: Request) -> tuple[str, str]:
    """Raw (path, query) as sent by the client, before percent-decoding."""
    raw_path = request.scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else request.scope["path"]
    query = request.scope.get("query_string", b"").decode("latin-1")
    return path, query


def to_http_response(response: Response) -> HTTPResponse:
    return HTTPResponse(
        content=response.body,
        status_code=response.status_code,
        headers=dict(response.headers),
    )


def dispatch_request(request: Request) -> HTTPResponse:
    """The routing table lives in core.routing."""
    path, raw_query = request_target(request)
    return to_http_response(route(request.method, path, raw_query))


class DispatchEndpoint:
    """ASGI catch-all. Starlette only skips method filtering for ASGI endpoints."""

    async def __call__(self, scope, receive, send) -> None:
        response = dispatch_request(Request(scope, receive))
        await response(scope, receive, send)


def register_dispatch_route(app: FastAPI) -> None:
    """Mount the catch-all for every method."""
    app.add_route(
        CATCH_ALL_PATH, DispatchEndpoint(),
        methods=None, name="dispatch", include_in_schema=False,
    )
