"""Error Hierarchy — typed, categorized exceptions for every terminal request outcome.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error knows its HTTP status and plain-text body
    - to_response() produces the wire response; no internal details leak into it
    - None of these errors are retried

Design Decisions:
    - Single hierarchy with ProbeApiError base: router boundary and FastAPI
      handler catch one type (ADR: uniform error shape)
    - Plain-text bodies, not JSON envelopes: clients match on the exact strings
"""

from enum import Enum

from probe_api.core.domain_types import Response

INTERNAL_ERROR_BODY = "internal error"


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    RESOURCE_NOT_FOUND = "resource_not_found"
    METHOD = "method"
    ENCODING = "encoding"


class ProbeApiError(Exception):
    """Base exception for all request-terminating errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        body: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.body = body if body is not None else message

    def to_response(self) -> Response:
        """Convert to the plain-text wire response."""
        return Response.text(self.http_status, self.body)


# ─── Client Errors (400-level) ──────────────────────────────────

class RouteNotFoundError(ProbeApiError):
    """No route matches the request path."""
    def __init__(self, path: str):
        super().__init__(
            f"no route for path {path!r}", "NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, 404,
            body="not found",
        )
        self.path = path


class MethodNotAllowedError(ProbeApiError):
    """Known path, wrong method."""
    def __init__(self, method: str, path: str):
        super().__init__(
            f"method {method} not allowed on {path}", "METHOD_NOT_ALLOWED",
            ErrorCategory.METHOD, ErrorSeverity.WARNING, 405,
            body="method not allowed",
        )
        self.method = method
        self.path = path


# ─── Server Errors (500-level) ──────────────────────────────────

class PayloadEncodingError(ProbeApiError):
    """Response payload could not be serialized."""
    def __init__(self, message: str):
        super().__init__(
            f"payload encoding failed: {message}", "ENCODING_ERROR",
            ErrorCategory.ENCODING, ErrorSeverity.CRITICAL, 500,
            body="encoding error",
        )
