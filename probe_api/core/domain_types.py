"""Domain Types — request and response descriptors shared by both adapters.

Invariants:
    - Request.path is never empty (normalized to "/")
    - Response carries exactly one Content-Type header
    - Bodies are text; no streaming, no binary payloads

Design Decisions:
    - Frozen dataclasses over dicts: adapters translate at the edge, the core
      never sees framework or Lambda event shapes
"""

from dataclasses import dataclass, field
from enum import Enum


CONTENT_TYPE_HTML = "text/html; charset=utf-8"
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_TEXT = "text/plain; charset=utf-8"


class HttpMethod(str, Enum):
    """Methods the routing table knows about."""
    GET = "GET"


@dataclass(frozen=True)
class Request:
    """Normalized inbound request."""
    method: str
    path: str = "/"
    raw_query: str = ""

    @classmethod
    def normalize(cls, method: str | None, path: str | None, raw_query: str | None) -> "Request":
        return cls(
            method=(method or "").upper(),
            path=path or "/",
            raw_query=raw_query or "",
        )


@dataclass(frozen=True)
class Response:
    """Outbound response descriptor."""
    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def content_type(self) -> str:
        return self.headers.get("Content-Type", "")

    @classmethod
    def text(cls, status_code: int, body: str) -> "Response":
        return cls(status_code, body, {"Content-Type": CONTENT_TYPE_TEXT})

    @classmethod
    def json(cls, status_code: int, body: str) -> "Response":
        return cls(status_code, body, {"Content-Type": CONTENT_TYPE_JSON})

    @classmethod
    def html(cls, status_code: int, body: str) -> "Response":
        return cls(status_code, body, {"Content-Type": CONTENT_TYPE_HTML})
