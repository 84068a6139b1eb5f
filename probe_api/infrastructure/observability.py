"""Structured Logging — request-outcome log records for both deployment shapes.

Invariants:
    - Every record carries timestamp (record creation, UTC), level, logger,
      service and message
    - Request fields (method, path, status_code, error_code, request_id) and
      the bound port are surfaced only when the caller passed them via extra=
    - setup_logging owns at most one root handler; repeated calls swap it
    - keep_existing=True leaves a host-provided root handler (Lambda runtime)
      in place and only sets the level

Design Decisions:
    - stdlib logging formatters over a logging library: records are small and
      flat, and the Lambda runtime already ships its own root handler
    - "text" format renders the same fields as key=value pairs so local
      output and JSON output carry identical information
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "probe-api"

REQUEST_FIELDS = (
    "method", "path", "status_code", "error_code", "port", "request_id",
)

_installed_handler: logging.Handler | None = None


def _request_fields(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in REQUEST_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self, service: str = SERVICE_NAME):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
            **_request_fields(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line with request fields appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _request_fields(record)
        if not fields:
            return line
        pairs = " ".join(f"{key}={val}" for key, val in fields.items())
        head, sep, tail = line.partition("\n")
        return f"{head} {pairs}{sep}{tail}"


def build_formatter(fmt: str) -> logging.Formatter:
    return JSONFormatter() if fmt == "json" else KeyValueFormatter()


def _has_foreign_handlers() -> bool:
    return any(h is not _installed_handler for h in logging.root.handlers)


def setup_logging(
    level: str = "INFO", fmt: str = "json", keep_existing: bool = False,
) -> logging.Handler | None:
    """Configure the root logger. Returns the installed handler, if any."""
    global _installed_handler
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if keep_existing and _has_foreign_handlers():
        return None

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(fmt))
    if _installed_handler is not None:
        logging.root.removeHandler(_installed_handler)
    logging.root.addHandler(handler)
    _installed_handler = handler
    return handler
