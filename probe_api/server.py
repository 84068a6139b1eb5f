"""Long-running server — binds PORT (default 8080) and serves the FastAPI app."""

import logging

import uvicorn

from probe_api.config import get_settings
from probe_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def serve() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        f"probe-api is listening on :{settings.port}",
        extra={"port": settings.port},
    )
    uvicorn.run(
        "probe_api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
        timeout_keep_alive=5,
    )
