"""
Observability middleware and logging setup.

Every request gets a correlation ID (taken from ``X-Correlation-ID`` or
generated) and produces one access log line with its duration.
"""

import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("parcel_backend.access")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

CORRELATION_HEADER = "X-Correlation-ID"


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once at startup."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Tags responses with the correlation ID and processing time in ms."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
        started = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers["X-Process-Time"] = f"{elapsed_ms:.2f}"

        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms client=%s [%s]",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request.client.host if request.client else "unknown",
            correlation_id,
        )
        return response
