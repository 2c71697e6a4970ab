"""
Request logging middleware with structured JSON output.

One log line per request: method, path, status, duration and response
size. Request bodies are never logged since submitted values may be
personal data. An incoming X-Request-ID is reused, otherwise one is
generated; either way it is echoed on the response.
"""
import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger("concord.api")

QUIET_PATHS = frozenset({"/health", "/"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log all API requests with timing and tracing."""

    SLOW_THRESHOLD_MS = 5000
    REQUEST_ID_HEADER = "X-Request-ID"

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(self.REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        started = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        except Exception:
            logger.error("request_failed", duration_ms=_elapsed_ms(started), status=500)
            raise

        response.headers[self.REQUEST_ID_HEADER] = request_id
        duration_ms = _elapsed_ms(started)
        fields = {
            "status": response.status_code,
            "duration_ms": duration_ms,
            "bytes": response.headers.get("content-length"),
        }

        if response.status_code >= 500:
            logger.error("request_completed", **fields)
        elif duration_ms > self.SLOW_THRESHOLD_MS:
            logger.warning("slow_request", **fields)
        elif response.status_code >= 400:
            logger.warning("request_completed", **fields)
        elif request.url.path in QUIET_PATHS:
            logger.debug("request_completed", **fields)
        else:
            logger.info("request_completed", **fields)

        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)
