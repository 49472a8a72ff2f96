# catalog/middleware/logging.py
"""
Per-request logging with a request id bound to every log line.
"""

import time
import uuid

import structlog
from fastapi import Request

from catalog.core.logging import get_logger

REQUEST_ID_HEADER = "X-Request-Id"

logger = get_logger(__name__)


def _route_template(request: Request) -> str:
    # "/v1/courses/{course_id}/videos" rather than the concrete path
    route = request.scope.get("route")
    return getattr(route, "path_format", None) or request.url.path


async def logging_middleware(request: Request, call_next):
    """Bind ``request_id`` for the duration of the request and log its outcome."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=request.method)

    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("request failed", path=request.url.path)
        raise

    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    log = logger.warning if response.status_code >= 500 else logger.info
    log(
        "request completed",
        route=_route_template(request),
        path=request.url.path,
        query=request.url.query or None,
        status_code=response.status_code,
        duration_ms=duration_ms,
    )

    response.headers[REQUEST_ID_HEADER] = request_id
    return response
