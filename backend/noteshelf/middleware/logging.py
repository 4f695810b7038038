"""
NoteShelf Backend — Request Logging Middleware
================================================

What:  One access log line per HTTP request, with status and duration.
Who:   Applied to every request via Starlette middleware.
When:  After RequestIDMiddleware (uses request ID for correlation).

Log line:
    2024-01-15T12:00:00 [WARNING] noteshelf.access: PUT /api/notes/7/tags/3 409 4.2ms [a1b2c3d4] from 10.0.0.5

The same values are attached to the record as `extra` fields so a JSON
formatter can emit them as separate keys.

What we log vs what we DON'T log (privacy):
    Log: method, path, status, duration, IP, request ID
    Don't log: request bodies (note content is user data)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from noteshelf.middleware.request_id import request_id_var

logger = logging.getLogger("noteshelf.access")

# Probed every few seconds by orchestrators
_UNLOGGED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status code and duration of each request.

    Duration is measured from middleware entry to response return, so it
    covers validation, store round trips and serialization.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in _UNLOGGED_PATHS:
            return await call_next(request)

        # perf_counter: monotonic and higher resolution than time.time()
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        # request.client is None under ASGI test transports
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        status = response.status_code

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
