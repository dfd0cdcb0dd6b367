"""
Bookmarks Service: Request Logging Middleware
================================================

What:  One access log line per HTTP request.
How:   Times the downstream call and logs method, path, status, duration,
       request ID and client IP on the `bookmarks.access` logger.
When:  Inside RequestIDMiddleware (so the ID is set) and outside the auth
       gate (so rejected 401s are logged too).

Log level follows the status class: 5xx ERROR, 4xx WARNING, else INFO.
An exception escaping the app is logged as a 500 and re-raised.
Request bodies and the Authorization header are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("bookmarks.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration for each request."""

    # Probes would drown out real traffic
    SILENT_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SILENT_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            self._log_access(request, 500, start_time)
            raise

        self._log_access(request, response.status_code, start_time)
        return response

    @staticmethod
    def _log_access(request: Request, status: int, start_time: float) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
