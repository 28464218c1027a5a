"""Request context middleware — stamps request time and logs one access line.

No business logic. Pure cross-cutting concern.

Invariants:
    - Exactly one access line per request, including requests whose handler
      raised; those are logged as 500 and the exception is re-raised
"""

import logging
import time
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Set request.state.request_time and log method, path, status, duration."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        request.state.request_time = datetime.now(timezone.utc).isoformat()
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log_access(request, 500, started)
            raise
        self._log_access(request, response.status_code, started)
        return response

    @staticmethod
    def _log_access(request: Request, status_code: int, started: float) -> None:
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            f"{request.method} {request.url.path} {status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": duration_ms,
            },
        )
