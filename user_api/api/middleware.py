# File: user_api/api/middleware.py

"""Request logging middleware.

- Reuses an incoming X-Request-ID header or generates one, and echoes it back
- Logs method, path, status and duration
- Never logs request/response bodies or the Authorization header
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("user_api.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        start = time.monotonic()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = int((time.monotonic() - start) * 1000)
            logger.exception(
                "%s %s failed after %dms (request_id=%s)",
                request.method,
                request.url.path,
                duration_ms,
                request_id,
            )
            raise

        duration_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "%s %s -> %s in %dms (request_id=%s)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
        )
        response.headers["X-Request-ID"] = request_id
        return response
