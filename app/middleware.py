# =============================================================================
# app/middleware.py - HTTP Middleware
# =============================================================================
# - AllowedOriginMiddleware: rejects browser requests from any origin other
#   than the configured frontend. Requests without an Origin header (curl,
#   Postman, same-origin) pass. Rejections are plain text, not JSON.
# - RequestLoggingMiddleware: one log line per request,
#   "GET /api/products 200 3.412 ms - 87"
#
# Starlette runs middleware in reverse order of registration; see
# app/main.py for the order they are added in.
# =============================================================================

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

CORS_REJECTION_MESSAGE = "Not allowed by CORS"


class AllowedOriginMiddleware(BaseHTTPMiddleware):
    """Allow a request only if it has no Origin or the single allowed one."""

    def __init__(self, app: ASGIApp, allowed_origin: str | None = None):
        super().__init__(app)
        self.allowed_origin = allowed_origin.rstrip("/") if allowed_origin else None

    def is_allowed(self, origin: str | None) -> bool:
        if origin is None:
            return True
        return self.allowed_origin is not None and origin.rstrip("/") == self.allowed_origin

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        origin = request.headers.get("origin")

        if not self.is_allowed(origin):
            logger.warning(f"Rejected {request.method} {request.url.path} from origin {origin}")
            return PlainTextResponse(CORS_REJECTION_MESSAGE, status_code=403)

        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status, elapsed time and response size."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            f"{request.method} {request.url.path} {response.status_code} "
            f"{elapsed_ms:.3f} ms - {response.headers.get('content-length', '-')}"
        )
        return response
