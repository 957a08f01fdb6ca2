"""Request logging middleware for the PIX HTTP surface."""
from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .monitoring import observe_request

logger = logging.getLogger("pixqr.http")


def route_path(request: Request) -> str:
    route = request.scope.get("route")
    return route.path if route else request.url.path


def _request_fields(request: Request, start: float) -> dict[str, Any]:
    return {
        "method": request.method,
        "path": route_path(request),
        "client": request.client.host if request.client else None,
        "duration_ms": round((time.perf_counter() - start) * 1000, 2),
    }


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, route, latency and status of every request."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:  # type: ignore[override]
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            fields = _request_fields(request, start)
            logger.exception("request failed", extra=fields)
            observe_request(request.method, fields["path"], 500, fields["duration_ms"])
            raise

        fields = _request_fields(request, start)
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(level, "request completed", extra={**fields, "status_code": response.status_code})
        observe_request(request.method, fields["path"], response.status_code, fields["duration_ms"])
        return response
