from __future__ import annotations

import logging
from time import perf_counter

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestTimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        started = perf_counter()
        response = await call_next(request)
        elapsed_ms = int((perf_counter() - started) * 1000)
        response.headers.setdefault("X-Process-Time-Ms", str(elapsed_ms))
        logger.info(
            "Request handled | method=%s path=%s status=%s duration_ms=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    # Generation payloads carry the whole department; cap them before parsing.
    def __init__(self, app, *, max_bytes: int) -> None:
        super().__init__(app)
        self._max_bytes = max(1, max_bytes)

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.scope.get("type") != "http":
            return await call_next(request)

        raw_length = request.headers.get("content-length")
        if not raw_length:
            return await call_next(request)
        try:
            declared = int(raw_length)
        except ValueError:
            declared = 0
        if declared > self._max_bytes:
            logger.warning(
                "Rejected oversized request | path=%s bytes=%s limit=%s",
                request.url.path,
                declared,
                self._max_bytes,
            )
            return JSONResponse(
                status_code=413,
                content={
                    "message": "Request body too large",
                    "details": {"bytes": declared, "limit": self._max_bytes},
                },
            )
        return await call_next(request)
