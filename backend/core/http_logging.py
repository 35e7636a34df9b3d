from __future__ import annotations

import re
import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from backend.core.logging_config import get_logger

logger = get_logger(component="http")

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def _request_id_for(request: Request) -> str:
    incoming = request.headers.get(REQUEST_ID_HEADER)
    if incoming and _REQUEST_ID_PATTERN.match(incoming):
        return incoming
    return str(uuid4())


class RequestLogMiddleware(BaseHTTPMiddleware):
    """One ``http_request`` event per request; bodies are never logged."""

    async def dispatch(self, request: Request, call_next):
        request_id = _request_id_for(request)
        start = time.perf_counter()
        bound = logger.bind(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        try:
            response: Response = await call_next(request)
        except Exception as exc:  # pragma: no cover - defensive logging
            duration_ms = (time.perf_counter() - start) * 1000
            bound.exception(
                "http_request_error",
                duration_ms=round(duration_ms, 2),
                error=type(exc).__name__,
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        bound.info(
            "http_request",
            status=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        return response
