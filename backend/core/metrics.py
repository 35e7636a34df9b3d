from __future__ import annotations

import time

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_COUNT = Counter(
    "totp_service_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
REQUEST_LATENCY = Histogram(
    "totp_service_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "path"],
)

TOTP_GENERATIONS_TOTAL = Counter(
    "totp_generations_total",
    "TOTP codes generated, grouped by algorithm and outcome.",
    ["algorithm", "outcome"],
)
TOTP_VERIFICATIONS_TOTAL = Counter(
    "totp_verifications_total",
    "TOTP verification attempts grouped by outcome.",
    ["outcome"],
)


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        method = request.method
        path = request.url.path

        try:
            response: Response = await call_next(request)
        except Exception:
            duration = time.perf_counter() - start
            REQUEST_LATENCY.labels(method=method, path=path).observe(duration)
            REQUEST_COUNT.labels(method=method, path=path, status="500").inc()
            raise

        duration = time.perf_counter() - start
        REQUEST_LATENCY.labels(method=method, path=path).observe(duration)
        REQUEST_COUNT.labels(
            method=method, path=path, status=str(response.status_code)
        ).inc()
        return response


metrics_router = APIRouter()


@metrics_router.get("/metrics", include_in_schema=False)
async def metrics_endpoint() -> PlainTextResponse:
    payload = generate_latest()
    return PlainTextResponse(payload.decode("utf-8"), media_type=CONTENT_TYPE_LATEST)
