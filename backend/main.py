from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.core.http_logging import RequestLogMiddleware
from backend.core.logging_config import get_logger, log_event
from backend.core.metrics import MetricsMiddleware, metrics_router
from backend.middleware.error_handler import register_error_handlers
from backend.routers import health, totp
from backend.services.totp_service import totp_service
from backend.utils.config import Config

logger = get_logger(service="backend")


# ========================
# Lifespan (startup/shutdown)
# ========================
@asynccontextmanager
async def lifespan(app: FastAPI):
    # 🔹 Startup
    log_event(
        logger,
        service="backend",
        event="backend_started",
        level="info",
        app_env=Config.APP_ENV,
        **totp_service.describe(),
    )
    yield
    # 🔹 Shutdown
    logger.info("backend_stopped")


app = FastAPI(title="TOTP Service", lifespan=lifespan)

app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestLogMiddleware)
register_error_handlers(app)

app.include_router(metrics_router)
app.include_router(health.router, prefix="/api/health", tags=["health"])
app.include_router(totp.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.main:app", host="0.0.0.0", port=8000)
