from typing import Any

from fastapi import APIRouter

from backend.core.logging_config import get_logger, log_event
from backend.services.secret_provider import SecretNotConfiguredError
from backend.services.totp_service import totp_service
from backend.utils.config import Config

# No necesitamos poner prefix aquí, ya lo maneja main.py
router = APIRouter(tags=["health"])
logger = get_logger(service="health_router")


def _check_secret() -> dict[str, Any]:
    try:
        totp_service.provisioning_uri()
    except SecretNotConfiguredError:
        log_event(
            logger,
            service="health_router",
            event="totp_secret_missing",
            level="warning",
        )
        return {"status": "error", "detail": "secret_not_configured"}
    except ValueError as exc:
        log_event(
            logger,
            service="health_router",
            event="totp_secret_invalid",
            level="error",
            error=type(exc).__name__,
        )
        return {"status": "error", "detail": "secret_invalid"}
    return {"status": "ok"}


@router.get("")
async def health() -> dict[str, Any]:
    secret_check = _check_secret()
    overall = "ok" if secret_check["status"] == "ok" else "degraded"
    return {
        "status": overall,
        "env": Config.APP_ENV,
        "totp": totp_service.describe(),
        "checks": {"secret": secret_check},
    }
