"""Accesos rápidos a los servicios del backend."""

from __future__ import annotations

from backend.services.secret_provider import (
    DEMO_SECRET,
    SecretNotConfiguredError,
    SecretProvider,
)
from backend.services.totp_service import TotpService, totp_service

__all__ = [
    "DEMO_SECRET",
    "SecretNotConfiguredError",
    "SecretProvider",
    "TotpService",
    "totp_service",
]
