"""Where the service gets its shared TOTP secret from.

The engine never falls back to a built-in secret. The demo secret is only
handed out when the deployment opts in explicitly.
"""

from __future__ import annotations

from pydantic import SecretStr

from backend.core.logging_config import get_logger, log_event
from backend.utils.config import Config

# Well-known RFC 4648 example secret. Development and tests only.
DEMO_SECRET = "JBSWY3DPEHPK3PXP"

logger = get_logger(service="secret_provider")


class SecretNotConfiguredError(Exception):
    """Raised when no TOTP secret is configured and the demo secret is not allowed."""


class SecretProvider:
    def __init__(
        self,
        secret: SecretStr | str | None = None,
        *,
        allow_demo_secret: bool = False,
    ) -> None:
        if isinstance(secret, str):
            secret = SecretStr(secret) if secret.strip() else None
        self._secret = secret
        self._allow_demo_secret = allow_demo_secret
        self._demo_warning_logged = False

    @classmethod
    def from_config(cls) -> SecretProvider:
        return cls(
            Config.TOTP_SECRET,
            allow_demo_secret=Config.TOTP_ALLOW_DEMO_SECRET,
        )

    @property
    def using_demo_secret(self) -> bool:
        return self._secret is None and self._allow_demo_secret

    def get_secret(self) -> str:
        if self._secret is not None:
            return self._secret.get_secret_value()
        if self._allow_demo_secret:
            if not self._demo_warning_logged:
                log_event(
                    logger,
                    service="secret_provider",
                    event="totp_demo_secret_in_use",
                    level="warning",
                    app_env=Config.APP_ENV,
                )
                self._demo_warning_logged = True
            return DEMO_SECRET
        raise SecretNotConfiguredError("Secret not configured")


__all__ = ["DEMO_SECRET", "SecretNotConfiguredError", "SecretProvider"]
