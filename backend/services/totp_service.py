from __future__ import annotations

from typing import Any

from backend.core.logging_config import get_logger, log_event
from backend.core.metrics import TOTP_GENERATIONS_TOTAL, TOTP_VERIFICATIONS_TOTAL
from backend.services.secret_provider import SecretProvider
from backend.utils.config import Config
from totp_engine import (
    TotpConfig,
    TotpGenerationError,
    build_provisioning_uri,
    generate_code,
    verify_code,
)

logger = get_logger(service="totp_service")


class TotpService:
    """Binds the engine to the configured secret, parameters and telemetry."""

    def __init__(
        self,
        secret_provider: SecretProvider,
        config: TotpConfig | None = None,
        *,
        issuer: str = "TOTP-Service",
        account: str = "User",
    ) -> None:
        self._secret_provider = secret_provider
        self._config = (config or TotpConfig()).validate()
        self.issuer = issuer
        self.account = account

    @classmethod
    def from_config(cls) -> TotpService:
        return cls(
            SecretProvider.from_config(),
            Config.totp_config(),
            issuer=Config.TOTP_ISSUER,
            account=Config.TOTP_ACCOUNT,
        )

    @property
    def config(self) -> TotpConfig:
        return self._config

    @property
    def algorithm_name(self) -> str:
        return self._config.hash_algorithm.uri_name

    def generate(self, at_time_millis: int | float | None = None) -> str:
        secret = self._secret_provider.get_secret()
        try:
            code = generate_code(secret, self._config, at_time_millis)
        except TotpGenerationError as exc:
            TOTP_GENERATIONS_TOTAL.labels(
                algorithm=self.algorithm_name, outcome="error"
            ).inc()
            log_event(
                logger,
                service="totp_service",
                event="totp_generation_failed",
                level="error",
                error=type(exc.cause).__name__ if exc.cause else type(exc).__name__,
                input_error=exc.is_input_error,
            )
            raise
        TOTP_GENERATIONS_TOTAL.labels(
            algorithm=self.algorithm_name, outcome="success"
        ).inc()
        return code

    def verify(self, candidate: str, at_time_millis: int | float | None = None) -> bool:
        secret = self._secret_provider.get_secret()
        is_valid = verify_code(secret, candidate, self._config, at_time_millis)
        outcome = "valid" if is_valid else "invalid"
        TOTP_VERIFICATIONS_TOTAL.labels(outcome=outcome).inc()
        logger.info("totp_verification", outcome=outcome)
        return is_valid

    def provisioning_uri(self) -> str:
        secret = self._secret_provider.get_secret()
        return build_provisioning_uri(
            secret,
            account=self.account,
            issuer=self.issuer,
            config=self._config,
        )

    def describe(self) -> dict[str, Any]:
        """Non-secret view of the active configuration."""

        return {
            "algorithm": self.algorithm_name,
            "period": self._config.period,
            "digits": self._config.digits,
            "window": self._config.window,
            "issuer": self.issuer,
            "demo_secret": self._secret_provider.using_demo_secret,
        }


totp_service = TotpService.from_config()

__all__ = ["TotpService", "totp_service"]
