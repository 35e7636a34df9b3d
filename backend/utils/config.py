import logging
import os
from pathlib import Path

from dotenv import dotenv_values, load_dotenv
from pydantic import SecretStr

from totp_engine import TotpConfig, TotpError

_ORIGINAL_ENV = dict(os.environ)
_BACKEND_DIR = Path(__file__).resolve().parents[1]
LOGGER = logging.getLogger(__name__)


def _load_backend_env_files() -> None:
    """Apply backend env files: process env > .env.local > .env."""

    # QA: no cargar .env.example en runtime; los ejemplos son solo documentación
    base_env = _BACKEND_DIR / ".env"
    if base_env.exists():
        load_dotenv(base_env, override=False)

    local_override = _BACKEND_DIR / ".env.local"
    if local_override.exists():
        local_values = dotenv_values(local_override)
        for key, value in local_values.items():
            if value is None:
                continue
            if key in _ORIGINAL_ENV:
                continue
            os.environ[key] = value


_load_backend_env_files()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name, default)
    if isinstance(value, str):
        value = value.strip() or None
    return value


def _get_int_env(name: str, default: int) -> int:
    raw_value = _get_env(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        LOGGER.warning("invalid_int_env", extra={"env_name": name, "value": raw_value})
        return default


def _env_bool(key: str, default: bool = False) -> bool:
    raw_value = _get_env(key)
    if raw_value is None:
        return default
    return raw_value.lower() in {"1", "true", "yes", "on"}


def _get_secret_env(name: str) -> SecretStr | None:
    value = _get_env(name)
    return SecretStr(value) if value is not None else None


_SUPPORTED_ENVIRONMENTS = {"local", "staging", "production"}

APP_ENV = (_get_env("APP_ENV", "local") or "local").lower()
if APP_ENV not in _SUPPORTED_ENVIRONMENTS:
    LOGGER.warning("unknown_app_env", extra={"app_env": APP_ENV})
    APP_ENV = "local"


class Config:
    APP_ENV = APP_ENV
    TOTP_SECRET = _get_secret_env("TOTP_SECRET")
    TOTP_ALLOW_DEMO_SECRET = _env_bool("TOTP_ALLOW_DEMO_SECRET", False)
    TOTP_ALGORITHM = _get_env("TOTP_ALGORITHM") or "SHA1"
    TOTP_PERIOD = _get_int_env("TOTP_PERIOD", 30)
    TOTP_DIGITS = _get_int_env("TOTP_DIGITS", 6)
    TOTP_WINDOW = _get_int_env("TOTP_WINDOW", 1)
    TOTP_ISSUER = _get_env("TOTP_ISSUER") or "TOTP-Service"
    TOTP_ACCOUNT = _get_env("TOTP_ACCOUNT") or "User"

    @classmethod
    def totp_config(cls) -> TotpConfig:
        """Validated engine config built from the ``TOTP_*`` variables."""

        config = TotpConfig(
            algorithm=cls.TOTP_ALGORITHM,
            period=cls.TOTP_PERIOD,
            digits=cls.TOTP_DIGITS,
            window=cls.TOTP_WINDOW,
        )
        try:
            return config.validate()
        except TotpError:
            LOGGER.error(
                "invalid_totp_config",
                extra={
                    "algorithm": cls.TOTP_ALGORITHM,
                    "period": cls.TOTP_PERIOD,
                    "digits": cls.TOTP_DIGITS,
                    "window": cls.TOTP_WINDOW,
                },
            )
            raise
