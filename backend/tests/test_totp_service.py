from __future__ import annotations

import pytest
from prometheus_client import REGISTRY
from pydantic import SecretStr

from backend.core import logging_config
from backend.services import secret_provider as secret_provider_module
from backend.services.secret_provider import (
    DEMO_SECRET,
    SecretNotConfiguredError,
    SecretProvider,
)
from backend.services.totp_service import TotpService
from totp_engine import TotpConfig, TotpGenerationError, generate_code

SECRET = "JBSWY3DPEHPK3PXP"
NOW_MS = 1_672_531_200_000


def _counter_value(name: str, **labels: str) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_secret_provider_prefers_configured_secret() -> None:
    provider = SecretProvider(SecretStr("GEZDGNBVGY3TQOJQ"), allow_demo_secret=True)
    assert provider.get_secret() == "GEZDGNBVGY3TQOJQ"
    assert provider.using_demo_secret is False


def test_secret_provider_without_secret_raises() -> None:
    provider = SecretProvider(None)
    with pytest.raises(SecretNotConfiguredError):
        provider.get_secret()


def test_secret_provider_treats_blank_secret_as_missing() -> None:
    with pytest.raises(SecretNotConfiguredError):
        SecretProvider("   ").get_secret()


def test_demo_secret_requires_opt_in_and_warns_once(monkeypatch: pytest.MonkeyPatch) -> None:
    events: list[dict] = []

    def fake_log_event(logger, service, event, level="warning", **extra):
        events.append({"service": service, "event": event, "level": level, **extra})

    monkeypatch.setattr(secret_provider_module, "log_event", fake_log_event)
    provider = SecretProvider(None, allow_demo_secret=True)

    assert provider.using_demo_secret is True
    assert provider.get_secret() == DEMO_SECRET
    assert provider.get_secret() == DEMO_SECRET
    assert [item["event"] for item in events] == ["totp_demo_secret_in_use"]


def test_service_generate_and_verify_round_trip() -> None:
    service = TotpService(SecretProvider(SECRET))
    code = service.generate(at_time_millis=NOW_MS)

    assert code == generate_code(SECRET, at_time_millis=NOW_MS)
    assert service.verify(code, at_time_millis=NOW_MS + 30_000) is True
    assert service.verify(code, at_time_millis=NOW_MS + 60_000) is False


def test_service_records_metrics() -> None:
    service = TotpService(SecretProvider(SECRET), TotpConfig(algorithm="SHA512"))
    generated_before = _counter_value("totp_generations_total", algorithm="SHA512", outcome="success")
    invalid_before = _counter_value("totp_verifications_total", outcome="invalid")

    service.generate(at_time_millis=NOW_MS)
    service.verify("12345", at_time_millis=NOW_MS)

    assert _counter_value("totp_generations_total", algorithm="SHA512", outcome="success") == (
        generated_before + 1
    )
    assert _counter_value("totp_verifications_total", outcome="invalid") == invalid_before + 1


def test_service_generation_failure_is_counted_and_reraised() -> None:
    service = TotpService(SecretProvider("not base32!"))
    errors_before = _counter_value("totp_generations_total", algorithm="SHA1", outcome="error")

    with pytest.raises(TotpGenerationError) as excinfo:
        service.generate(at_time_millis=NOW_MS)

    assert excinfo.value.is_input_error
    assert _counter_value("totp_generations_total", algorithm="SHA1", outcome="error") == (
        errors_before + 1
    )


def test_service_describe_has_no_secret() -> None:
    service = TotpService(SecretProvider(SECRET), issuer="Acme", account="ops")
    description = service.describe()

    assert description == {
        "algorithm": "SHA1",
        "period": 30,
        "digits": 6,
        "window": 1,
        "issuer": "Acme",
        "demo_secret": False,
    }
    assert SECRET not in repr(description)
    assert service.provisioning_uri().startswith("otpauth://totp/Acme:ops?secret=")


def test_redact_sensitive_masks_secrets_and_codes() -> None:
    event = logging_config.redact_sensitive(
        None,
        "info",
        {"event": {"event": "x", "secret": SECRET}, "code": "123456", "outcome": "valid"},
    )

    assert event["code"] == logging_config.REDACTED
    assert event["event"]["secret"] == logging_config.REDACTED
    assert event["outcome"] == "valid"
