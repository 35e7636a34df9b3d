#!/usr/bin/env python
# QA: TOTP env validator – prints report; exit 1 on critical missing

"""TOTP env validator – prints report; exits 1 on critical missing."""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Mapping

from totp_engine import TotpConfig, TotpError, decode_secret

_TRUTHY = {"1", "true", "yes", "on"}


def _value(env: Mapping[str, str], key: str) -> str | None:
    raw = env.get(key)
    if raw is None:
        return None
    return raw.strip() or None


def _int_value(env: Mapping[str, str], key: str, default: int) -> int | str:
    raw = _value(env, key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return raw


def build_report(env: Mapping[str, str]) -> dict[str, list[str]]:
    errors: list[str] = []
    warns: list[str] = []

    app_env = (_value(env, "APP_ENV") or "local").lower()
    allow_demo = (_value(env, "TOTP_ALLOW_DEMO_SECRET") or "").lower() in _TRUTHY
    secret = _value(env, "TOTP_SECRET")

    if secret is None:
        if allow_demo:
            message = "TOTP_SECRET (demo secret in use)"
            (errors if app_env == "production" else warns).append(message)
        else:
            errors.append("TOTP_SECRET")
    else:
        try:
            key = decode_secret(secret)
        except TotpError:
            errors.append("TOTP_SECRET (not valid base32)")
        else:
            # RFC 4226 section 4: 128 bits minimum, 160 recommended
            if len(key) < 16:
                warns.append("TOTP_SECRET (shorter than 128 bits)")

    config = TotpConfig(
        algorithm=_value(env, "TOTP_ALGORITHM") or "SHA1",
        period=_int_value(env, "TOTP_PERIOD", 30),
        digits=_int_value(env, "TOTP_DIGITS", 6),
        window=_int_value(env, "TOTP_WINDOW", 1),
    )
    try:
        config.validate()
    except TotpError as exc:
        errors.append(f"TOTP config ({type(exc).__name__}: {exc})")

    for key in ("TOTP_ISSUER", "TOTP_ACCOUNT"):
        if _value(env, key) is None:
            warns.append(key)

    return {"errors": errors, "warnings": warns}


def main() -> int:
    report = build_report(os.environ)
    print(json.dumps(report, ensure_ascii=False))
    return 1 if report["errors"] else 0


if __name__ == "__main__":
    sys.exit(main())
