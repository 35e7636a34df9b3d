"""RFC 6238 time-based one-time passwords.

Generation raises :class:`TotpGenerationError` on any failure; verification
only ever answers ``True`` or ``False``.
"""

from __future__ import annotations

import hmac
import logging

from totp_engine import clock
from totp_engine.algorithms import HashAlgorithm
from totp_engine.base32 import decode_secret
from totp_engine.config import DEFAULT_CONFIG, TotpConfig
from totp_engine.errors import TotpError, TotpGenerationError, TotpInputError
from totp_engine.hmac_engine import compute_mac
from totp_engine.hotp import MAX_COUNTER, encode_counter, truncate
from totp_engine.provisioning import build_provisioning_uri

LOGGER = logging.getLogger(__name__)


def _resolve_config(config: TotpConfig | None) -> TotpConfig:
    return (config or DEFAULT_CONFIG).validate()


def _code_for_step(key: bytes, step: int, config: TotpConfig) -> str:
    mac = compute_mac(key, encode_counter(step), config.algorithm)
    return truncate(mac, config.digits)


def generate_code_at_step(
    secret: str,
    step: int,
    config: TotpConfig | None = None,
) -> str:
    """Code for an explicit time-step counter ``step``."""

    try:
        resolved = _resolve_config(config)
        key = decode_secret(secret)
        return _code_for_step(key, step, resolved)
    except TotpError as exc:
        raise TotpGenerationError(f"TOTP generation failed: {exc}", exc) from exc
    except Exception as exc:
        raise TotpGenerationError(
            f"TOTP generation failed: {type(exc).__name__}", exc
        ) from exc


def generate_code(
    secret: str,
    config: TotpConfig | None = None,
    at_time_millis: int | float | None = None,
) -> str:
    """Code for ``at_time_millis``, or for the current time when omitted."""

    if at_time_millis is None:
        at_time_millis = clock.now_millis()
    try:
        resolved = _resolve_config(config)
        step = clock.time_step(at_time_millis, resolved.period)
        key = decode_secret(secret)
        return _code_for_step(key, step, resolved)
    except TotpError as exc:
        raise TotpGenerationError(f"TOTP generation failed: {exc}", exc) from exc
    except Exception as exc:
        raise TotpGenerationError(
            f"TOTP generation failed: {type(exc).__name__}", exc
        ) from exc


def _to_millis(for_time: int | float) -> int | float:
    if isinstance(for_time, (int, float)) and not isinstance(for_time, bool):
        return for_time * 1000
    # let time_step reject it
    return for_time


def _is_candidate_shape(candidate: str, digits: int) -> bool:
    return len(candidate) == digits and candidate.isascii() and candidate.isdigit()


def verify_code(
    secret: str,
    candidate: str,
    config: TotpConfig | None = None,
    at_time_millis: int | float | None = None,
) -> bool:
    """Check ``candidate`` against every step in ``[-window, +window]``.

    Never raises: malformed input and internal failures both yield ``False``.
    """

    now = clock.now_millis() if at_time_millis is None else at_time_millis
    try:
        if not isinstance(secret, str) or not secret.strip():
            return False
        if not isinstance(candidate, str) or not candidate:
            return False
        resolved = _resolve_config(config)
        if not _is_candidate_shape(candidate, resolved.digits):
            return False

        current = clock.time_step(now, resolved.period)
        key = decode_secret(secret)
        # only steps inside the counter range [0, MAX_COUNTER]
        first = max(-resolved.window, -current)
        last = min(resolved.window, MAX_COUNTER - current)
        for offset in range(first, last + 1):
            step = current + offset
            expected = _code_for_step(key, step, resolved)
            if hmac.compare_digest(expected, candidate):
                return True
        return False
    except TotpInputError as exc:
        LOGGER.debug("totp_verify_rejected_input", extra={"error": type(exc).__name__})
        return False
    except Exception as exc:
        LOGGER.warning("totp_verify_failed", extra={"error": type(exc).__name__})
        return False


class TOTP:
    """Object facade over the module functions, shaped like ``pyotp.TOTP``.

    ``for_time`` arguments are in seconds since the epoch.
    """

    def __init__(
        self,
        secret: str,
        interval: int | float = 30,
        digits: int = 6,
        digest: HashAlgorithm | str = HashAlgorithm.SHA1,
        window: int = 1,
    ) -> None:
        self._secret = secret
        self.config = TotpConfig(
            algorithm=digest,
            period=interval,
            digits=digits,
            window=window,
        ).validate()

    def __repr__(self) -> str:
        return (
            f"TOTP(digest={self.config.hash_algorithm.value}, "
            f"interval={self.interval}, digits={self.digits})"
        )

    @property
    def interval(self) -> int | float:
        return self.config.period

    @property
    def digits(self) -> int:
        return self.config.digits

    def at_step(self, step: int) -> str:
        return generate_code_at_step(self._secret, step, self.config)

    def at(self, for_time: int | float) -> str:
        return generate_code(self._secret, self.config, _to_millis(for_time))

    def now(self) -> str:
        return generate_code(self._secret, self.config)

    def verify(
        self,
        code: str,
        for_time: int | float | None = None,
        valid_window: int | None = None,
    ) -> bool:
        config = self.config
        if valid_window is not None:
            try:
                config = config.with_overrides(window=valid_window)
            except TotpInputError:
                return False
        at_time_millis = None if for_time is None else _to_millis(for_time)
        return verify_code(self._secret, code, config, at_time_millis)

    def provisioning_uri(self, name: str, issuer_name: str | None = None) -> str:
        return build_provisioning_uri(
            self._secret, account=name, issuer=issuer_name, config=self.config
        )


__all__ = ["TOTP", "generate_code", "generate_code_at_step", "verify_code"]
