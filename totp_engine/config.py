from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any

from totp_engine.algorithms import HashAlgorithm
from totp_engine.errors import InvalidPeriodError, InvalidWindowError
from totp_engine.hotp import validate_digits

DEFAULT_PERIOD = 30
DEFAULT_DIGITS = 6
DEFAULT_WINDOW = 1


@dataclass(frozen=True)
class TotpConfig:
    """Per-call TOTP parameters. RFC 6238 defaults: HMAC-SHA1, 30 s, 6 digits."""

    algorithm: HashAlgorithm | str = HashAlgorithm.SHA1
    period: int | float = DEFAULT_PERIOD
    digits: int = DEFAULT_DIGITS
    window: int = DEFAULT_WINDOW

    def validate(self) -> TotpConfig:
        """Return a copy with the algorithm resolved, or raise on bad values."""

        algorithm = HashAlgorithm.parse(self.algorithm)
        period = self.period
        if isinstance(period, bool) or not isinstance(period, (int, float)):
            raise InvalidPeriodError(
                f"period must be a number, got {type(period).__name__}"
            )
        if isinstance(period, float) and not math.isfinite(period):
            raise InvalidPeriodError("period must be a finite number of seconds")
        if period <= 0:
            raise InvalidPeriodError("period must be a positive number of seconds")
        validate_digits(self.digits)
        window = self.window
        if isinstance(window, bool) or not isinstance(window, int) or window < 0:
            raise InvalidWindowError("window must be a non-negative integer")
        if algorithm is self.algorithm:
            return self
        return replace(self, algorithm=algorithm)

    def with_overrides(self, **changes: Any) -> TotpConfig:
        cleaned = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **cleaned).validate()

    @property
    def hash_algorithm(self) -> HashAlgorithm:
        return HashAlgorithm.parse(self.algorithm)


DEFAULT_CONFIG = TotpConfig()

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_DIGITS",
    "DEFAULT_PERIOD",
    "DEFAULT_WINDOW",
    "TotpConfig",
]
