from __future__ import annotations

import math
import time
from decimal import ROUND_FLOOR, Decimal

from totp_engine.errors import InvalidTimeStepError


def now_millis() -> int:
    """Wall-clock milliseconds since the Unix epoch."""

    return time.time_ns() // 1_000_000


def time_step(at_millis: int | float, period: int | float) -> int:
    """Return ``floor(at_millis / (period * 1000))``.

    Integer inputs stay on the integer path so large timestamps never pass
    through a float. ``period`` is expected to be validated already.
    """

    if isinstance(at_millis, bool) or not isinstance(at_millis, (int, float)):
        raise InvalidTimeStepError(
            f"time must be a number, got {type(at_millis).__name__}"
        )
    if isinstance(at_millis, float) and not math.isfinite(at_millis):
        raise InvalidTimeStepError("time must be finite")
    if at_millis < 0:
        raise InvalidTimeStepError("time must not be before the Unix epoch")

    if isinstance(at_millis, int) and isinstance(period, int):
        return at_millis // (period * 1000)
    # fractional period or time: floor on Decimals, not on a float quotient
    quotient = Decimal(repr(at_millis)) / (Decimal(repr(period)) * 1000)
    return int(quotient.to_integral_value(rounding=ROUND_FLOOR))


__all__ = ["now_millis", "time_step"]
