"""RFC 4226 HOTP: counter encoding and dynamic truncation."""

from __future__ import annotations

import struct

from totp_engine.algorithms import HashAlgorithm
from totp_engine.errors import (
    InvalidDigitsError,
    InvalidTimeStepError,
    TruncationRangeError,
)
from totp_engine.hmac_engine import compute_mac

MAX_COUNTER = 2**64 - 1
MAX_DIGITS = 10


def encode_counter(step: int) -> bytes:
    """Encode ``step`` as an 8-byte big-endian unsigned integer."""

    if isinstance(step, bool) or not isinstance(step, int):
        raise InvalidTimeStepError(
            f"step must be an integer, got {type(step).__name__}"
        )
    if step < 0 or step > MAX_COUNTER:
        raise InvalidTimeStepError(f"step {step} is outside 0..2**64-1")
    return struct.pack(">Q", step)


def validate_digits(digits: int) -> int:
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidDigitsError(
            f"digits must be an integer, got {type(digits).__name__}"
        )
    if digits < 1 or digits > MAX_DIGITS:
        raise InvalidDigitsError(f"digits must be between 1 and {MAX_DIGITS}")
    return digits


def truncate(mac: bytes, digits: int) -> str:
    """Reduce ``mac`` to a zero-padded decimal code of ``digits`` characters."""

    validate_digits(digits)
    if not mac:
        raise TruncationRangeError("MAC is empty")
    offset = mac[-1] & 0x0F
    if offset + 4 > len(mac):
        raise TruncationRangeError(
            f"offset {offset} needs 4 bytes but MAC is {len(mac)} bytes long"
        )
    (value,) = struct.unpack(">I", bytes(mac[offset : offset + 4]))
    code = (value & 0x7FFFFFFF) % (10**digits)
    return f"{code:0{digits}d}"


def hotp(
    key: bytes,
    counter: int,
    digits: int = 6,
    algorithm: HashAlgorithm | str = HashAlgorithm.SHA1,
) -> str:
    """Counter-based one-time password for raw ``key`` bytes."""

    return truncate(compute_mac(key, encode_counter(counter), algorithm), digits)


__all__ = [
    "MAX_COUNTER",
    "MAX_DIGITS",
    "encode_counter",
    "hotp",
    "truncate",
    "validate_digits",
]
