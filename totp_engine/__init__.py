"""Time-based one-time passwords (RFC 6238) over HOTP truncation (RFC 4226)."""

from __future__ import annotations

from totp_engine.algorithms import HashAlgorithm
from totp_engine.base32 import decode_secret, random_base32
from totp_engine.config import DEFAULT_CONFIG, TotpConfig
from totp_engine.errors import (
    HashComputationError,
    InvalidDigitsError,
    InvalidPeriodError,
    InvalidSecretError,
    InvalidTimeStepError,
    InvalidWindowError,
    KeyImportError,
    TotpError,
    TotpGenerationError,
    TotpInputError,
    TotpInternalError,
    TruncationRangeError,
    UnsupportedAlgorithmError,
)
from totp_engine.hmac_engine import compute_mac
from totp_engine.hotp import encode_counter, hotp, truncate
from totp_engine.provisioning import build_provisioning_uri
from totp_engine.totp import TOTP, generate_code, generate_code_at_step, verify_code

__all__ = [
    "DEFAULT_CONFIG",
    "HashAlgorithm",
    "HashComputationError",
    "InvalidDigitsError",
    "InvalidPeriodError",
    "InvalidSecretError",
    "InvalidTimeStepError",
    "InvalidWindowError",
    "KeyImportError",
    "TOTP",
    "TotpConfig",
    "TotpError",
    "TotpGenerationError",
    "TotpInputError",
    "TotpInternalError",
    "TruncationRangeError",
    "UnsupportedAlgorithmError",
    "build_provisioning_uri",
    "compute_mac",
    "decode_secret",
    "encode_counter",
    "generate_code",
    "generate_code_at_step",
    "hotp",
    "random_base32",
    "truncate",
    "verify_code",
]
