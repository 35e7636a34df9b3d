"""Error taxonomy for the TOTP engine.

Two families sit under :class:`TotpError`:

* :class:`TotpInputError` - the caller handed us something unusable (bad
  secret, bad period, ...). Recoverable by fixing the input.
* :class:`TotpInternalError` - the keyed-hash primitive failed or an internal
  invariant broke. Not something the caller can fix by retrying.

``generate_code``/``generate_code_at_step`` surface either family wrapped in
:class:`TotpGenerationError`; ``verify_code`` never raises.
"""

from __future__ import annotations


class TotpError(Exception):
    """Base class for every error raised by :mod:`totp_engine`."""


class TotpInputError(TotpError, ValueError):
    """Raised when caller-supplied input cannot be used."""


class InvalidSecretError(TotpInputError):
    """Secret is empty or is not valid RFC 4648 base32."""


class InvalidPeriodError(TotpInputError):
    """Period is not a positive number of seconds."""


class InvalidDigitsError(TotpInputError):
    """Digit count is not a positive integer in the supported range."""


class InvalidWindowError(TotpInputError):
    """Verification window is not a non-negative integer."""


class InvalidTimeStepError(TotpInputError):
    """Time or step counter is non-numeric, NaN, negative or out of range."""


class UnsupportedAlgorithmError(TotpInputError):
    """Hash algorithm is not one of the supported HMAC digests."""


class TotpInternalError(TotpError, RuntimeError):
    """Raised when the MAC primitive or an internal invariant fails."""


class KeyImportError(TotpInternalError):
    """The keyed-hash primitive rejected the key."""


class HashComputationError(TotpInternalError):
    """The keyed-hash primitive failed while computing the MAC."""


class TruncationRangeError(TotpInternalError):
    """Dynamic truncation offset points past the end of the MAC."""


class TotpGenerationError(TotpError):
    """Wraps any failure raised while generating a code.

    The original error is chained as ``__cause__`` and kept on ``cause``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause

    @property
    def is_input_error(self) -> bool:
        return isinstance(self.cause, TotpInputError)


__all__ = [
    "HashComputationError",
    "InvalidDigitsError",
    "InvalidPeriodError",
    "InvalidSecretError",
    "InvalidTimeStepError",
    "InvalidWindowError",
    "KeyImportError",
    "TotpError",
    "TotpGenerationError",
    "TotpInputError",
    "TotpInternalError",
    "TruncationRangeError",
    "UnsupportedAlgorithmError",
]
