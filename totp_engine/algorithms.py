from __future__ import annotations

import hashlib
from enum import Enum

from totp_engine.errors import UnsupportedAlgorithmError


class HashAlgorithm(str, Enum):
    """HMAC digests supported for HOTP/TOTP (RFC 6238 section 1.2)."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def hashlib_name(self) -> str:
        return self.value.lower()

    @property
    def digest_size(self) -> int:
        return hashlib.new(self.hashlib_name).digest_size

    @property
    def uri_name(self) -> str:
        """Name used in the ``algorithm`` field of otpauth URIs."""

        return self.value

    @classmethod
    def parse(cls, value: HashAlgorithm | str) -> HashAlgorithm:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnsupportedAlgorithmError(
                f"algorithm must be a string, got {type(value).__name__}"
            )
        normalized = value.strip().upper().replace("-", "").replace("_", "")
        # "HMAC-SHA256" and friends
        if normalized.startswith("HMAC"):
            normalized = normalized[len("HMAC") :]
        try:
            return cls(normalized)
        except ValueError as exc:
            raise UnsupportedAlgorithmError(
                f"unsupported hash algorithm: {value!r}"
            ) from exc


__all__ = ["HashAlgorithm"]
