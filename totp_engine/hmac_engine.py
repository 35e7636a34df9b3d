from __future__ import annotations

import hmac

from totp_engine.algorithms import HashAlgorithm
from totp_engine.errors import HashComputationError, KeyImportError


def _import_key(key: bytes, algorithm: HashAlgorithm) -> hmac.HMAC:
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise KeyImportError(f"key must be bytes, got {type(key).__name__}")
    if len(key) == 0:
        raise KeyImportError("key must not be empty")
    try:
        return hmac.new(bytes(key), digestmod=algorithm.hashlib_name)
    except (TypeError, ValueError) as exc:
        raise KeyImportError(
            f"HMAC-{algorithm.value} rejected the key"
        ) from exc


def compute_mac(
    key: bytes,
    message: bytes,
    algorithm: HashAlgorithm | str = HashAlgorithm.SHA1,
) -> bytes:
    """Return ``HMAC(key, message)`` for ``algorithm``.

    Pure: identical inputs always yield identical bytes.
    """

    resolved = HashAlgorithm.parse(algorithm)
    mac = _import_key(key, resolved)
    try:
        mac.update(message)
        return mac.digest()
    except (TypeError, ValueError) as exc:
        raise HashComputationError(
            f"HMAC-{resolved.value} computation failed"
        ) from exc


__all__ = ["compute_mac"]
