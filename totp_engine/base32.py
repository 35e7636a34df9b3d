"""RFC 4648 base32 handling for user-facing secrets."""

from __future__ import annotations

import base64
import binascii
import secrets

from totp_engine.errors import InvalidSecretError

BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"


def random_base32(length: int = 32) -> str:
    """Generate a base32 secret of ``length`` characters."""

    if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
        raise ValueError("length must be a positive integer")
    return "".join(secrets.choice(BASE32_ALPHABET) for _ in range(length))


def normalize_secret(secret: str) -> str:
    """Uppercase ``secret``, drop whitespace and restore ``=`` padding."""

    if not isinstance(secret, str):
        raise InvalidSecretError(
            f"secret must be a base32 string, got {type(secret).__name__}"
        )
    normalized = "".join(secret.split()).upper().rstrip("=")
    if not normalized:
        raise InvalidSecretError("secret must not be empty")
    padding = (8 - len(normalized) % 8) % 8
    return normalized + "=" * padding


def decode_secret(secret: str) -> bytes:
    """Decode a base32 secret into raw key bytes.

    Raises :class:`InvalidSecretError` when the secret is empty, not a string,
    not valid base32, or decodes to nothing.
    """

    normalized = normalize_secret(secret)
    try:
        key = base64.b32decode(normalized, casefold=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidSecretError("secret is not valid base32") from exc
    if not key:
        raise InvalidSecretError("secret decodes to an empty key")
    return key


__all__ = ["BASE32_ALPHABET", "decode_secret", "normalize_secret", "random_base32"]
