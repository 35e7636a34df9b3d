from __future__ import annotations

from urllib.parse import quote, urlencode

from totp_engine.base32 import decode_secret, normalize_secret
from totp_engine.config import DEFAULT_CONFIG, TotpConfig


def _format_period(period: int | float) -> str:
    if isinstance(period, float) and period.is_integer():
        return str(int(period))
    return str(period)


def build_provisioning_uri(
    secret: str,
    account: str,
    issuer: str | None = None,
    config: TotpConfig | None = None,
) -> str:
    """Build an ``otpauth://totp/`` URI for authenticator apps.

    The secret is validated by decoding it, then emitted unpadded. Label and
    query values are percent-encoded.
    """

    if not account or not account.strip():
        raise ValueError("account must not be empty")
    resolved = (config or DEFAULT_CONFIG).validate()
    decode_secret(secret)

    label = f"{issuer}:{account}" if issuer else account
    params: dict[str, str] = {"secret": normalize_secret(secret).rstrip("=")}
    if issuer:
        params["issuer"] = issuer
    params["digits"] = str(resolved.digits)
    params["period"] = _format_period(resolved.period)
    params["algorithm"] = resolved.hash_algorithm.uri_name
    query = urlencode(params, quote_via=quote)
    return f"otpauth://totp/{quote(label, safe=':@')}?{query}"


__all__ = ["build_provisioning_uri"]
