import pytest

from totp_engine import (
    HashAlgorithm,
    HashComputationError,
    InvalidDigitsError,
    InvalidTimeStepError,
    KeyImportError,
    TruncationRangeError,
    compute_mac,
    encode_counter,
    hotp,
    truncate,
)

RFC4226_KEY = b"12345678901234567890"

# RFC 4226 Appendix D
RFC4226_VECTORS = [
    "755224",
    "287082",
    "359152",
    "969429",
    "338314",
    "254676",
    "287922",
    "162583",
    "399871",
    "520489",
]


@pytest.mark.parametrize("counter,expected", list(enumerate(RFC4226_VECTORS)))
def test_hotp_matches_rfc4226_vectors(counter: int, expected: str) -> None:
    assert hotp(RFC4226_KEY, counter) == expected


def test_truncate_rfc4226_worked_example() -> None:
    # RFC 4226 section 5.4: offset 0xa selects 0x50ef7f19
    mac = bytes.fromhex("1f8698690e02ca16618550ef7f19da8e945b555a")
    assert truncate(mac, 6) == "872921"
    assert truncate(mac, 10) == "1357872921"


def test_truncate_clears_high_bit() -> None:
    mac = b"\xff\xff\xff\xff" + b"\x00" * 16
    assert truncate(mac, 10) == "2147483647"
    assert truncate(mac, 6) == "483647"


def test_truncate_zero_pads_to_digits() -> None:
    mac = b"\x00\x00\x00\x07" + b"\x00" * 16
    assert truncate(mac, 6) == "000007"
    assert truncate(mac, 1) == "7"


def test_truncate_rejects_offset_past_end_of_mac() -> None:
    # last byte 0x0f -> offset 15, but only 5 bytes available
    with pytest.raises(TruncationRangeError):
        truncate(b"\x00\x00\x00\x00\x0f", 6)


def test_truncate_rejects_empty_mac() -> None:
    with pytest.raises(TruncationRangeError):
        truncate(b"", 6)


def test_truncate_accepts_offset_at_exact_end() -> None:
    # offset 1, bytes 1..4 inclusive are the last four bytes
    mac = b"\x00\x00\x00\x00\x01"
    assert truncate(mac, 6) == "000001"


@pytest.mark.parametrize("digits", [0, -1, 11, 6.0, True, "6"])
def test_truncate_rejects_bad_digits(digits) -> None:
    with pytest.raises(InvalidDigitsError):
        truncate(b"\x00" * 20, digits)


def test_encode_counter_is_big_endian_unsigned() -> None:
    assert encode_counter(0) == b"\x00" * 8
    assert encode_counter(1) == b"\x00" * 7 + b"\x01"
    assert encode_counter(0x0102030405060708) == bytes(range(1, 9))
    assert encode_counter(2**64 - 1) == b"\xff" * 8


@pytest.mark.parametrize(
    "step",
    [-1, 2**64, 1.0, float("nan"), True, None, "1"],
)
def test_encode_counter_rejects_invalid_steps(step) -> None:
    with pytest.raises(InvalidTimeStepError):
        encode_counter(step)


def test_compute_mac_is_deterministic() -> None:
    message = encode_counter(55751040)
    first = compute_mac(RFC4226_KEY, message, HashAlgorithm.SHA256)
    second = compute_mac(RFC4226_KEY, message, "sha-256")
    assert first == second
    assert len(first) == HashAlgorithm.SHA256.digest_size == 32


@pytest.mark.parametrize("algorithm,size", [("SHA1", 20), ("SHA256", 32), ("SHA512", 64)])
def test_compute_mac_sizes(algorithm: str, size: int) -> None:
    assert len(compute_mac(RFC4226_KEY, b"\x00" * 8, algorithm)) == size


@pytest.mark.parametrize("key", [b"", "not-bytes", None])
def test_compute_mac_rejects_unusable_keys(key) -> None:
    with pytest.raises(KeyImportError):
        compute_mac(key, b"\x00" * 8)


def test_compute_mac_wraps_digest_failures() -> None:
    with pytest.raises(HashComputationError) as excinfo:
        compute_mac(RFC4226_KEY, "not-bytes")
    assert isinstance(excinfo.value.__cause__, TypeError)
