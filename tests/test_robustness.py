from __future__ import annotations

import pytest
from hypothesis import given, settings as hyp_settings, strategies as st

from iocrypter.crypto.settings import KDFSettings
from iocrypter.errors import AuthenticationFailed, MissingData
from iocrypter.stream import HEADER_LEN, TRAILER_LEN, decrypt_bytes, encrypt_bytes
from iocrypter.stream.format import SALT_LEN

FAST = KDFSettings(time=1, memory=64, threads=1)
PLAINTEXT = b"This is a test"
CIPHERTEXT = encrypt_bytes(PLAINTEXT, "pw", FAST)
LARGE_CIPHERTEXT = encrypt_bytes(bytes(range(256)) * 40, "pw", FAST)


def _flip(data: bytes, offset: int, bit: int = 0) -> bytes:
    corrupted = bytearray(data)
    corrupted[offset] ^= 1 << bit
    return bytes(corrupted)


@pytest.mark.parametrize("offset", range(HEADER_LEN, len(CIPHERTEXT)))
def test_any_body_or_trailer_byte_flip_fails(offset: int) -> None:
    with pytest.raises(AuthenticationFailed):
        decrypt_bytes(_flip(CIPHERTEXT, offset), "pw")


@pytest.mark.parametrize("offset", [9, 9 + SALT_LEN - 1, 9 + SALT_LEN, HEADER_LEN - 1])
def test_salt_or_iv_flip_fails(offset: int) -> None:
    with pytest.raises(AuthenticationFailed):
        decrypt_bytes(_flip(CIPHERTEXT, offset), "pw")


@hyp_settings(max_examples=50, deadline=None)
@given(
    offset=st.integers(min_value=HEADER_LEN, max_value=len(LARGE_CIPHERTEXT) - 1),
    bit=st.integers(min_value=0, max_value=7),
)
def test_single_bit_flip_in_large_stream_fails(offset: int, bit: int) -> None:
    with pytest.raises(AuthenticationFailed):
        decrypt_bytes(_flip(LARGE_CIPHERTEXT, offset, bit), "pw")


def test_dropping_last_byte_fails_authentication() -> None:
    with pytest.raises(AuthenticationFailed):
        decrypt_bytes(CIPHERTEXT[:-1], "pw")


def test_dropping_whole_trailer_is_missing_data() -> None:
    with pytest.raises(MissingData):
        decrypt_bytes(CIPHERTEXT[:-TRAILER_LEN], "pw")


def test_appending_bytes_fails_authentication() -> None:
    with pytest.raises(AuthenticationFailed):
        decrypt_bytes(CIPHERTEXT + b"\x00", "pw")


def test_truncating_large_body_fails_authentication() -> None:
    truncated = LARGE_CIPHERTEXT[: HEADER_LEN + 100] + LARGE_CIPHERTEXT[-TRAILER_LEN:]
    with pytest.raises(AuthenticationFailed):
        decrypt_bytes(truncated, "pw")
