from __future__ import annotations

import struct

import pytest
from hypothesis import given, strategies as st

from iocrypter.crypto.settings import (
    DEFAULT_MEMORY_KIB,
    DEFAULT_THREADS,
    DEFAULT_TIME_COST,
    SETTINGS_LEN,
    KDFSettings,
    decode_settings,
    encode_settings,
    recommended_settings,
)
from iocrypter.errors import IOCrypterError, TruncatedSettings


def test_settings_len_is_nine() -> None:
    assert SETTINGS_LEN == 9


def test_encode_field_order_is_memory_threads_time() -> None:
    encoded = encode_settings(KDFSettings(time=3, memory=65536, threads=4))
    assert encoded == b"\x00\x00\x01\x00" + b"\x04" + b"\x03\x00\x00\x00"


def test_decode_known_bytes() -> None:
    settings = decode_settings(b"\x40\x00\x00\x00\x02\x01\x00\x00\x00")
    assert settings == KDFSettings(time=1, memory=64, threads=2)


def test_decode_ignores_trailing_bytes() -> None:
    data = encode_settings(KDFSettings(time=7, memory=1024, threads=1)) + b"extra"
    assert decode_settings(data) == KDFSettings(time=7, memory=1024, threads=1)


@pytest.mark.parametrize("length", range(SETTINGS_LEN))
def test_decode_rejects_short_input(length: int) -> None:
    with pytest.raises(TruncatedSettings):
        decode_settings(bytes(length))


def test_decode_does_not_validate_time_cost() -> None:
    settings = decode_settings(encode_settings(KDFSettings(time=0, memory=64, threads=1)))
    assert settings.time == 0


def test_encode_rejects_out_of_range_fields() -> None:
    with pytest.raises(IOCrypterError):
        encode_settings(KDFSettings(time=1, memory=64, threads=256))


def test_recommended_settings_defaults() -> None:
    settings = recommended_settings()
    assert settings == KDFSettings()
    assert settings.time == DEFAULT_TIME_COST == 3
    assert settings.memory == DEFAULT_MEMORY_KIB == 64 * 1024
    assert settings.threads == DEFAULT_THREADS == 4


def test_settings_are_immutable() -> None:
    settings = recommended_settings()
    with pytest.raises(AttributeError):
        settings.time = 1  # type: ignore[misc]


@given(data=st.binary(min_size=SETTINGS_LEN, max_size=SETTINGS_LEN))
def test_decode_encode_round_trip(data: bytes) -> None:
    assert encode_settings(decode_settings(data)) == data


@given(
    time=st.integers(min_value=0, max_value=2**32 - 1),
    memory=st.integers(min_value=0, max_value=2**32 - 1),
    threads=st.integers(min_value=0, max_value=255),
)
def test_encode_decode_round_trip(time: int, memory: int, threads: int) -> None:
    settings = KDFSettings(time=time, memory=memory, threads=threads)
    encoded = encode_settings(settings)
    assert len(encoded) == SETTINGS_LEN
    assert struct.unpack("<IBI", encoded) == (memory, threads, time)
    assert decode_settings(encoded) == settings
