"""Fixed-width binary codec for Argon2id parameters.

Layout (9 bytes, little-endian)::

    memory  u32   KiB
    threads u8
    time    u32   passes

The codec is a pure byte transform; semantic checks such as the minimum
time cost belong to the decrypter.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from iocrypter.errors import IOCrypterError, TruncatedSettings

DEFAULT_MEMORY_KIB = 64 * 1024  # 64 MiB
DEFAULT_TIME_COST = 3
DEFAULT_THREADS = 4

_SETTINGS_STRUCT = struct.Struct("<IBI")
SETTINGS_LEN = _SETTINGS_STRUCT.size


@dataclass(frozen=True)
class KDFSettings:
    time: int = DEFAULT_TIME_COST
    memory: int = DEFAULT_MEMORY_KIB
    threads: int = DEFAULT_THREADS


def recommended_settings() -> KDFSettings:
    """Return the default Argon2id parameters."""

    return KDFSettings()


def encode_settings(settings: KDFSettings) -> bytes:
    try:
        return _SETTINGS_STRUCT.pack(settings.memory, settings.threads, settings.time)
    except struct.error as exc:
        raise IOCrypterError(f"failed to encode KDF settings: {exc}") from exc


def decode_settings(data: bytes) -> KDFSettings:
    """Decode the first :data:`SETTINGS_LEN` bytes of ``data``.

    Trailing bytes are ignored; fewer than :data:`SETTINGS_LEN` bytes raise
    :class:`TruncatedSettings`.
    """

    if len(data) < SETTINGS_LEN:
        raise TruncatedSettings(f"expected {SETTINGS_LEN} bytes, got {len(data)}")
    memory, threads, time = _SETTINGS_STRUCT.unpack_from(data)
    return KDFSettings(time=time, memory=memory, threads=threads)


__all__ = [
    "DEFAULT_MEMORY_KIB",
    "DEFAULT_THREADS",
    "DEFAULT_TIME_COST",
    "KDFSettings",
    "SETTINGS_LEN",
    "decode_settings",
    "encode_settings",
    "recommended_settings",
]
