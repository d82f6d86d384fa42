"""Stream header format helpers.

Wire layout::

    settings   9 bytes   (see iocrypter.crypto.settings)
    salt      32 bytes
    iv        16 bytes
    body       N bytes   AES-256-CTR(plaintext)
    trailer   64 bytes   HMAC-SHA512(header || body)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO

from cryptography.hazmat.primitives.ciphers import algorithms

from iocrypter.crypto.digest import DIGEST_LEN
from iocrypter.crypto.settings import SETTINGS_LEN, KDFSettings, decode_settings, encode_settings
from iocrypter.errors import MissingData, TruncatedSettings, UnderlyingIOFailure

SALT_LEN = 32
IV_LEN = algorithms.AES.block_size // 8
HEADER_LEN = SETTINGS_LEN + SALT_LEN + IV_LEN
TRAILER_LEN = DIGEST_LEN
CHUNK_SIZE = 4 * 1024


@dataclass(frozen=True)
class StreamHeader:
    settings: KDFSettings
    salt: bytes
    iv: bytes

    def to_bytes(self) -> bytes:
        return encode_settings(self.settings) + self.salt + self.iv


def read_up_to(source: IO[bytes], size: int, stage: str) -> bytes:
    """Read up to ``size`` bytes, returning fewer only at end of stream."""

    parts = []
    remaining = size
    while remaining > 0:
        try:
            chunk = source.read(remaining)
        except (OSError, ValueError) as exc:
            raise UnderlyingIOFailure(str(exc), stage=stage) from exc
        if not chunk:
            break
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)


def read_header_from_stream(source: IO[bytes]) -> tuple[StreamHeader, bytes]:
    """Consume the header from ``source``.

    Returns the parsed header and the exact bytes read, which the caller
    feeds into the trailer computation.
    """

    settings_bytes = read_up_to(source, SETTINGS_LEN, "reading KDF settings")
    try:
        settings = decode_settings(settings_bytes)
    except TruncatedSettings as exc:
        raise TruncatedSettings(str(exc), stage="reading KDF settings") from exc

    salt = read_up_to(source, SALT_LEN, "reading salt")
    if len(salt) != SALT_LEN:
        raise MissingData(stage="reading salt")

    iv = read_up_to(source, IV_LEN, "reading IV")
    if len(iv) != IV_LEN:
        raise MissingData(stage="reading IV")

    return StreamHeader(settings=settings, salt=salt, iv=iv), settings_bytes + salt + iv


__all__ = [
    "CHUNK_SIZE",
    "HEADER_LEN",
    "IV_LEN",
    "SALT_LEN",
    "StreamHeader",
    "TRAILER_LEN",
    "read_up_to",
    "read_header_from_stream",
]
