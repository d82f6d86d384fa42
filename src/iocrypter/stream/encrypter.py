"""Streaming encryption: header, AES-CTR body and HMAC trailer."""

from __future__ import annotations

import io
import logging
import os
from typing import IO, Callable

from iocrypter.crypto.digest import DigestSinkSource
from iocrypter.crypto.kdf import derive_keys, password_bytes
from iocrypter.crypto.keystream import KeystreamReader
from iocrypter.crypto.settings import KDFSettings, recommended_settings
from iocrypter.errors import RandomnessFailure
from iocrypter.stream.format import IV_LEN, SALT_LEN, StreamHeader
from iocrypter.stream.readers import MultiReader, TeeReader

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]


def _random(random_bytes: RandomSource, size: int, stage: str) -> bytes:
    try:
        data = random_bytes(size)
    except (OSError, NotImplementedError) as exc:
        raise RandomnessFailure(str(exc), stage=stage) from exc
    if len(data) != size:
        raise RandomnessFailure(f"expected {size} bytes, got {len(data)}", stage=stage)
    return data


def encrypt(
    source: IO[bytes],
    password: str | bytes,
    settings: KDFSettings | None = None,
    *,
    random_bytes: RandomSource = os.urandom,
) -> io.RawIOBase:
    """Return a readable stream producing the encrypted form of ``source``.

    Nothing is read from ``source`` until the returned stream is read. The
    stream yields the header, then the ciphertext body as ``source`` is
    drained, then the 64-byte HMAC trailer. ``source`` is never closed.
    """

    secret = password_bytes(password)
    settings = settings or recommended_settings()

    salt = _random(random_bytes, SALT_LEN, "generating salt")
    keys = derive_keys(secret, salt, settings)
    iv = _random(random_bytes, IV_LEN, "generating IV")

    header = StreamHeader(settings=settings, salt=salt, iv=iv).to_bytes()
    body = KeystreamReader(source, keys.cipher_key, iv, stage="reading plaintext")
    digest = DigestSinkSource(keys.mac_key)
    logger.debug("encrypter ready (header=%d bytes)", len(header))

    # The digest is read only after the tee has drained header and body.
    return MultiReader([TeeReader(MultiReader([io.BytesIO(header), body]), digest), digest])


__all__ = ["RandomSource", "encrypt"]
