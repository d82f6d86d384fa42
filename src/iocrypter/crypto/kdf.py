"""Key derivation helpers using Argon2id."""

from __future__ import annotations

import logging
from typing import NamedTuple

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from iocrypter.crypto.settings import KDFSettings
from iocrypter.errors import KeyDerivationFailure, PassphraseEmpty

logger = logging.getLogger(__name__)

CIPHER_KEY_LEN = 32
MAC_KEY_LEN = 32
DERIVED_KEY_LEN = CIPHER_KEY_LEN + MAC_KEY_LEN


class DerivedKeys(NamedTuple):
    cipher_key: bytes
    mac_key: bytes


def password_bytes(password: str | bytes) -> bytes:
    """Return ``password`` as bytes, rejecting empty passphrases."""

    if isinstance(password, str):
        password = password.encode("utf-8")
    if not password:
        raise PassphraseEmpty()
    return bytes(password)


def derive_keys(password: bytes, salt: bytes, settings: KDFSettings) -> DerivedKeys:
    """Derive an AES-256 key and an HMAC key from password and salt."""

    logger.debug(
        "deriving keys with argon2id (time=%d, memory=%d KiB, threads=%d)",
        settings.time,
        settings.memory,
        settings.threads,
    )
    try:
        material = hash_secret_raw(
            secret=password,
            salt=salt,
            time_cost=settings.time,
            memory_cost=settings.memory,
            parallelism=settings.threads,
            hash_len=DERIVED_KEY_LEN,
            type=Type.ID,
            version=19,
        )
    except HashingError as exc:
        raise KeyDerivationFailure(str(exc), stage="deriving keys") from exc
    return DerivedKeys(material[:CIPHER_KEY_LEN], material[CIPHER_KEY_LEN:DERIVED_KEY_LEN])


__all__ = [
    "CIPHER_KEY_LEN",
    "DERIVED_KEY_LEN",
    "DerivedKeys",
    "MAC_KEY_LEN",
    "derive_keys",
    "password_bytes",
]
