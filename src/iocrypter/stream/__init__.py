"""Public stream API re-exported for external users.

The objects listed in ``__all__`` form the supported public surface.
Everything else in :mod:`iocrypter.stream` is considered internal.
"""
from __future__ import annotations

from iocrypter.crypto.settings import KDFSettings, recommended_settings
from iocrypter.stream.api import decrypt_bytes, decrypt_file, encrypt_bytes, encrypt_file
from iocrypter.stream.decrypter import decrypt
from iocrypter.stream.encrypter import encrypt
from iocrypter.stream.format import (
    CHUNK_SIZE,
    HEADER_LEN,
    IV_LEN,
    SALT_LEN,
    TRAILER_LEN,
    StreamHeader,
    read_header_from_stream,
)

__all__ = [
    "CHUNK_SIZE",
    "HEADER_LEN",
    "IV_LEN",
    "KDFSettings",
    "SALT_LEN",
    "StreamHeader",
    "TRAILER_LEN",
    "decrypt",
    "decrypt_bytes",
    "decrypt_file",
    "encrypt",
    "encrypt_bytes",
    "encrypt_file",
    "read_header_from_stream",
    "recommended_settings",
]
