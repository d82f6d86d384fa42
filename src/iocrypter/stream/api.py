"""High-level helpers for encrypting and decrypting byte buffers and files."""

from __future__ import annotations

import io
import logging
import shutil
from pathlib import Path

from iocrypter.crypto.settings import KDFSettings
from iocrypter.errors import UnderlyingIOFailure
from iocrypter.stream.decrypter import decrypt
from iocrypter.stream.encrypter import encrypt

logger = logging.getLogger(__name__)


def encrypt_bytes(data: bytes, password: str | bytes, settings: KDFSettings | None = None) -> bytes:
    with encrypt(io.BytesIO(data), password, settings) as stream:
        return stream.read()


def decrypt_bytes(data: bytes, password: str | bytes) -> bytes:
    with decrypt(io.BytesIO(data), password) as stream:
        return stream.read()


def encrypt_file(
    input_path: Path,
    output_path: Path,
    password: str | bytes,
    settings: KDFSettings | None = None,
) -> None:
    """Encrypt ``input_path`` into ``output_path``, replacing any existing file."""

    with Path(input_path).open("rb") as source:
        stream = encrypt(source, password, settings)
        with stream, Path(output_path).open("wb") as out:
            try:
                shutil.copyfileobj(stream, out)
            except OSError as exc:
                raise UnderlyingIOFailure(str(exc), stage="writing ciphertext") from exc
    logger.debug("encrypted %s to %s", input_path, output_path)


def decrypt_file(container_path: Path, output_path: Path, password: str | bytes) -> None:
    """Decrypt ``container_path`` into ``output_path``.

    ``output_path`` is only created once the whole container authenticated.
    """

    with Path(container_path).open("rb") as source:
        stream = decrypt(source, password)
    with stream, Path(output_path).open("wb") as out:
        try:
            shutil.copyfileobj(stream, out)
        except OSError as exc:
            raise UnderlyingIOFailure(str(exc), stage="writing plaintext") from exc
    logger.debug("decrypted %s to %s", container_path, output_path)


__all__ = ["decrypt_bytes", "decrypt_file", "encrypt_bytes", "encrypt_file"]
