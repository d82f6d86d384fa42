"""AES-256-CTR keystream applied lazily to a byte source."""

from __future__ import annotations

import io
import logging
from typing import IO

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from iocrypter.errors import UnderlyingIOFailure

logger = logging.getLogger(__name__)


class KeystreamReader(io.RawIOBase):
    """XOR the bytes of ``source`` with the AES-CTR keystream as they are read.

    Encryption and decryption are the same transform. When ``owns_source``
    is set, closing the reader closes ``source`` as well.
    """

    def __init__(
        self,
        source: IO[bytes],
        key: bytes,
        iv: bytes,
        *,
        stage: str = "reading source",
        owns_source: bool = False,
    ) -> None:
        super().__init__()
        self._source = source
        self._cipher = Cipher(algorithms.AES(key), modes.CTR(iv)).encryptor()
        self._stage = stage
        self._owns_source = owns_source

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        try:
            data = self._source.read(len(buffer))
        except (OSError, ValueError) as exc:
            raise UnderlyingIOFailure(str(exc), stage=self._stage) from exc
        if not data:
            return 0
        transformed = self._cipher.update(data)
        buffer[: len(transformed)] = transformed
        return len(transformed)

    def close(self) -> None:
        if not self.closed and self._owns_source:
            self._source.close()
            logger.debug("released owned source (%s)", self._stage)
        super().close()


__all__ = ["KeystreamReader"]
