"""Write-then-read-once wrapper around HMAC-SHA512."""

from __future__ import annotations

import enum
import hashlib
import hmac
import io

from iocrypter.errors import WriteAfterRead

DIGEST_NAME = "sha512"
DIGEST_LEN = hashlib.sha512().digest_size


class DigestState(enum.Enum):
    ACCUMULATING = "accumulating"
    SEALED = "sealed"


class DigestSinkSource(io.RawIOBase):
    """Keyed hash that is fed by writes and drained by reads.

    Writes update the HMAC while the object is ``ACCUMULATING``. The first
    read seals it: the HMAC is finalized and its digest is served as a
    byte source. Any write after that raises :class:`WriteAfterRead`, so
    a reader of the digest knows it covers everything written so far.
    """

    def __init__(self, key: bytes) -> None:
        super().__init__()
        self._mac = hmac.new(key, digestmod=DIGEST_NAME)
        self._state = DigestState.ACCUMULATING
        self._digest = b""
        self._offset = 0

    @property
    def state(self) -> DigestState:
        return self._state

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:  # type: ignore[override]
        if self._state is DigestState.SEALED:
            raise WriteAfterRead()
        view = memoryview(data)
        self._mac.update(view)
        return view.nbytes

    def seal(self) -> bytes:
        """Finalize the HMAC if still accumulating and return the digest."""

        if self._state is DigestState.ACCUMULATING:
            self._digest = self._mac.digest()
            self._state = DigestState.SEALED
        return self._digest

    def readinto(self, buffer) -> int:  # type: ignore[override]
        digest = self.seal()
        chunk = digest[self._offset : self._offset + len(buffer)]
        buffer[: len(chunk)] = chunk
        self._offset += len(chunk)
        return len(chunk)


__all__ = ["DIGEST_LEN", "DIGEST_NAME", "DigestSinkSource", "DigestState"]
