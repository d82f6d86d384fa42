"""Session codec that stores encrypted, authenticated session state.

Session values and their expiry are serialized with :mod:`pickle` and
sealed with the stream encrypter. Unpickling happens only after the
ciphertext authenticated, and only builtin containers and scalars plus
the :mod:`datetime` types may be loaded; any other global is refused.
"""

from __future__ import annotations

import io
import pickle
from datetime import datetime
from typing import Any

from iocrypter.crypto.settings import KDFSettings
from iocrypter.errors import SessionCodecError
from iocrypter.stream.api import decrypt_bytes, encrypt_bytes

_ALLOWED_GLOBALS = frozenset(
    {
        ("datetime", "date"),
        ("datetime", "datetime"),
        ("datetime", "time"),
        ("datetime", "timedelta"),
        ("datetime", "timezone"),
    }
)


class _SessionUnpickler(pickle.Unpickler):
    def find_class(self, module: str, name: str) -> Any:
        if (module, name) not in _ALLOWED_GLOBALS:
            raise pickle.UnpicklingError(f"global {module}.{name} is not allowed in session data")
        return super().find_class(module, name)


class SessionCodec:
    """Encode and decode ``(expiry, values)`` session pairs."""

    def __init__(self, password: str | bytes, settings: KDFSettings | None = None) -> None:
        self.password = password
        self.settings = settings

    def encode(self, expiry: datetime, values: dict[str, Any]) -> bytes:
        try:
            payload = pickle.dumps({"expiry": expiry, "values": values})
        except Exception as exc:  # noqa: BLE001
            raise SessionCodecError(str(exc), stage="serializing session") from exc
        return encrypt_bytes(payload, self.password, self.settings)

    def decode(self, data: bytes) -> tuple[datetime, dict[str, Any]]:
        payload = decrypt_bytes(data, self.password)
        try:
            record = _SessionUnpickler(io.BytesIO(payload)).load()
        except Exception as exc:  # noqa: BLE001
            raise SessionCodecError(str(exc), stage="deserializing session") from exc

        if not isinstance(record, dict):
            raise SessionCodecError("session record is not a mapping", stage="deserializing session")
        expiry = record.get("expiry")
        values = record.get("values")
        if not isinstance(expiry, datetime):
            raise SessionCodecError("session expiry is not a datetime", stage="deserializing session")
        if not isinstance(values, dict):
            raise SessionCodecError("session values are not a mapping", stage="deserializing session")
        return expiry, values


__all__ = ["SessionCodec"]
