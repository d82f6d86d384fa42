"""Custom exceptions for iocrypter."""

from __future__ import annotations


class IOCrypterError(Exception):
    """Base exception for iocrypter.

    ``stage`` names what was being done when the failure happened
    (for example ``"reading salt"``) and prefixes the message.
    """

    default_message = "iocrypter operation failed"

    def __init__(self, message: str | None = None, *, stage: str | None = None) -> None:
        self.stage = stage
        text = message or self.default_message
        if stage:
            text = f"{stage}: {text}"
        super().__init__(text)


class PassphraseEmpty(IOCrypterError):
    """Passphrase must be non-empty."""

    default_message = "passphrase must not be empty"


class TruncatedSettings(IOCrypterError):
    """Serialized KDF settings are shorter than their fixed width."""

    default_message = "KDF settings are truncated"


class TooFewRounds(IOCrypterError):
    """KDF time cost below the minimum of one pass."""

    default_message = "KDF time cost must be at least 1"


class RandomnessFailure(IOCrypterError):
    """Secure random source could not supply the requested bytes."""

    default_message = "failed to obtain random bytes"


class AuthenticationFailed(IOCrypterError):
    """Trailer mismatch: tampering, corruption or a wrong password."""

    default_message = (
        "authentication failed, data might have been tampered, corrupted or password is incorrect"
    )


class MissingData(IOCrypterError):
    """Ciphertext ends before a complete header or trailer."""

    default_message = "not enough data to decrypt, ciphertext might be corrupted"


class WriteAfterRead(IOCrypterError):
    """Digest sink was written to after its digest was read."""

    default_message = "writing to digest sink after read is not allowed"


class UnderlyingIOFailure(IOCrypterError):
    """Wrapped stream raised an I/O error."""

    default_message = "underlying I/O failed"


class KeyDerivationFailure(IOCrypterError):
    """Argon2id rejected the supplied parameters."""

    default_message = "key derivation failed"


class SessionCodecError(IOCrypterError):
    """Session payload could not be serialized or deserialized."""

    default_message = "session data could not be encoded"
