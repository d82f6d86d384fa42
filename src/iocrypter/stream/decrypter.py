"""Streaming decryption with authenticate-before-release semantics.

The trailer sits at the very end of a stream whose length is unknown, so
the body is spooled to a temporary file through a bounded lookahead
window while the HMAC is computed. Only after the trailer verifies is the
spooled ciphertext rewound and exposed through the keystream.
"""

from __future__ import annotations

import hmac
import logging
import tempfile
from contextlib import ExitStack
from typing import IO

from iocrypter.crypto.digest import DigestSinkSource
from iocrypter.crypto.kdf import derive_keys, password_bytes
from iocrypter.crypto.keystream import KeystreamReader
from iocrypter.errors import AuthenticationFailed, MissingData, TooFewRounds, UnderlyingIOFailure
from iocrypter.stream.format import CHUNK_SIZE, TRAILER_LEN, read_header_from_stream
from iocrypter.stream.readers import ChunkLookahead

logger = logging.getLogger(__name__)

MIN_TIME_COST = 1


def _spool(store: IO[bytes], digest: DigestSinkSource, data: bytes) -> None:
    try:
        store.write(data)
    except OSError as exc:
        raise UnderlyingIOFailure(str(exc), stage="buffering ciphertext") from exc
    digest.write(data)


def _authenticate_body(
    source: IO[bytes], store: IO[bytes], digest: DigestSinkSource, chunk_size: int
) -> int:
    """Spool the body into ``store`` and check the trailer.

    Returns the number of body bytes authenticated.
    """

    lookahead = ChunkLookahead(source, chunk_size)
    body_len = 0
    while True:
        lookahead.peek()
        if lookahead.buffered() == lookahead.size:
            # A full window means the trailer cannot start in its first
            # size - TRAILER_LEN bytes.
            chunk = lookahead.consume(lookahead.size - TRAILER_LEN)
            _spool(store, digest, chunk)
            body_len += len(chunk)
            continue

        remaining = lookahead.buffered()
        if remaining < TRAILER_LEN:
            raise MissingData(stage="reading trailer")
        chunk = lookahead.consume(remaining - TRAILER_LEN)
        trailer = lookahead.consume(TRAILER_LEN)
        _spool(store, digest, chunk)
        body_len += len(chunk)
        break

    if not hmac.compare_digest(digest.seal(), trailer):
        raise AuthenticationFailed()
    return body_len


def decrypt(
    source: IO[bytes],
    password: str | bytes,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> KeystreamReader:
    """Authenticate ``source`` completely and return a plaintext stream.

    Raises before returning if the stream is malformed, truncated, tampered
    with or encrypted under a different password; no plaintext is exposed
    in that case. Closing the returned stream releases its temporary file.
    ``source`` is never closed.
    """

    if chunk_size <= TRAILER_LEN:
        raise ValueError(f"chunk_size must exceed the trailer length of {TRAILER_LEN} bytes")
    secret = password_bytes(password)

    header, header_bytes = read_header_from_stream(source)
    logger.debug(
        "parsed header (time=%d, memory=%d KiB, threads=%d)",
        header.settings.time,
        header.settings.memory,
        header.settings.threads,
    )
    if header.settings.time < MIN_TIME_COST:
        raise TooFewRounds(stage="validating KDF settings")

    keys = derive_keys(secret, header.salt, header.settings)
    digest = DigestSinkSource(keys.mac_key)
    digest.write(header_bytes)

    with ExitStack() as stack:
        stack.callback(logger.debug, "released temporary ciphertext store")
        try:
            store = stack.enter_context(tempfile.TemporaryFile(prefix="iocrypter-"))
        except OSError as exc:
            raise UnderlyingIOFailure(str(exc), stage="creating temporary file") from exc

        body_len = _authenticate_body(source, store, digest, chunk_size)
        logger.debug("authenticated %d ciphertext bytes", body_len)

        try:
            store.seek(0)
        except OSError as exc:
            raise UnderlyingIOFailure(str(exc), stage="rewinding temporary file") from exc

        plaintext = KeystreamReader(
            store,
            keys.cipher_key,
            header.iv,
            stage="reading authenticated ciphertext",
            owns_source=True,
        )
        stack.pop_all()
    return plaintext


__all__ = ["MIN_TIME_COST", "decrypt"]
