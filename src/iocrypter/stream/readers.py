"""Small stream combinators used to assemble and parse ciphertext streams."""

from __future__ import annotations

import io
from typing import IO, Iterable

from iocrypter.errors import UnderlyingIOFailure


class MultiReader(io.RawIOBase):
    """Concatenate several readable streams into one."""

    def __init__(self, sources: Iterable[IO[bytes]]) -> None:
        super().__init__()
        self._sources = list(sources)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        if not len(buffer):
            return 0
        while self._sources:
            data = self._sources[0].read(len(buffer))
            if data:
                buffer[: len(data)] = data
                return len(data)
            self._sources.pop(0)
        return 0


class TeeReader(io.RawIOBase):
    """Write every byte read from ``source`` into ``sink`` before returning it."""

    def __init__(self, source: IO[bytes], sink: IO[bytes]) -> None:
        super().__init__()
        self._source = source
        self._sink = sink

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        data = self._source.read(len(buffer))
        if not data:
            return 0
        self._sink.write(data)
        buffer[: len(data)] = data
        return len(data)


class ChunkLookahead:
    """Bounded lookahead over a stream of unknown length.

    ``peek`` fills an internal buffer up to ``size`` bytes without consuming
    them; ``consume`` hands bytes out from the front of that buffer.
    """

    def __init__(self, source: IO[bytes], size: int, *, stage: str = "reading ciphertext") -> None:
        self._source = source
        self._size = size
        self._stage = stage
        self._buffer = bytearray()
        self._eof = False

    @property
    def size(self) -> int:
        return self._size

    def buffered(self) -> int:
        return len(self._buffer)

    def peek(self) -> bytes:
        while len(self._buffer) < self._size and not self._eof:
            try:
                data = self._source.read(self._size - len(self._buffer))
            except (OSError, ValueError) as exc:
                raise UnderlyingIOFailure(str(exc), stage=self._stage) from exc
            if not data:
                self._eof = True
                break
            self._buffer += data
        return bytes(self._buffer)

    def consume(self, count: int) -> bytes:
        if count > len(self._buffer):
            raise ValueError(f"cannot consume {count} bytes, only {len(self._buffer)} buffered")
        data = bytes(self._buffer[:count])
        del self._buffer[:count]
        return data


__all__ = ["ChunkLookahead", "MultiReader", "TeeReader"]
