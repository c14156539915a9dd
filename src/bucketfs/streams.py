"""Byte stream helpers used for content writes."""

from __future__ import annotations

import io
from collections.abc import Iterable, Iterator
from typing import Any, BinaryIO, Union

Data = Union[bytes, bytearray, memoryview, str, BinaryIO, Iterable[bytes]]

CHUNK_SIZE = 1024 * 1024


def is_buffer(data: Any) -> bool:
    return isinstance(data, (bytes, bytearray, memoryview, str))


def is_readable(data: Any) -> bool:
    return callable(getattr(data, "read", None))


def to_bytes(data: Data) -> bytes:
    """Materialize ``data`` fully in memory."""
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if is_readable(data):
        out = bytearray()
        for chunk in iter_chunks(data):
            out += chunk
        return bytes(out)
    return b"".join(bytes(chunk) for chunk in data)  # type: ignore[union-attr]


def iter_chunks(reader: Any, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    while True:
        chunk = reader.read(chunk_size)
        if not chunk:
            return
        yield bytes(chunk)


class IterableReader(io.RawIOBase):
    """Readable file object over an iterable of byte chunks."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = iter(chunks)
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int:
        while not self._pending:
            try:
                self._pending = bytes(next(self._chunks))
            except StopIteration:
                return 0
        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size


class ConcatReader(io.RawIOBase):
    """Reads each source to exhaustion, in order, without buffering them whole.

    Every read is filled completely unless all sources are exhausted, so
    multipart uploads that treat each ``read(part_size)`` as one part never
    see a short part at a source boundary.
    """

    def __init__(self, *sources: Any) -> None:
        self._sources = list(sources)
        self._index = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int:
        filled = 0
        with memoryview(buffer) as raw, raw.cast("B") as view:
            while filled < len(view) and self._index < len(self._sources):
                chunk = self._sources[self._index].read(len(view) - filled)
                if not chunk:
                    self._index += 1
                    continue
                size = len(chunk)
                view[filled : filled + size] = chunk
                filled += size
        return filled

    def close(self) -> None:
        for source in self._sources:
            close = getattr(source, "close", None)
            if close is not None:
                close()
        super().close()


def to_reader(data: Data) -> BinaryIO:
    """Wrap any supported data form as a readable binary stream."""
    if is_buffer(data):
        return io.BytesIO(to_bytes(data))
    if is_readable(data):
        return data  # type: ignore[return-value]
    return io.BufferedReader(IterableReader(data))  # type: ignore[arg-type]
