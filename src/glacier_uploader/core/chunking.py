"""Fixed-size chunking for multipart uploads.

This module splits a file into parts of exactly PART_SIZE bytes, except
for the final part which may be shorter. Parts are read lazily so that
only one part is held in memory at a time.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

from glacier_uploader.core.errors import ChunkReadError

# Part size configuration (in bytes)
PART_SIZE = 50 * 1024 * 1024  # 50 MB


@dataclass
class Chunk:
    """Represents one part of the source file."""

    part_number: int
    offset: int
    data: bytes

    @property
    def size(self) -> int:
        """Return the size of this chunk in bytes."""
        return len(self.data)


def count_parts(file_size: int, part_size: int = PART_SIZE) -> int:
    """Return the number of parts a file of file_size bytes splits into."""
    if part_size <= 0:
        raise ValueError(f"part_size must be positive, got {part_size}")
    return -(-file_size // part_size)


def _read_full(fileobj: BinaryIO, size: int) -> bytes:
    """Read up to size bytes, looping over short reads until EOF."""
    data = fileobj.read(size)
    if not data or len(data) == size:
        return data

    pieces = [data]
    remaining = size - len(data)
    while remaining > 0:
        piece = fileobj.read(remaining)
        if not piece:
            break
        pieces.append(piece)
        remaining -= len(piece)
    return b"".join(pieces)


def read_chunks(fileobj: BinaryIO, part_size: int = PART_SIZE) -> Iterator[Chunk]:
    """Split an open binary file into fixed-size parts.

    The sequence is single-pass: it consumes the file position and cannot
    be restarted.

    Args:
        fileobj: File opened in binary read mode.
        part_size: Size of every part except the last.

    Yields:
        Chunk objects numbered from 1 in file order.

    Raises:
        ChunkReadError: If reading the file fails.
        ValueError: If part_size is not positive.
    """
    if part_size <= 0:
        raise ValueError(f"part_size must be positive, got {part_size}")

    part_number = 1
    offset = 0
    while True:
        try:
            data = _read_full(fileobj, part_size)
        except OSError as e:
            raise ChunkReadError(f"Failed to read a chunk at offset {offset}: {e}") from e

        if not data:
            return

        yield Chunk(part_number=part_number, offset=offset, data=data)
        part_number += 1
        offset += len(data)
