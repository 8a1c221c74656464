"""Chunk planning for multipart uploads.

A plan splits a file of ``file_size`` bytes into 1-based, contiguous parts of
``chunk_size`` bytes; only the last part may be shorter. An empty file is
planned as a single zero-length part so that the upload session can still be
completed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

KiB: Final[int] = 1024
MiB: Final[int] = KiB * KiB
GiB: Final[int] = MiB * KiB

# S3 rejects parts below 5 MiB unless they are the last part of the upload.
MIN_PART_SIZE: Final[int] = 5 * MiB
MAX_PART_SIZE: Final[int] = 5 * GiB
MAX_PART_COUNT: Final[int] = 10000
DEFAULT_PART_SIZE: Final[int] = 1 * GiB


@dataclass(frozen=True, slots=True)
class Chunk:
    """One planned part: its 1-based number and its byte range in the file."""

    index: int
    offset: int
    length: int


ChunkPlan = tuple[Chunk, ...]


def resolve_part_size(
    requested: int | None, *, default: int = DEFAULT_PART_SIZE
) -> int:
    """Return the part size to use for a request.

    ``None`` or ``0`` selects ``default``; anything below the S3 floor is
    raised to ``MIN_PART_SIZE`` and anything above the S3 ceiling is lowered
    to ``MAX_PART_SIZE``.
    """
    size = int(requested) if requested else int(default)
    if size < MIN_PART_SIZE:
        return MIN_PART_SIZE
    if size > MAX_PART_SIZE:
        return MAX_PART_SIZE
    return size


def fit_part_size(file_size: int, part_size: int) -> int:
    """Grow ``part_size`` so the file fits in ``MAX_PART_COUNT`` parts."""
    if part_count(file_size, part_size) <= MAX_PART_COUNT:
        return part_size
    div = -(-file_size // MAX_PART_COUNT)
    return ((div + MiB - 1) // MiB) * MiB


def part_count(file_size: int, chunk_size: int) -> int:
    """Number of parts needed for ``file_size`` bytes; never less than one."""
    _validate(file_size, chunk_size)
    if file_size == 0:
        return 1
    return -(-file_size // chunk_size)


def plan_chunks(file_size: int, chunk_size: int) -> ChunkPlan:
    _validate(file_size, chunk_size)
    if file_size == 0:
        return (Chunk(index=1, offset=0, length=0),)

    chunks: list[Chunk] = []
    offset = 0
    remaining = file_size
    index = 1
    while remaining > 0:
        length = min(remaining, chunk_size)
        chunks.append(Chunk(index=index, offset=offset, length=length))
        offset += length
        remaining -= length
        index += 1
    return tuple(chunks)


def _validate(file_size: int, chunk_size: int) -> None:
    if file_size < 0:
        raise ValueError("file_size must not be negative")
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
