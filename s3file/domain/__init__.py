"""
Domain layer package housing request types and multipart chunk planning.
"""

from .chunking import (
    DEFAULT_PART_SIZE,
    MAX_PART_COUNT,
    MAX_PART_SIZE,
    MIN_PART_SIZE,
    Chunk,
    ChunkPlan,
    fit_part_size,
    part_count,
    plan_chunks,
    resolve_part_size,
)
from .requests import FileRequest, PutFileRequest, build_object_key

__all__ = [
    "DEFAULT_PART_SIZE",
    "MAX_PART_COUNT",
    "MAX_PART_SIZE",
    "MIN_PART_SIZE",
    "Chunk",
    "ChunkPlan",
    "FileRequest",
    "PutFileRequest",
    "build_object_key",
    "fit_part_size",
    "part_count",
    "plan_chunks",
    "resolve_part_size",
]
