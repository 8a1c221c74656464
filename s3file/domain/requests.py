"""Request types identifying a file in a bucket."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path


def build_object_key(prefix: str | None, filename: str) -> str:
    """Join ``prefix`` and ``filename`` into a clean object key.

    Duplicate separators and ``.``/``..`` segments are collapsed and a leading
    slash is dropped, so ``("logs//2024/", "a.txt")`` becomes ``logs/2024/a.txt``.
    """
    parts = [p for p in ((prefix or "").strip(), filename.strip()) if p]
    if not parts:
        raise ValueError("filename must not be empty")
    key = posixpath.normpath(posixpath.join(*parts)).lstrip("/")
    if key in ("", "."):
        raise ValueError("object key resolves to an empty path")
    return key


@dataclass(frozen=True, slots=True)
class FileRequest:
    """Identifies an object for the exists, get and remove operations."""

    bucket: str
    prefix: str
    filename: str

    @property
    def object_key(self) -> str:
        return build_object_key(self.prefix, self.filename)


@dataclass(frozen=True, slots=True)
class PutFileRequest:
    """Parameters of a multipart upload of a local file.

    ``part_size`` is in bytes; when unset it falls back to the configured
    default part size. ``content_type`` falls back to the configured default
    content type.
    """

    bucket: str
    prefix: str
    filename: str
    local_file: str | Path
    part_size: int | None = None
    content_type: str | None = None

    @property
    def object_key(self) -> str:
        return build_object_key(self.prefix, self.filename)
