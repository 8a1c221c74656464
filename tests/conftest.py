from __future__ import annotations

import os
from pathlib import Path

import pytest

from s3file.common.config import Settings, get_settings
from s3file.domain.chunking import MIN_PART_SIZE
from tests.services.mock_storage import MockStorageClient

# Keep tests independent from a developer's shell and .env.
for _name in (
    "AWS_REGION",
    "S3_ENDPOINT_URL",
    "S3_ADDRESSING_STYLE",
    "S3FILE_DEFAULT_PART_SIZE",
    "S3FILE_MAX_CONCURRENCY",
    "S3FILE_DEFAULT_CONTENT_TYPE",
):
    os.environ.pop(_name, None)
get_settings.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def settings() -> Settings:
    return Settings(DEFAULT_PART_SIZE=MIN_PART_SIZE, MAX_CONCURRENCY=4)


@pytest.fixture()
def mock_storage() -> MockStorageClient:
    return MockStorageClient()


@pytest.fixture()
def make_file(tmp_path: Path):
    """Write a file of ``size`` bytes with a recognizable byte pattern."""

    def _make(size: int, name: str = "source.bin") -> Path:
        path = tmp_path / name
        pattern = bytes(range(256))
        repeats, rest = divmod(size, len(pattern))
        path.write_bytes(pattern * repeats + pattern[:rest])
        return path

    return _make
