from __future__ import annotations

import pytest

from s3file.common import config as config_module
from s3file.common.config import Settings, get_settings
from s3file.domain.chunking import GiB, MiB


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    monkeypatch.setattr(config_module, "ENV_FILE", tmp_path / ".env")
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield
    get_settings.cache_clear()  # type: ignore[attr-defined]


def test_defaults():
    settings = Settings.from_environment()

    assert settings.AWS_REGION == "eu-west-1"
    assert settings.S3_ENDPOINT_URL is None
    assert settings.DEFAULT_PART_SIZE == 1 * GiB
    assert settings.MAX_CONCURRENCY == 8
    assert settings.DEFAULT_CONTENT_TYPE == "text/plain; charset=utf-8"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("AWS_REGION", "us-west-2")
    monkeypatch.setenv("S3_ENDPOINT_URL", "http://localhost:9000")
    monkeypatch.setenv("S3_ADDRESSING_STYLE", "PATH")
    monkeypatch.setenv("S3FILE_DEFAULT_PART_SIZE", str(64 * MiB))
    monkeypatch.setenv("S3FILE_MAX_CONCURRENCY", "3")
    monkeypatch.setenv("S3FILE_DEFAULT_CONTENT_TYPE", "application/json")

    settings = Settings.from_environment()

    assert settings.AWS_REGION == "us-west-2"
    assert settings.S3_ENDPOINT_URL == "http://localhost:9000"
    assert settings.S3_ADDRESSING_STYLE == "path"
    assert settings.DEFAULT_PART_SIZE == 64 * MiB
    assert settings.MAX_CONCURRENCY == 3
    assert settings.DEFAULT_CONTENT_TYPE == "application/json"


def test_empty_region_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("AWS_REGION", "")

    assert Settings.from_environment().AWS_REGION == "eu-west-1"


def test_env_file_does_not_override_environment(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text(
        "# comment\nAWS_REGION='ap-south-1'\nS3FILE_MAX_CONCURRENCY=2\n",
        encoding="utf-8",
    )
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.setenv("S3FILE_MAX_CONCURRENCY", "5")

    settings = Settings.from_environment()

    assert settings.AWS_REGION == "ap-south-1"
    assert settings.MAX_CONCURRENCY == 5


@pytest.mark.parametrize(
    "kwargs",
    [
        {"MAX_CONCURRENCY": 0},
        {"DEFAULT_PART_SIZE": 1024},
        {"S3_ADDRESSING_STYLE": "sideways"},
    ],
)
def test_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        Settings(**kwargs)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
