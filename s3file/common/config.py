from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from s3file.domain.chunking import DEFAULT_PART_SIZE, MIN_PART_SIZE

ENV_FILE = Path(".env")

DEFAULT_REGION = "eu-west-1"
DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"
ADDRESSING_STYLES: tuple[str, ...] = ("auto", "path", "virtual")


def _load_env_file() -> None:
    if not ENV_FILE.exists():
        return
    for raw_line in ENV_FILE.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _as_optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class Settings:
    AWS_REGION: str = DEFAULT_REGION
    S3_ENDPOINT_URL: str | None = None
    S3_ADDRESSING_STYLE: str = "auto"
    DEFAULT_PART_SIZE: int = DEFAULT_PART_SIZE
    MAX_CONCURRENCY: int = 8
    DEFAULT_CONTENT_TYPE: str = DEFAULT_CONTENT_TYPE

    def __post_init__(self) -> None:
        if not self.AWS_REGION:
            self.AWS_REGION = DEFAULT_REGION
        if self.MAX_CONCURRENCY < 1:
            raise ValueError("S3FILE_MAX_CONCURRENCY must be at least 1.")
        if self.DEFAULT_PART_SIZE < MIN_PART_SIZE:
            raise ValueError(
                f"S3FILE_DEFAULT_PART_SIZE must be at least {MIN_PART_SIZE} bytes."
            )
        style = (self.S3_ADDRESSING_STYLE or "auto").strip().lower()
        if style not in ADDRESSING_STYLES:
            raise ValueError(
                "S3_ADDRESSING_STYLE must be one of: " + ", ".join(ADDRESSING_STYLES)
            )
        self.S3_ADDRESSING_STYLE = style

    @classmethod
    def from_environment(cls) -> "Settings":
        _load_env_file()
        return cls(
            AWS_REGION=_as_optional(os.environ.get("AWS_REGION")) or cls.AWS_REGION,
            S3_ENDPOINT_URL=_as_optional(os.environ.get("S3_ENDPOINT_URL")),
            S3_ADDRESSING_STYLE=os.environ.get(
                "S3_ADDRESSING_STYLE", cls.S3_ADDRESSING_STYLE
            ),
            DEFAULT_PART_SIZE=int(
                os.environ.get("S3FILE_DEFAULT_PART_SIZE", cls.DEFAULT_PART_SIZE)
            ),
            MAX_CONCURRENCY=int(
                os.environ.get("S3FILE_MAX_CONCURRENCY", cls.MAX_CONCURRENCY)
            ),
            DEFAULT_CONTENT_TYPE=_as_optional(
                os.environ.get("S3FILE_DEFAULT_CONTENT_TYPE")
            )
            or cls.DEFAULT_CONTENT_TYPE,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_environment()
