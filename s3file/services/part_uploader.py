"""Upload of a single multipart part.

Each call sends exactly one part and reports the outcome as a ``PartResult``
instead of raising, so the coordinator can let sibling parts finish before it
decides whether to complete or abort the session.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from s3file.infra.observability.metrics import (
    PART_LATENCY,
    PART_UPLOADS,
    UPLOADED_BYTES,
)
from s3file.infra.storage.client import CompletedPart, StorageClient

logger = logging.getLogger("s3file.upload")


@dataclass(frozen=True, slots=True)
class PartResult:
    """Outcome of uploading one part."""

    part_number: int
    etag: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_completed_part(self) -> CompletedPart:
        if not self.ok or self.etag is None:
            raise ValueError(f"Part {self.part_number} was not uploaded")
        return CompletedPart(part_number=self.part_number, etag=self.etag)


class PartUploader:
    """Uploads parts of one multipart session.

    Instances hold no mutable state and may be shared by worker threads.
    Subclass and override ``upload`` to add retries or timeouts.
    """

    def __init__(
        self,
        storage: StorageClient,
        *,
        bucket: str,
        object_key: str,
        upload_id: str,
    ) -> None:
        self._storage = storage
        self.bucket = bucket
        self.object_key = object_key
        self.upload_id = upload_id

    def upload(self, part_number: int, body: bytes) -> PartResult:
        started = time.perf_counter()
        try:
            etag = self._storage.upload_part(
                bucket=self.bucket,
                object_key=self.object_key,
                upload_id=self.upload_id,
                part_number=part_number,
                body=body,
            )
        except Exception as exc:
            PART_UPLOADS.labels(outcome="failed").inc()
            logger.warning(
                "part_upload_failed upload_id=%s part=%s error=%s",
                self.upload_id,
                part_number,
                exc,
                extra={
                    "extra": {
                        "event": "part_upload_failed",
                        "upload_id": self.upload_id,
                        "object_key": self.object_key,
                        "part_number": part_number,
                        "error": str(exc),
                    }
                },
            )
            return PartResult(part_number=part_number, error=str(exc) or repr(exc))
        finally:
            PART_LATENCY.observe(time.perf_counter() - started)

        PART_UPLOADS.labels(outcome="success").inc()
        UPLOADED_BYTES.inc(len(body))
        return PartResult(part_number=part_number, etag=etag)
