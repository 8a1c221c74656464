"""Multipart upload of a local file.

This module coordinates a full multipart upload: it opens the session, reads
the source file sequentially into chunks, uploads the chunks on a bounded
worker pool, and finally completes or aborts the session. Every session that
was opened is terminated by exactly one complete or abort call.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable

from s3file.common.config import DEFAULT_CONTENT_TYPE
from s3file.domain.chunking import (
    DEFAULT_PART_SIZE,
    ChunkPlan,
    fit_part_size,
    plan_chunks,
    resolve_part_size,
)
from s3file.domain.requests import PutFileRequest
from s3file.infra.observability.metrics import UPLOADS
from s3file.infra.storage.client import MultipartUpload, StorageClient
from s3file.services.base import (
    AbortFailedError,
    CompleteFailedError,
    LocalIOError,
    OpenError,
    PartUploadError,
)
from s3file.services.part_uploader import PartResult, PartUploader

logger = logging.getLogger("s3file.upload")

PartUploaderFactory = Callable[..., PartUploader]


@dataclass(frozen=True, slots=True)
class UploadSummary:
    """Result of a completed multipart upload."""

    upload_id: str
    bucket: str
    object_key: str
    parts: int
    size_bytes: int


@dataclass(slots=True)
class _DispatchOutcome:
    results: list[PartResult] = field(default_factory=list)
    read_error: OSError | None = None
    bytes_read: int = 0


class MultipartUploadService:
    """Uploads local files through the multipart API of a storage client.

    At most ``max_concurrency`` parts are in flight at any time; the reader
    blocks until a slot frees up, which also bounds the memory held by
    chunks waiting to be sent.
    """

    def __init__(
        self,
        storage: StorageClient,
        *,
        max_concurrency: int = 8,
        default_part_size: int = DEFAULT_PART_SIZE,
        default_content_type: str = DEFAULT_CONTENT_TYPE,
        part_uploader_factory: PartUploaderFactory | None = None,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._storage = storage
        self._max_concurrency = int(max_concurrency)
        self._default_part_size = int(default_part_size)
        self._default_content_type = default_content_type
        self._part_uploader_factory = part_uploader_factory or PartUploader

    def put_file(self, request: PutFileRequest) -> UploadSummary:
        """Upload ``request.local_file`` to ``request.bucket``.

        Returns:
            UploadSummary describing the completed object.

        Raises:
            LocalIOError: The source file could not be stat'd, opened or read.
            OpenError: The multipart session could not be created.
            PartUploadError: At least one part failed; the session was aborted.
            CompleteFailedError: Completion failed; the session was aborted.
            AbortFailedError: The session could not be aborted and needs
                manual cleanup.
        """
        object_key = request.object_key
        path = Path(request.local_file)

        try:
            file_size = path.stat().st_size
        except OSError as exc:
            raise LocalIOError(f"Couldn't stat file {path}: {exc}") from exc

        part_size = fit_part_size(
            file_size,
            resolve_part_size(request.part_size, default=self._default_part_size),
        )
        content_type = (request.content_type or "").strip() or self._default_content_type
        plan = plan_chunks(file_size, part_size)

        try:
            handle = path.open("rb")
        except OSError as exc:
            raise LocalIOError(f"Couldn't open file {path}: {exc}") from exc

        with handle:
            try:
                upload = self._storage.init_multipart_upload(
                    bucket=request.bucket,
                    object_key=object_key,
                    content_type=content_type,
                    metadata={"key": object_key},
                )
            except Exception as exc:
                raise OpenError(
                    f"Couldn't create multipart upload for "
                    f"{request.bucket}/{object_key}: {exc}"
                ) from exc

            logger.info(
                "multipart_open upload_id=%s key=%s size=%s parts=%s part_size=%s",
                upload.upload_id,
                object_key,
                file_size,
                len(plan),
                part_size,
                extra={
                    "extra": {
                        "event": "multipart_open",
                        "upload_id": upload.upload_id,
                        "bucket": upload.bucket,
                        "object_key": object_key,
                        "size_bytes": file_size,
                        "parts": len(plan),
                        "part_size_bytes": part_size,
                    }
                },
            )

            try:
                outcome = self._dispatch(upload, handle, plan, path)
            except BaseException as exc:
                self._abort(upload, reason=exc)
                raise

        return self._decide(upload, outcome, path)

    def _dispatch(
        self,
        upload: MultipartUpload,
        handle: BinaryIO,
        plan: ChunkPlan,
        path: Path,
    ) -> _DispatchOutcome:
        uploader = self._part_uploader_factory(
            self._storage,
            bucket=upload.bucket,
            object_key=upload.object_key,
            upload_id=upload.upload_id,
        )
        workers = max(1, min(self._max_concurrency, len(plan)))
        slots = threading.BoundedSemaphore(workers)
        outcome = _DispatchOutcome()
        futures: dict[Future[PartResult], int] = {}

        def _release(_: Future[PartResult]) -> None:
            slots.release()

        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="s3file-part"
        ) as executor:
            for chunk in plan:
                # Take the slot before reading so at most ``workers`` chunks
                # are held in memory.
                slots.acquire()
                try:
                    body = handle.read(chunk.length)
                except OSError as exc:
                    slots.release()
                    outcome.read_error = exc
                    logger.error(
                        "local_read_failed upload_id=%s path=%s part=%s error=%s",
                        upload.upload_id,
                        path,
                        chunk.index,
                        exc,
                        extra={
                            "extra": {
                                "event": "local_read_failed",
                                "upload_id": upload.upload_id,
                                "path": str(path),
                                "part_number": chunk.index,
                                "error": str(exc),
                            }
                        },
                    )
                    break

                # An empty read before the plan is exhausted means EOF.
                if not body and chunk.length:
                    slots.release()
                    break

                try:
                    future = executor.submit(uploader.upload, chunk.index, body)
                except BaseException:
                    slots.release()
                    raise
                future.add_done_callback(_release)
                futures[future] = chunk.index
                outcome.bytes_read += len(body)

                if len(body) < chunk.length:
                    break

            wait(futures)

        for future, part_number in futures.items():
            exc = future.exception()
            if exc is not None:
                outcome.results.append(
                    PartResult(part_number=part_number, error=str(exc) or repr(exc))
                )
            else:
                outcome.results.append(future.result())
        outcome.results.sort(key=lambda r: r.part_number)
        return outcome

    def _decide(
        self, upload: MultipartUpload, outcome: _DispatchOutcome, path: Path
    ) -> UploadSummary:
        if outcome.read_error is not None:
            error = outcome.read_error
            self._abort(upload, reason=error)
            raise LocalIOError(f"Couldn't read file {path}: {error}") from error

        if not outcome.results:
            error = LocalIOError(f"File {path} ended before any data was read")
            self._abort(upload, reason=error)
            raise error

        failed = [result for result in outcome.results if not result.ok]
        if failed:
            part_error = PartUploadError(
                f"{len(failed)} of {len(outcome.results)} parts failed for "
                f"upload {upload.upload_id}: "
                + "; ".join(f"part {r.part_number}: {r.error}" for r in failed),
                failed,
            )
            self._abort(upload, reason=part_error)
            raise part_error

        parts = [result.as_completed_part() for result in outcome.results]
        try:
            self._storage.complete_multipart_upload(
                bucket=upload.bucket,
                object_key=upload.object_key,
                upload_id=upload.upload_id,
                parts=parts,
            )
        except Exception as exc:
            logger.error(
                "multipart_complete_failed upload_id=%s key=%s error=%s",
                upload.upload_id,
                upload.object_key,
                exc,
                extra={
                    "extra": {
                        "event": "multipart_complete_failed",
                        "upload_id": upload.upload_id,
                        "object_key": upload.object_key,
                        "error": str(exc),
                    }
                },
            )
            self._abort(upload, reason=exc)
            raise CompleteFailedError(
                f"Couldn't complete multipart upload {upload.upload_id}: {exc}"
            ) from exc

        UPLOADS.labels(outcome="completed").inc()
        logger.info(
            "multipart_complete upload_id=%s key=%s parts=%s size=%s",
            upload.upload_id,
            upload.object_key,
            len(parts),
            outcome.bytes_read,
            extra={
                "extra": {
                    "event": "multipart_complete",
                    "upload_id": upload.upload_id,
                    "object_key": upload.object_key,
                    "parts": len(parts),
                    "size_bytes": outcome.bytes_read,
                }
            },
        )
        return UploadSummary(
            upload_id=upload.upload_id,
            bucket=upload.bucket,
            object_key=upload.object_key,
            parts=len(parts),
            size_bytes=outcome.bytes_read,
        )

    def _abort(self, upload: MultipartUpload, *, reason: BaseException) -> None:
        try:
            self._storage.abort_multipart_upload(
                bucket=upload.bucket,
                object_key=upload.object_key,
                upload_id=upload.upload_id,
            )
        except Exception as exc:
            UPLOADS.labels(outcome="abort_failed").inc()
            logger.error(
                "multipart_abort_failed upload_id=%s key=%s error=%s",
                upload.upload_id,
                upload.object_key,
                exc,
                extra={
                    "extra": {
                        "event": "multipart_abort_failed",
                        "upload_id": upload.upload_id,
                        "object_key": upload.object_key,
                        "error": str(exc),
                    }
                },
            )
            raise AbortFailedError(
                upload_id=upload.upload_id,
                bucket=upload.bucket,
                object_key=upload.object_key,
                reason=reason,
            ) from exc

        UPLOADS.labels(outcome="aborted").inc()
        logger.warning(
            "multipart_abort upload_id=%s key=%s reason=%s",
            upload.upload_id,
            upload.object_key,
            reason,
            extra={
                "extra": {
                    "event": "multipart_abort",
                    "upload_id": upload.upload_id,
                    "object_key": upload.object_key,
                    "reason": str(reason),
                }
            },
        )
