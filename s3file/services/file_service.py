"""File-level operations on object storage.

``FileService`` is the entry point of the library: it checks, downloads,
removes and uploads files identified by bucket, prefix and filename.
"""

from __future__ import annotations

import logging

from s3file.common.config import Settings, get_settings
from s3file.domain.requests import FileRequest, PutFileRequest
from s3file.infra.storage.client import (
    ObjectNotFoundError,
    StorageClient,
    StorageError,
)
from s3file.infra.storage.s3_client import S3StorageClient
from s3file.services.upload_service import MultipartUploadService, UploadSummary

logger = logging.getLogger("s3file.files")


class FileService:
    """Application service for files stored in a bucket.

    The storage client is built from ``settings`` unless one is injected.
    Settings are resolved once, by the caller or by ``get_settings``.
    """

    def __init__(
        self,
        storage: StorageClient | None = None,
        *,
        settings: Settings | None = None,
        uploader: MultipartUploadService | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._storage = storage or S3StorageClient(settings=self._settings)
        self._uploader = uploader or MultipartUploadService(
            self._storage,
            max_concurrency=self._settings.MAX_CONCURRENCY,
            default_part_size=self._settings.DEFAULT_PART_SIZE,
            default_content_type=self._settings.DEFAULT_CONTENT_TYPE,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    def file_exists(self, request: FileRequest) -> bool:
        """Return True if the requested object can be fetched.

        A missing object is not an error. Other storage failures are logged
        and reported as ``False`` as well.
        """
        object_key = request.object_key
        try:
            self._storage.head_object(bucket=request.bucket, object_key=object_key)
        except ObjectNotFoundError:
            return False
        except StorageError as exc:
            logger.warning(
                "file_exists_failed bucket=%s key=%s error=%s",
                request.bucket,
                object_key,
                exc,
                extra={
                    "extra": {
                        "event": "file_exists_failed",
                        "bucket": request.bucket,
                        "object_key": object_key,
                        "error": str(exc),
                    }
                },
            )
            return False
        return True

    def get_file(self, request: FileRequest) -> bytes:
        """Download the requested object.

        Raises:
            ObjectNotFoundError: If the object doesn't exist.
            StorageError: If the download fails.
        """
        return self._storage.get_object(
            bucket=request.bucket, object_key=request.object_key
        )

    def get_text(self, request: FileRequest, *, encoding: str = "utf-8") -> str:
        return self.get_file(request).decode(encoding)

    def remove_file(self, request: FileRequest) -> None:
        """Delete the requested object.

        Raises:
            StorageError: If the delete fails.
        """
        object_key = request.object_key
        self._storage.delete_object(bucket=request.bucket, object_key=object_key)
        logger.info(
            "file_removed bucket=%s key=%s",
            request.bucket,
            object_key,
            extra={
                "extra": {
                    "event": "file_removed",
                    "bucket": request.bucket,
                    "object_key": object_key,
                }
            },
        )

    def put_file(self, request: PutFileRequest) -> UploadSummary:
        """Upload a local file with a multipart upload.

        See ``MultipartUploadService.put_file`` for the raised errors.
        """
        return self._uploader.put_file(request)


def file_exists(request: FileRequest, *, settings: Settings | None = None) -> bool:
    return FileService(settings=settings).file_exists(request)


def get_file(request: FileRequest, *, settings: Settings | None = None) -> bytes:
    return FileService(settings=settings).get_file(request)


def remove_file(request: FileRequest, *, settings: Settings | None = None) -> None:
    FileService(settings=settings).remove_file(request)


def put_file(
    request: PutFileRequest, *, settings: Settings | None = None
) -> UploadSummary:
    return FileService(settings=settings).put_file(request)
