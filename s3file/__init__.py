"""Read, remove and upload files in S3-compatible object storage."""

from s3file.common.config import Settings, get_settings
from s3file.domain.requests import FileRequest, PutFileRequest
from s3file.infra.storage.client import ObjectNotFoundError, StorageError
from s3file.services import (
    AbortFailedError,
    CompleteFailedError,
    FileService,
    LocalIOError,
    MultipartUploadService,
    OpenError,
    PartUploadError,
    UploadError,
    UploadSummary,
    file_exists,
    get_file,
    put_file,
    remove_file,
)

__all__ = [
    "AbortFailedError",
    "CompleteFailedError",
    "FileRequest",
    "FileService",
    "LocalIOError",
    "MultipartUploadService",
    "ObjectNotFoundError",
    "OpenError",
    "PartUploadError",
    "PutFileRequest",
    "Settings",
    "StorageError",
    "UploadError",
    "UploadSummary",
    "file_exists",
    "get_file",
    "get_settings",
    "put_file",
    "remove_file",
]
