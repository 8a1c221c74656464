from .base import (
    AbortFailedError,
    CompleteFailedError,
    LocalIOError,
    OpenError,
    PartUploadError,
    UploadError,
)
from .file_service import FileService, file_exists, get_file, put_file, remove_file
from .part_uploader import PartResult, PartUploader
from .upload_service import MultipartUploadService, UploadSummary

__all__ = [
    "FileService",
    "file_exists",
    "get_file",
    "put_file",
    "remove_file",
    "MultipartUploadService",
    "UploadSummary",
    "PartUploader",
    "PartResult",
    "UploadError",
    "OpenError",
    "LocalIOError",
    "PartUploadError",
    "CompleteFailedError",
    "AbortFailedError",
]
