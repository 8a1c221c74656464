from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from s3file.services.part_uploader import PartResult


class UploadError(Exception):
    """Base class for failures of a multipart file upload."""


class OpenError(UploadError):
    """Raised when the multipart session could not be created."""


class LocalIOError(UploadError):
    """Raised when the local source file could not be stat'd, opened or read."""


class PartUploadError(UploadError):
    """Raised when one or more parts failed; the session has been aborted."""

    def __init__(self, message: str, failed_parts: Sequence["PartResult"]):
        super().__init__(message)
        self.failed_parts = tuple(failed_parts)


class CompleteFailedError(UploadError):
    """Raised when completion failed after every part succeeded.

    The session has been aborted by the time this is raised.
    """


class AbortFailedError(UploadError):
    """Raised when a session could not be aborted.

    The upload is left open on the store and needs manual cleanup. ``reason``
    holds the failure that made the abort necessary.
    """

    def __init__(
        self,
        *,
        upload_id: str,
        bucket: str,
        object_key: str,
        reason: BaseException | None = None,
    ):
        super().__init__(
            f"Couldn't abort the failed multipart upload for {bucket}/{object_key}. "
            f"Abort it manually. ID: {upload_id}"
        )
        self.upload_id = upload_id
        self.bucket = bucket
        self.object_key = object_key
        self.reason = reason
