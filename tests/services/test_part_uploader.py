from __future__ import annotations

import pytest
from prometheus_client import REGISTRY

from s3file.infra.storage.client import CompletedPart
from s3file.services.part_uploader import PartResult, PartUploader


@pytest.fixture()
def upload(mock_storage):
    return mock_storage.init_multipart_upload(bucket="b", object_key="k")


@pytest.fixture()
def uploader(mock_storage, upload):
    return PartUploader(
        mock_storage,
        bucket=upload.bucket,
        object_key=upload.object_key,
        upload_id=upload.upload_id,
    )


def _parts_total(outcome: str) -> float:
    return (
        REGISTRY.get_sample_value("s3file_part_uploads_total", {"outcome": outcome})
        or 0.0
    )


def test_successful_part_carries_etag(uploader, mock_storage, upload):
    before = _parts_total("success")

    result = uploader.upload(1, b"abc")

    assert result == PartResult(part_number=1, etag="etag-1")
    assert result.ok
    assert mock_storage.uploads[upload.upload_id]["parts"][1] == b"abc"
    assert _parts_total("success") == before + 1


def test_failed_part_is_reported_not_raised(uploader, mock_storage):
    mock_storage.fail_parts = {4}
    before = _parts_total("failed")

    result = uploader.upload(4, b"abc")

    assert not result.ok
    assert result.etag is None
    assert "part 4" in result.error
    assert mock_storage.part_calls == [4]
    assert _parts_total("failed") == before + 1


def test_as_completed_part():
    assert PartResult(part_number=2, etag="e").as_completed_part() == CompletedPart(
        part_number=2, etag="e"
    )
    with pytest.raises(ValueError):
        PartResult(part_number=2, error="boom").as_completed_part()
