"""Shared fixtures for glacier_uploader tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest

from glacier_uploader.storage import CompletedUpload, MultipartUpload, ObjectStorage


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo handlers installed by the CLI so caplog keeps working."""
    yield
    package_logger = logging.getLogger("glacier_uploader")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def fake_storage() -> MagicMock:
    """Storage mock that accepts every part.

    Part ETags are '"etag-<n>"'. Completion returns a quoted ETag that
    tests override through complete_multipart_upload.return_value.
    """
    storage = MagicMock(spec=ObjectStorage)
    storage.create_multipart_upload.side_effect = (
        lambda bucket, object_key, storage_class: MultipartUpload(
            bucket=bucket, object_key=object_key, upload_id="upload-123"
        )
    )
    storage.upload_part.side_effect = (
        lambda upload, body, content_length, part_number: f'"etag-{part_number}"'
    )
    storage.complete_multipart_upload.return_value = CompletedUpload(
        etag='"unset-0"', location="https://test-bucket.s3.amazonaws.com/data.bin"
    )
    return storage
