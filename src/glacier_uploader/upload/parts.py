"""Upload of a single numbered part with bounded retry.

This module provides:
- PartUploader: Sends one chunk as one part of an open multipart upload
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from glacier_uploader.core.config import RETRIES, RETRY_DELAY
from glacier_uploader.core.errors import PartUploadError
from glacier_uploader.storage import CompletedPart, MultipartUpload, ObjectStorage, StorageError
from glacier_uploader.upload.retry import retry_with_fixed_delay

logger = logging.getLogger(__name__)


class PartUploader:
    """Uploads parts of a multipart upload, retrying transient failures.

    A part is attempted at most retries + 1 times. When every attempt
    fails the multipart upload is left open on the remote side.
    """

    def __init__(
        self,
        storage: ObjectStorage,
        retries: int = RETRIES,
        retry_delay: float = RETRY_DELAY,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        """Initialize the part uploader.

        Args:
            storage: Storage backend receiving the parts.
            retries: Additional attempts after a failed one.
            retry_delay: Seconds to wait between attempts.
            sleep: Function used to wait between attempts.
        """
        self._storage = storage
        self._retries = retries
        self._retry_delay = retry_delay
        self._sleep = sleep or time.sleep

    def upload_part(
        self, upload: MultipartUpload, data: bytes, part_number: int
    ) -> CompletedPart:
        """Upload one part and return its completion record.

        Args:
            upload: Open multipart upload.
            data: Part bytes.
            part_number: 1-based part number.

        Returns:
            CompletedPart carrying the service-issued part ETag.

        Raises:
            PartUploadError: If every attempt fails.
        """
        content_length = len(data)

        def do_upload() -> str:
            return self._storage.upload_part(
                upload,
                body=data,
                content_length=content_length,
                part_number=part_number,
            )

        try:
            etag = retry_with_fixed_delay(
                func=do_upload,
                max_retries=self._retries,
                delay=self._retry_delay,
                retryable_exceptions=(StorageError,),
                sleep=self._sleep,
                description=f"Part {part_number}",
            )
        except StorageError as e:
            raise PartUploadError(
                part_number=part_number,
                upload_id=upload.upload_id,
                attempts=self._retries + 1,
                cause=e,
            ) from e

        logger.debug(f"Uploaded part {part_number} ({content_length} bytes)")
        return CompletedPart(part_number=part_number, etag=etag)
