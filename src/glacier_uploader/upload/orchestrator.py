"""Multipart upload of one file to a cold-storage class.

This module provides:
- GlacierUploader: Drives create -> upload parts -> complete for one file
- upload_file: Convenience wrapper building storage from the configuration
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import BinaryIO

from glacier_uploader.core.checksum import ETagAccumulator
from glacier_uploader.core.chunking import count_parts, read_chunks
from glacier_uploader.core.config import UploadConfig
from glacier_uploader.core.errors import (
    LocalFileError,
    ResumeNotSupportedError,
    TransactionError,
)
from glacier_uploader.core.types import DEEP_ARCHIVE, UploadState
from glacier_uploader.storage import (
    CompletedPart,
    CompletedUpload,
    MultipartUpload,
    ObjectStorage,
    StorageError,
    create_storage,
)
from glacier_uploader.upload.parts import PartUploader
from glacier_uploader.upload.types import (
    ProgressCallback,
    UploadProgress,
    UploadResult,
)

logger = logging.getLogger(__name__)

# Callback invoked once the multipart upload exists on the remote side
UploadStartedCallback = Callable[[MultipartUpload, int], None]


class GlacierUploader:
    """Uploads a single file as a multipart upload.

    Parts are read, digested and uploaded strictly one at a time in
    part-number order. A part that fails after all retries aborts the
    whole operation and leaves the multipart upload open remotely.
    """

    def __init__(
        self,
        storage: ObjectStorage,
        config: UploadConfig,
        progress_callback: ProgressCallback | None = None,
        on_started: UploadStartedCallback | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        """Initialize the uploader.

        Args:
            storage: Storage backend for the multipart upload calls.
            config: Upload configuration.
            progress_callback: Optional callback called after every part.
            on_started: Optional callback receiving the new upload and the
                expected part count.
            sleep: Function used to wait between part retries.
        """
        self._storage = storage
        self._config = config
        self._progress_callback = progress_callback
        self._on_started = on_started
        self._parts = PartUploader(
            storage,
            retries=config.retries,
            retry_delay=config.retry_delay,
            sleep=sleep,
        )
        self._state = UploadState.IDLE

    @property
    def state(self) -> UploadState:
        """Current lifecycle state."""
        return self._state

    def upload(self) -> UploadResult:
        """Upload the configured file.

        Returns:
            UploadResult with the object location and both ETags. An ETag
            mismatch is reported through the result, not raised.

        Raises:
            ResumeNotSupportedError: If an upload ID was configured.
            LocalFileError: If the file cannot be opened, stat'ed or read.
            TransactionError: If the upload cannot be created or completed.
            PartUploadError: If a part fails after all retries.
        """
        if self._state is not UploadState.IDLE:
            raise RuntimeError(f"Uploader already used (state: {self._state.value})")

        try:
            return self._run()
        except Exception:
            self._state = UploadState.FAILED
            raise

    def _run(self) -> UploadResult:
        config = self._config
        if config.wants_resume:
            raise ResumeNotSupportedError(config.upload_id)

        fileobj = self._open(config)
        with fileobj:
            try:
                file_size = os.fstat(fileobj.fileno()).st_size
            except OSError as e:
                raise LocalFileError(f"Failed to stat {config.file_path}: {e}") from e

            logger.info(f"File to upload: {config.file_path} ({file_size} bytes)")
            if file_size == 0:
                raise LocalFileError(f"Refusing to upload empty file: {config.file_path}")

            upload = self._create(config)
            total_parts = count_parts(file_size, config.part_size)
            if self._on_started:
                self._on_started(upload, total_parts)

            parts, local_etag = self._upload_parts(fileobj, upload, file_size, total_parts)

        completed = self._complete(upload, parts)
        result = UploadResult(
            bucket=upload.bucket,
            object_key=upload.object_key,
            upload_id=upload.upload_id,
            location=completed.location,
            remote_etag=completed.etag,
            local_etag=local_etag,
            size=file_size,
            parts=parts,
        )

        if result.etags_match:
            logger.info(f"ETags match: {local_etag}")
        else:
            logger.info(
                f"ETags don't match! AWS: {result.remote_etag} Ours: {result.local_etag}"
            )

        logger.info(
            f"Uploaded {upload.object_key} in {result.part_count} parts to {result.location}"
        )
        return result

    @staticmethod
    def _open(config: UploadConfig) -> BinaryIO:
        try:
            return open(config.file_path, "rb")
        except OSError as e:
            raise LocalFileError(f"Failed to open {config.file_path}: {e}") from e

    def _create(self, config: UploadConfig) -> MultipartUpload:
        try:
            upload = self._storage.create_multipart_upload(
                bucket=config.bucket,
                object_key=config.object_key,
                storage_class=DEEP_ARCHIVE,
            )
        except StorageError as e:
            raise TransactionError("open", str(e)) from e

        self._state = UploadState.ACTIVE
        logger.info(f"Upload ID: {upload.upload_id} ({self._storage.location})")
        return upload

    def _upload_parts(
        self,
        fileobj: BinaryIO,
        upload: MultipartUpload,
        file_size: int,
        total_parts: int,
    ) -> tuple[list[CompletedPart], str]:
        """Upload every chunk in order and return the parts and local ETag."""
        accumulator = ETagAccumulator()
        completed: list[CompletedPart] = []
        bytes_transferred = 0

        for chunk in read_chunks(fileobj, self._config.part_size):
            accumulator.add(chunk.data)

            self._state = UploadState.UPLOADING_PART
            completed.append(self._parts.upload_part(upload, chunk.data, chunk.part_number))
            self._state = UploadState.ACTIVE

            bytes_transferred += chunk.size
            if self._progress_callback:
                self._progress_callback(UploadProgress(
                    file_path=str(self._config.file_path),
                    file_size=file_size,
                    current_part=chunk.part_number,
                    total_parts=total_parts,
                    bytes_transferred=bytes_transferred,
                ))

        return completed, accumulator.finalize()

    def _complete(
        self, upload: MultipartUpload, parts: list[CompletedPart]
    ) -> CompletedUpload:
        self._state = UploadState.COMPLETING
        try:
            completed = self._storage.complete_multipart_upload(upload, parts)
        except StorageError as e:
            raise TransactionError("complete", str(e)) from e

        self._state = UploadState.COMPLETED
        return completed


def upload_file(
    config: UploadConfig,
    storage: ObjectStorage | None = None,
    progress_callback: ProgressCallback | None = None,
    on_started: UploadStartedCallback | None = None,
) -> UploadResult:
    """Upload one file, building an S3 client from the configuration if needed.

    Args:
        config: Upload configuration.
        storage: Storage backend (default: S3Storage from config).
        progress_callback: Optional callback called after every part.
        on_started: Optional callback receiving the new upload.

    Returns:
        UploadResult for the finished object.

    Raises:
        TransactionError: If the storage client cannot be built.
    """
    if config.wants_resume:
        # Checked before any client is built
        raise ResumeNotSupportedError(config.upload_id)

    if storage is None:
        try:
            storage = create_storage(config)
        except StorageError as e:
            raise TransactionError("open", str(e)) from e

    uploader = GlacierUploader(
        storage,
        config,
        progress_callback=progress_callback,
        on_started=on_started,
    )
    return uploader.upload()
