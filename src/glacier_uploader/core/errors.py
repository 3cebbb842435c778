"""Exception classes for glacier_uploader.

This module provides:
- GlacierUploadError: Base class for every fatal upload error
- ConfigurationError: Invalid upload configuration
- ResumeNotSupportedError: A resume was requested
- LocalFileError, ChunkReadError: Source file could not be opened, stat'ed or read
- PartUploadError: A part failed after all retries
- TransactionError: The multipart upload could not be created or completed
"""

from __future__ import annotations


class GlacierUploadError(Exception):
    """Base exception for upload errors."""


class ConfigurationError(GlacierUploadError, ValueError):
    """Invalid upload configuration."""


class ResumeNotSupportedError(GlacierUploadError):
    """A multipart upload ID was given but resuming is not implemented."""

    def __init__(self, upload_id: str) -> None:
        self.upload_id = upload_id
        super().__init__(
            f"Cannot resume upload {upload_id}: resuming uploads is not supported yet."
        )


class LocalFileError(GlacierUploadError):
    """Failed to open or inspect the source file."""


class ChunkReadError(LocalFileError):
    """Failed to read a chunk from the source file."""


class PartUploadError(GlacierUploadError):
    """A part could not be uploaded after all retries.

    The multipart upload is left open on the remote side.

    Attributes:
        part_number: Part that failed
        upload_id: Multipart upload the part belonged to
        attempts: Number of attempts made
    """

    def __init__(self, part_number: int, upload_id: str, attempts: int, cause: Exception) -> None:
        self.part_number = part_number
        self.upload_id = upload_id
        self.attempts = attempts
        super().__init__(
            f"Failed to upload part {part_number} after {attempts} attempts. "
            f"Upload {upload_id} was not aborted; resuming it is not implemented yet. "
            f"Error: {cause}"
        )


class TransactionError(GlacierUploadError):
    """Failed to create or complete the multipart upload.

    Attributes:
        phase: "open" or "complete"
    """

    def __init__(self, phase: str, message: str) -> None:
        self.phase = phase
        super().__init__(message)
