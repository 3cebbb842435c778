"""Upload module - Part uploads with retry and the multipart orchestrator.

This module provides:
- GlacierUploader, upload_file: Full multipart upload of one file
- PartUploader: Single part upload with bounded retry
- retry_with_fixed_delay: Retry helper
- UploadProgress, UploadResult: Progress and result types
"""

from glacier_uploader.upload.orchestrator import GlacierUploader, upload_file
from glacier_uploader.upload.parts import PartUploader
from glacier_uploader.upload.retry import retry_with_fixed_delay
from glacier_uploader.upload.types import (
    ProgressCallback,
    UploadProgress,
    UploadResult,
)

__all__ = [
    "GlacierUploader",
    "PartUploader",
    "ProgressCallback",
    "UploadProgress",
    "UploadResult",
    "retry_with_fixed_delay",
    "upload_file",
]
