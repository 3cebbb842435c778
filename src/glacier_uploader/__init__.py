"""s3-glacier-uploader - Multipart uploads of large files to S3 Glacier Deep Archive."""

from glacier_uploader.core import (
    PART_SIZE,
    GlacierUploadError,
    UploadConfig,
)
from glacier_uploader.upload import GlacierUploader, UploadResult, upload_file

__all__ = [
    "PART_SIZE",
    "GlacierUploadError",
    "GlacierUploader",
    "UploadConfig",
    "UploadResult",
    "upload_file",
]
