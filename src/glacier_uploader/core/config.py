"""Configuration for a single upload.

This module defines the configuration passed into the uploader. Nothing is
read from ambient process state except the optional S3 connection settings
in storage_settings_from_env().
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from glacier_uploader.core.chunking import PART_SIZE
from glacier_uploader.core.errors import ConfigurationError

DEFAULT_REGION = "us-east-1"
RETRIES = 2
RETRY_DELAY = 15.0  # seconds


@dataclass
class UploadConfig:
    """Configuration for uploading one file.

    Attributes:
        bucket: Target S3 bucket name.
        file_path: Local file to upload.
        region: AWS region (default us-east-1).
        upload_id: Multipart upload ID to resume. Resuming is not supported;
            any non-empty value is rejected by the uploader.
        part_size: Size of every part except the last.
        retries: Additional attempts per part after the first failure.
        retry_delay: Seconds to wait between part attempts.
        endpoint_url: Custom endpoint URL (for MinIO, LocalStack, etc.).
        access_key: AWS access key ID.
        secret_key: AWS secret access key.
    """

    bucket: str
    file_path: Path
    region: str = DEFAULT_REGION
    upload_id: str | None = None
    part_size: int = PART_SIZE
    retries: int = RETRIES
    retry_delay: float = RETRY_DELAY
    endpoint_url: str | None = None
    access_key: str | None = None
    secret_key: str | None = None

    def __post_init__(self) -> None:
        """Normalize and validate fields."""
        self.file_path = Path(self.file_path)
        self.upload_id = self.upload_id or None
        self.region = self.region or DEFAULT_REGION
        if not self.bucket:
            raise ConfigurationError("bucket is required")
        if self.part_size <= 0:
            raise ConfigurationError(f"part_size must be positive, got {self.part_size}")
        if self.retries < 0:
            raise ConfigurationError(f"retries must not be negative, got {self.retries}")

    @property
    def object_key(self) -> str:
        """Object key derived from the file's base name."""
        return self.file_path.name

    @property
    def wants_resume(self) -> bool:
        """Check if a resume was requested."""
        return self.upload_id is not None


def storage_settings_from_env(
    environ: Mapping[str, str] | None = None,
) -> dict[str, str | None]:
    """Read S3 connection settings from environment variables.

    Unset variables map to None, leaving boto3's default credential chain
    in charge.

    Returns:
        Dict with endpoint_url, access_key and secret_key.
    """
    env = os.environ if environ is None else environ
    return {
        "endpoint_url": env.get("GLACIER_UPLOADER_S3_ENDPOINT") or None,
        "access_key": env.get("GLACIER_UPLOADER_S3_ACCESS_KEY") or None,
        "secret_key": env.get("GLACIER_UPLOADER_S3_SECRET_KEY") or None,
    }
