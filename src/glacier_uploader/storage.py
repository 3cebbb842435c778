"""Object storage abstraction for multipart uploads.

This module provides:
- Abstract interface for the three multipart upload calls
- S3Storage for AWS S3 and S3-compatible services (MinIO, LocalStack)
- create_storage factory building a client from an UploadConfig
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any

    from glacier_uploader.core.config import UploadConfig


class StorageError(Exception):
    """Raised when a remote storage call fails."""


@dataclass(frozen=True)
class MultipartUpload:
    """An open multipart upload."""

    bucket: str
    object_key: str
    upload_id: str


@dataclass(frozen=True)
class CompletedPart:
    """A part accepted by the remote service."""

    part_number: int
    etag: str


@dataclass(frozen=True)
class CompletedUpload:
    """Result of completing a multipart upload.

    Attributes:
        etag: Object ETag as returned by the service (usually quoted).
        location: URL of the finished object.
    """

    etag: str
    location: str


class ObjectStorage(ABC):
    """Abstract interface for multipart object storage."""

    @property
    @abstractmethod
    def location(self) -> str:
        """Return a human-readable description of the storage endpoint."""

    @abstractmethod
    def create_multipart_upload(
        self, bucket: str, object_key: str, storage_class: str
    ) -> MultipartUpload:
        """Start a multipart upload.

        Args:
            bucket: Target bucket name.
            object_key: Key of the object to create.
            storage_class: Storage class of the finished object.

        Returns:
            MultipartUpload identifying the new upload.

        Raises:
            StorageError: If the call fails.
        """

    @abstractmethod
    def upload_part(
        self,
        upload: MultipartUpload,
        body: bytes,
        content_length: int,
        part_number: int,
    ) -> str:
        """Upload one part.

        Args:
            upload: Upload the part belongs to.
            body: Part bytes.
            content_length: Exact byte length of body.
            part_number: 1-based part number.

        Returns:
            ETag issued by the service for this part.

        Raises:
            StorageError: If the call fails.
        """

    @abstractmethod
    def complete_multipart_upload(
        self, upload: MultipartUpload, parts: Sequence[CompletedPart]
    ) -> CompletedUpload:
        """Complete a multipart upload.

        Args:
            upload: Upload to complete.
            parts: Completed parts. Submitted sorted by part number.

        Returns:
            CompletedUpload with the object ETag and location.

        Raises:
            StorageError: If the call fails.
        """


class S3Storage(ObjectStorage):
    """S3-compatible storage (AWS, MinIO, LocalStack, etc.)."""

    def __init__(
        self,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
    ) -> None:
        """Initialize S3 storage.

        Args:
            region: AWS region (default: us-east-1).
            endpoint_url: Custom endpoint URL (for MinIO, LocalStack, etc.).
            access_key: AWS access key ID.
            secret_key: AWS secret access key.

        Raises:
            StorageError: If the client cannot be built (e.g. invalid region
                or endpoint).
        """
        import boto3
        from botocore.exceptions import BotoCoreError

        self._region = region
        self._endpoint_url = endpoint_url
        try:
            self._client: Any = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                region_name=region,
            )
        except (BotoCoreError, ValueError) as e:
            raise StorageError(f"Failed to create S3 client: {e}") from e

    @property
    def location(self) -> str:
        """Return the S3 endpoint location."""
        if self._endpoint_url:
            return f"S3: {self._endpoint_url} ({self._region})"
        return f"S3: {self._region}"

    def create_multipart_upload(
        self, bucket: str, object_key: str, storage_class: str
    ) -> MultipartUpload:
        """Start a multipart upload."""
        from botocore.exceptions import BotoCoreError, ClientError

        try:
            response = self._client.create_multipart_upload(
                Bucket=bucket,
                Key=object_key,
                StorageClass=storage_class,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to create multipart upload: {e}") from e

        upload_id = response.get("UploadId")
        if not upload_id:
            raise StorageError("S3 response missing UploadId")

        return MultipartUpload(bucket=bucket, object_key=object_key, upload_id=str(upload_id))

    def upload_part(
        self,
        upload: MultipartUpload,
        body: bytes,
        content_length: int,
        part_number: int,
    ) -> str:
        """Upload one part."""
        from botocore.exceptions import BotoCoreError, ClientError

        try:
            response = self._client.upload_part(
                Bucket=upload.bucket,
                Key=upload.object_key,
                UploadId=upload.upload_id,
                PartNumber=part_number,
                ContentLength=content_length,
                Body=body,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to upload part {part_number}: {e}") from e

        etag = response.get("ETag")
        if not etag:
            raise StorageError(f"S3 response missing ETag for part {part_number}")
        return str(etag)

    def complete_multipart_upload(
        self, upload: MultipartUpload, parts: Sequence[CompletedPart]
    ) -> CompletedUpload:
        """Complete a multipart upload."""
        from botocore.exceptions import BotoCoreError, ClientError

        multipart_payload = {
            "Parts": [
                {"ETag": part.etag, "PartNumber": part.part_number}
                for part in sorted(parts, key=lambda p: p.part_number)
            ]
        }

        try:
            response = self._client.complete_multipart_upload(
                Bucket=upload.bucket,
                Key=upload.object_key,
                UploadId=upload.upload_id,
                MultipartUpload=multipart_payload,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to complete multipart upload: {e}") from e

        return CompletedUpload(
            etag=str(response.get("ETag", "")),
            location=str(response.get("Location", "")),
        )


def create_storage(config: UploadConfig) -> ObjectStorage:
    """Factory function to create storage from an upload configuration.

    Args:
        config: Upload configuration with region and optional endpoint
            and credentials.

    Returns:
        Configured ObjectStorage instance.
    """
    return S3Storage(
        region=config.region,
        endpoint_url=config.endpoint_url,
        access_key=config.access_key,
        secret_key=config.secret_key,
    )
