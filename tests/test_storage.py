"""Tests for the S3 multipart storage backend."""

import hashlib
from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from glacier_uploader.core.config import UploadConfig
from glacier_uploader.storage import (
    CompletedPart,
    CompletedUpload,
    MultipartUpload,
    ObjectStorage,
    S3Storage,
    StorageError,
    create_storage,
)

MIN_PART = 5 * 1024 * 1024  # S3 minimum size for non-final parts


def client_error(code: str = "InternalError") -> ClientError:
    """Build a botocore ClientError."""
    return ClientError({"Error": {"Code": code, "Message": "boom"}}, "Operation")


class TestS3StorageWithMoto:
    """Tests for S3Storage using moto mock."""

    @pytest.fixture
    def mock_s3(self) -> Iterator[object]:
        """Set up moto mock for S3."""
        pytest.importorskip("moto")
        import boto3
        from moto import mock_aws

        with mock_aws():
            client = boto3.client("s3", region_name="us-east-1")
            client.create_bucket(Bucket="test-bucket")
            yield client

    @pytest.fixture
    def storage(self, mock_s3: object) -> S3Storage:
        """Create an S3Storage instance for testing."""
        return S3Storage(region="us-east-1")

    def test_create_multipart_upload(self, storage: S3Storage) -> None:
        """Should return the upload identifiers."""
        upload = storage.create_multipart_upload("test-bucket", "big.bin", "DEEP_ARCHIVE")

        assert upload.bucket == "test-bucket"
        assert upload.object_key == "big.bin"
        assert upload.upload_id

    def test_full_multipart_cycle(self, storage: S3Storage, mock_s3: object) -> None:
        """Parts uploaded and completed produce the multipart ETag."""
        parts_data = [b"a" * MIN_PART, b"b" * 1024]
        upload = storage.create_multipart_upload("test-bucket", "big.bin", "DEEP_ARCHIVE")

        parts = []
        for number, data in enumerate(parts_data, start=1):
            etag = storage.upload_part(
                upload, body=data, content_length=len(data), part_number=number
            )
            assert etag.strip('"') == hashlib.md5(data).hexdigest()
            parts.append(CompletedPart(part_number=number, etag=etag))

        completed = storage.complete_multipart_upload(upload, parts)

        digests = b"".join(hashlib.md5(d).digest() for d in parts_data)
        assert completed.etag.strip('"') == f"{hashlib.md5(digests).hexdigest()}-2"

        head = mock_s3.head_object(Bucket="test-bucket", Key="big.bin")  # type: ignore[attr-defined]
        assert head["ContentLength"] == MIN_PART + 1024
        assert head.get("StorageClass") == "DEEP_ARCHIVE"

    def test_create_on_missing_bucket_raises(self, storage: S3Storage) -> None:
        """Errors from S3 are wrapped in StorageError."""
        with pytest.raises(StorageError, match="Failed to create multipart upload"):
            storage.create_multipart_upload("no-such-bucket", "big.bin", "DEEP_ARCHIVE")

    def test_location_default(self, storage: S3Storage) -> None:
        """Location describes the region."""
        assert storage.location == "S3: us-east-1"


class TestS3StorageWithMockClient:
    """Tests for S3Storage request building and error wrapping."""

    @pytest.fixture
    def client(self) -> Iterator[MagicMock]:
        """Mock boto3 S3 client."""
        mock_client = MagicMock()
        with patch("boto3.client", return_value=mock_client):
            yield mock_client

    @pytest.fixture
    def storage(self, client: MagicMock) -> S3Storage:
        """Create S3Storage with mocked boto3."""
        return S3Storage(region="eu-west-1", endpoint_url="http://localhost:9000")

    @pytest.fixture
    def upload(self) -> MultipartUpload:
        """An open upload."""
        return MultipartUpload(bucket="b", object_key="k", upload_id="u-1")

    def test_create_passes_storage_class(self, storage: S3Storage, client: MagicMock) -> None:
        """Storage class is set when the upload is created."""
        client.create_multipart_upload.return_value = {"UploadId": "u-1"}

        storage.create_multipart_upload("b", "k", "DEEP_ARCHIVE")

        client.create_multipart_upload.assert_called_once_with(
            Bucket="b", Key="k", StorageClass="DEEP_ARCHIVE"
        )

    def test_create_missing_upload_id(self, storage: S3Storage, client: MagicMock) -> None:
        """A response without UploadId is an error."""
        client.create_multipart_upload.return_value = {}

        with pytest.raises(StorageError, match="missing UploadId"):
            storage.create_multipart_upload("b", "k", "DEEP_ARCHIVE")

    def test_upload_part_sends_content_length(
        self, storage: S3Storage, client: MagicMock, upload: MultipartUpload
    ) -> None:
        """Content length and part number are passed explicitly."""
        client.upload_part.return_value = {"ETag": '"etag-1"'}

        etag = storage.upload_part(upload, body=b"12345", content_length=5, part_number=3)

        assert etag == '"etag-1"'
        client.upload_part.assert_called_once_with(
            Bucket="b",
            Key="k",
            UploadId="u-1",
            PartNumber=3,
            ContentLength=5,
            Body=b"12345",
        )

    def test_upload_part_connection_error(
        self, storage: S3Storage, client: MagicMock, upload: MultipartUpload
    ) -> None:
        """Network errors are wrapped in StorageError."""
        client.upload_part.side_effect = EndpointConnectionError(endpoint_url="http://x")

        with pytest.raises(StorageError, match="Failed to upload part 2"):
            storage.upload_part(upload, body=b"x", content_length=1, part_number=2)

    def test_upload_part_unknown_upload(
        self, storage: S3Storage, client: MagicMock, upload: MultipartUpload
    ) -> None:
        """An unknown upload ID is wrapped in StorageError."""
        client.upload_part.side_effect = client_error("NoSuchUpload")

        with pytest.raises(StorageError, match="Failed to upload part 1.*NoSuchUpload"):
            storage.upload_part(upload, body=b"x", content_length=1, part_number=1)

    def test_upload_part_missing_etag(
        self, storage: S3Storage, client: MagicMock, upload: MultipartUpload
    ) -> None:
        """A part response without ETag is an error."""
        client.upload_part.return_value = {}

        with pytest.raises(StorageError, match="missing ETag"):
            storage.upload_part(upload, body=b"x", content_length=1, part_number=1)

    def test_complete_sorts_parts(
        self, storage: S3Storage, client: MagicMock, upload: MultipartUpload
    ) -> None:
        """Parts are submitted sorted by part number."""
        client.complete_multipart_upload.return_value = {
            "ETag": '"abc-3"',
            "Location": "https://b.s3.amazonaws.com/k",
        }
        parts = [
            CompletedPart(part_number=3, etag="e3"),
            CompletedPart(part_number=1, etag="e1"),
            CompletedPart(part_number=2, etag="e2"),
        ]

        result = storage.complete_multipart_upload(upload, parts)

        assert result == CompletedUpload(etag='"abc-3"', location="https://b.s3.amazonaws.com/k")
        call_args = client.complete_multipart_upload.call_args
        assert call_args[1]["UploadId"] == "u-1"
        assert call_args[1]["MultipartUpload"]["Parts"] == [
            {"ETag": "e1", "PartNumber": 1},
            {"ETag": "e2", "PartNumber": 2},
            {"ETag": "e3", "PartNumber": 3},
        ]

    def test_complete_error(
        self, storage: S3Storage, client: MagicMock, upload: MultipartUpload
    ) -> None:
        """Completion errors are wrapped in StorageError."""
        client.complete_multipart_upload.side_effect = client_error("InvalidPart")

        with pytest.raises(StorageError, match="Failed to complete multipart upload"):
            storage.complete_multipart_upload(upload, [CompletedPart(1, "e1")])

    def test_location_with_endpoint(self, storage: S3Storage) -> None:
        """Location includes a custom endpoint."""
        assert storage.location == "S3: http://localhost:9000 (eu-west-1)"


class TestCreateStorage:
    """Tests for the create_storage factory function."""

    def test_builds_s3_storage_from_config(self) -> None:
        """Should pass region, endpoint and credentials to boto3."""
        config = UploadConfig(
            bucket="b",
            file_path="f",  # type: ignore[arg-type]
            region="eu-central-1",
            endpoint_url="http://localhost:9000",
            access_key="key",
            secret_key="secret",
        )

        with patch("boto3.client") as boto_client:
            storage = create_storage(config)

        assert isinstance(storage, S3Storage)
        boto_client.assert_called_once_with(
            "s3",
            endpoint_url="http://localhost:9000",
            aws_access_key_id="key",
            aws_secret_access_key="secret",
            region_name="eu-central-1",
        )

    def test_invalid_region_raises_storage_error(self) -> None:
        """A region boto3 rejects is wrapped in StorageError."""
        config = UploadConfig(bucket="b", file_path="f", region="not a region!")  # type: ignore[arg-type]

        with pytest.raises(StorageError, match="Failed to create S3 client"):
            create_storage(config)

    def test_invalid_endpoint_raises_storage_error(self) -> None:
        """A malformed endpoint URL is wrapped in StorageError."""
        with pytest.raises(StorageError, match="Failed to create S3 client"):
            S3Storage(endpoint_url="not a url")


class TestObjectStorageInterface:
    """Verify ObjectStorage is a proper abstract base class."""

    def test_cannot_instantiate_abstract(self) -> None:
        """ObjectStorage cannot be instantiated directly."""
        with pytest.raises(TypeError, match="abstract"):
            ObjectStorage()  # type: ignore[abstract]
