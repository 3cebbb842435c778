"""Shared types and dataclasses for upload operations.

This module provides:
- UploadProgress: Progress tracking dataclass
- UploadResult: Outcome of a completed upload
- Type alias for the progress callback
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from glacier_uploader.core.checksum import etags_match, strip_etag_quotes
from glacier_uploader.storage import CompletedPart


@dataclass
class UploadProgress:
    """Progress information reported after each part."""

    file_path: str
    file_size: int
    current_part: int
    total_parts: int
    bytes_transferred: int

    @property
    def percent(self) -> float:
        """Get progress percentage."""
        if self.total_parts == 0:
            return 100.0
        return (self.current_part / self.total_parts) * 100


# Type alias for progress callback
ProgressCallback = Callable[[UploadProgress], None]


@dataclass
class UploadResult:
    """Result of a completed multipart upload.

    Attributes:
        bucket: Bucket the object was written to
        object_key: Key of the object
        upload_id: Multipart upload ID
        location: Object URL reported by the service
        remote_etag: ETag reported by the service, quotes removed
        local_etag: ETag computed locally from the part digests
        size: Total bytes uploaded
        parts: Completed parts in part-number order
    """

    bucket: str
    object_key: str
    upload_id: str
    location: str
    remote_etag: str
    local_etag: str
    size: int
    parts: list[CompletedPart] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Normalize the remote ETag."""
        self.remote_etag = strip_etag_quotes(self.remote_etag)

    @property
    def etags_match(self) -> bool:
        """Check if the service's ETag matches the local computation."""
        return etags_match(self.remote_etag, self.local_etag)

    @property
    def part_count(self) -> int:
        """Number of parts uploaded."""
        return len(self.parts)
