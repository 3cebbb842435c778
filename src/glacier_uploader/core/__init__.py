"""Core module - Chunking, checksums, configuration and errors."""

from glacier_uploader.core.checksum import (
    ETagAccumulator,
    composite_etag,
    etags_match,
    part_digest,
    strip_etag_quotes,
)
from glacier_uploader.core.chunking import (
    PART_SIZE,
    Chunk,
    count_parts,
    read_chunks,
)
from glacier_uploader.core.config import (
    DEFAULT_REGION,
    RETRIES,
    RETRY_DELAY,
    UploadConfig,
    storage_settings_from_env,
)
from glacier_uploader.core.errors import (
    ChunkReadError,
    ConfigurationError,
    GlacierUploadError,
    LocalFileError,
    PartUploadError,
    ResumeNotSupportedError,
    TransactionError,
)
from glacier_uploader.core.types import DEEP_ARCHIVE, UploadState

__all__ = [
    # Checksum
    "ETagAccumulator",
    "composite_etag",
    "etags_match",
    "part_digest",
    "strip_etag_quotes",
    # Chunking
    "PART_SIZE",
    "Chunk",
    "count_parts",
    "read_chunks",
    # Config
    "DEFAULT_REGION",
    "RETRIES",
    "RETRY_DELAY",
    "UploadConfig",
    "storage_settings_from_env",
    # Errors
    "ChunkReadError",
    "ConfigurationError",
    "GlacierUploadError",
    "LocalFileError",
    "PartUploadError",
    "ResumeNotSupportedError",
    "TransactionError",
    # Types
    "DEEP_ARCHIVE",
    "UploadState",
]
