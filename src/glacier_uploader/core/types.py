"""Shared types for glacier_uploader.

This module defines enums used across the upload components.
"""

from __future__ import annotations

from enum import Enum

# Storage class applied when the multipart upload is created
DEEP_ARCHIVE = "DEEP_ARCHIVE"


class UploadState(str, Enum):
    """Lifecycle state of a multipart upload.

    IDLE -> ACTIVE -> UPLOADING_PART -> ACTIVE ... -> COMPLETING -> COMPLETED.
    Any fatal error moves to FAILED.
    """

    IDLE = "idle"
    ACTIVE = "active"
    UPLOADING_PART = "uploading_part"
    COMPLETING = "completing"
    COMPLETED = "completed"
    FAILED = "failed"
