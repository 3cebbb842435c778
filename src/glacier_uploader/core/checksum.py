"""Multipart ETag computation.

When an object is uploaded as a multipart upload, its ETag is not an MD5
of the whole object. S3 computes the MD5 digest of each part, concatenates
the raw digests, takes the MD5 of that concatenation and appends a dash
with the number of parts.

See https://docs.aws.amazon.com/AmazonS3/latest/userguide/checking-object-integrity.html
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable


def part_digest(data: bytes) -> bytes:
    """Compute the raw MD5 digest of one part.

    Args:
        data: Part bytes.

    Returns:
        16-byte MD5 digest.
    """
    return hashlib.md5(data).digest()


def composite_etag(digests: Iterable[bytes], count: int) -> str:
    """Build the multipart ETag from ordered per-part digests.

    Args:
        digests: Raw MD5 digests in part-number order.
        count: Total number of parts.

    Returns:
        ETag string of the form "<32 hex chars>-<count>".
    """
    combined = hashlib.md5(b"".join(digests)).hexdigest()
    return f"{combined}-{count}"


def strip_etag_quotes(etag: str) -> str:
    """Remove the double quotes S3 wraps around ETags."""
    return etag.strip('"')


def etags_match(remote_etag: str, local_etag: str) -> bool:
    """Compare an ETag reported by S3 with a locally computed one."""
    return strip_etag_quotes(remote_etag) == strip_etag_quotes(local_etag)


class ETagAccumulator:
    """Accumulates part digests as parts are produced."""

    def __init__(self) -> None:
        self._digests: list[bytes] = []

    @property
    def count(self) -> int:
        """Number of parts digested so far."""
        return len(self._digests)

    def add(self, data: bytes) -> bytes:
        """Digest the next part and remember it."""
        digest = part_digest(data)
        self._digests.append(digest)
        return digest

    def finalize(self) -> str:
        """Return the composite ETag for all parts added so far."""
        return composite_etag(self._digests, self.count)
