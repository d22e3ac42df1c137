"""Content Hashing — stable fingerprint of a submission's raw bytes.

Invariants:
    - Computed over the body exactly as received, before any decoding
    - Same bytes always produce the same fingerprint (storage keys depend on it)
"""

import hashlib

from app.core.domain_types import ContentFingerprint


def fingerprint(data: bytes) -> ContentFingerprint:
    """Lowercase hex SHA-256 of data."""
    return ContentFingerprint(hashlib.sha256(data).hexdigest())
