"""Hashing utilities for log correlation of source documents."""

from __future__ import annotations

import hashlib


def compute_file_hash(file_bytes: bytes) -> str:
    """Return the SHA-256 hex digest of raw file bytes."""
    return hashlib.sha256(file_bytes).hexdigest()
