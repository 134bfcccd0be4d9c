"""Cryptographic helpers — hashing."""

from __future__ import annotations

import hashlib


def sha256(data: bytes) -> bytes:
    """Single SHA-256 hash."""
    return hashlib.sha256(data).digest()


def sha256d(data: bytes) -> bytes:
    """Double SHA-256 hash (SHA256(SHA256(data)))."""
    return sha256(sha256(data))
