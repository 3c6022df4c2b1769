"""HMAC signing utilities for partner request auth."""

from __future__ import annotations

import hashlib
import hmac


def sha256_hex(data: str | bytes) -> str:
    """Hex-encoded SHA-256 digest of a UTF-8 string or raw bytes."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def sign(secret: str, message: str) -> str:
    """Create a hex-encoded HMAC-SHA256 signature."""
    return hmac.new(
        secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify(secret: str, message: str, signature: str) -> bool:
    """Verify HMAC signature in constant time."""
    expected = sign(secret, message)
    return hmac.compare_digest(expected, signature)
