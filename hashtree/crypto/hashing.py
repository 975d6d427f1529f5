"""
Hashing Utilities
Basic hashing and digest encoding utilities for Merkle commitments.

This module provides:
- SHA-256 hashing for raw bytes
- Leaf value normalization to bytes
- URL-safe, unpadded base64 encoding of digests (text keys)

Encoding Notes:
- Text encodings are presentational only; digests are compared,
  sorted and hashed as raw bytes everywhere else
- All operations are deterministic
"""
from __future__ import annotations

import base64
import binascii
import hashlib
from typing import Any

from hashtree.schemas.errors import DigestEncodingException, InvalidValueException


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def to_bytes(value: Any) -> bytes:
    """
    Normalize a leaf value to bytes.

    Accepts bytes-like objects and str (UTF-8 encoded).

    Raises:
        InvalidValueException: For any other type
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise InvalidValueException(
        f"Leaf value must be bytes-like or str, got {type(value).__name__}",
        value_type=type(value).__name__,
    )


def encode_digest(digest: bytes) -> str:
    """
    Encode a digest as URL-safe base64 text with padding stripped.

    Used wherever a digest is exposed as a string key.

    Example:
        >>> encode_digest(b"\\xfb\\xff")
        '-_8'
    """
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def decode_digest(text: str) -> bytes:
    """
    Decode text produced by encode_digest() back into raw digest bytes.

    Raises:
        DigestEncodingException: If text is not valid unpadded URL-safe base64
    """
    if len(text) % 4 == 1:
        raise DigestEncodingException(
            f"Invalid encoded digest length {len(text)}",
            details={"text": text[:16]},
        )
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise DigestEncodingException(
            f"Invalid encoded digest: {e}",
            details={"text": text[:16]},
        ) from e


__all__ = [
    "sha256",
    "to_bytes",
    "encode_digest",
    "decode_digest",
]
