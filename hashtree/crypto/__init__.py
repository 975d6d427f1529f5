"""
Core cryptographic utilities.

Hashing and digest encoding helpers plus the pluggable Digest Policy
used by every tree.
"""
from .hashing import (
    sha256,
    to_bytes,
    encode_digest,
    decode_digest,
)
from .policy import (
    DigestPolicy,
    HashlibPolicy,
    CallablePolicy,
    DEFAULT_HASH_ALGORITHM,
    compare_bytes,
    compare_hex,
    resolve_comparator,
)

__all__ = [
    "sha256",
    "to_bytes",
    "encode_digest",
    "decode_digest",
    "DigestPolicy",
    "HashlibPolicy",
    "CallablePolicy",
    "DEFAULT_HASH_ALGORITHM",
    "compare_bytes",
    "compare_hex",
    "resolve_comparator",
]
