"""
Digest Policy
The two capabilities a tree needs from the outside world: hashing bytes
into a fixed-size digest and ordering two digests.

This module provides:
- DigestPolicy: Protocol every policy implements
- HashlibPolicy: Default policy backed by a hashlib algorithm
- CallablePolicy: Adapter for plain caller-supplied functions
- compare_bytes / compare_hex: Comparators returning -1, 0 or 1

A policy is a value owned by the tree it is handed to. Nothing here
keeps module-level mutable state.
"""
from __future__ import annotations

import hashlib
import logging
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from hashtree.crypto.hashing import sha256
from hashtree.schemas.errors import PolicyConfigurationException

logger = logging.getLogger(__name__)

HashFunction = Callable[[bytes], bytes]
CompareFunction = Callable[[bytes, bytes], int]

DEFAULT_HASH_ALGORITHM = "sha256"


@runtime_checkable
class DigestPolicy(Protocol):
    """Hashing and ordering capabilities injected into a tree."""

    def digest(self, data: bytes) -> bytes:
        """Hash raw bytes into a fixed-size digest."""
        ...

    def compare(self, left: bytes, right: bytes) -> int:
        """Order two digests: negative, zero or positive."""
        ...


def compare_bytes(left: bytes, right: bytes) -> int:
    """Byte-lexicographic comparison (shorter prefix sorts first)."""
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def compare_hex(left: bytes, right: bytes) -> int:
    """Compare the lowercase hex text of two digests."""
    left_hex = left.hex()
    right_hex = right.hex()
    if left_hex > right_hex:
        return 1
    elif left_hex < right_hex:
        return -1
    else:
        return 0


COMPARATORS: dict[str, CompareFunction] = {
    "bytes": compare_bytes,
    "hex": compare_hex,
}


def resolve_comparator(name: str) -> CompareFunction:
    """
    Look up a named comparator.

    Raises:
        PolicyConfigurationException: If the name is unknown
    """
    try:
        return COMPARATORS[name]
    except KeyError:
        raise PolicyConfigurationException(
            f"Unknown comparator '{name}', expected one of {sorted(COMPARATORS)}",
            setting="comparator",
        ) from None


class HashlibPolicy:
    """
    Default policy: a hashlib algorithm plus a comparator.

    Example:
        >>> policy = HashlibPolicy()
        >>> len(policy.digest(b"abc"))
        32
    """

    def __init__(
        self,
        algorithm: str = DEFAULT_HASH_ALGORITHM,
        comparator: CompareFunction = compare_bytes,
    ) -> None:
        try:
            hasher = hashlib.new(algorithm)
        except (ValueError, TypeError) as e:
            raise PolicyConfigurationException(
                f"Unknown hash algorithm '{algorithm}'",
                setting="hash_algorithm",
            ) from e
        # Variable-length digests (shake_*) need an explicit length.
        if hasher.digest_size == 0:
            raise PolicyConfigurationException(
                f"Hash algorithm '{algorithm}' has no fixed digest size",
                setting="hash_algorithm",
            )
        self.algorithm = algorithm
        self._comparator = comparator
        self._digest_size = hasher.digest_size

    @property
    def digest_size(self) -> int:
        return self._digest_size

    def digest(self, data: bytes) -> bytes:
        return hashlib.new(self.algorithm, data).digest()

    def compare(self, left: bytes, right: bytes) -> int:
        return self._comparator(left, right)

    def __repr__(self) -> str:
        return f"HashlibPolicy(algorithm={self.algorithm!r}, comparator={_name_of(self._comparator)})"


class CallablePolicy:
    """
    Policy built from caller-supplied functions.

    Either function may be omitted or be something that is not callable;
    in that case the default (SHA-256, byte-lexicographic) is used for
    that capability and a warning is logged.
    """

    def __init__(
        self,
        hash_function: Optional[Any] = None,
        compare_function: Optional[Any] = None,
    ) -> None:
        self._hash_function: HashFunction = _assign_function(
            hash_function, sha256, "hash_function"
        )
        self._compare_function: CompareFunction = _assign_function(
            compare_function, compare_bytes, "compare_function"
        )

    def digest(self, data: bytes) -> bytes:
        return bytes(self._hash_function(data))

    def compare(self, left: bytes, right: bytes) -> int:
        return self._compare_function(left, right)

    def __repr__(self) -> str:
        return (
            f"CallablePolicy(hash_function={_name_of(self._hash_function)}, "
            f"compare_function={_name_of(self._compare_function)})"
        )


def _assign_function(candidate: Any, default: Callable, label: str) -> Callable:
    if candidate is None:
        return default
    if callable(candidate):
        return candidate
    logger.warning(
        f"Ignoring non-callable {label} of type {type(candidate).__name__}, using default"
    )
    return default


def _name_of(func: Callable) -> str:
    return getattr(func, "__name__", type(func).__name__)


__all__ = [
    "DigestPolicy",
    "HashlibPolicy",
    "CallablePolicy",
    "HashFunction",
    "CompareFunction",
    "DEFAULT_HASH_ALGORITHM",
    "COMPARATORS",
    "compare_bytes",
    "compare_hex",
    "resolve_comparator",
]
