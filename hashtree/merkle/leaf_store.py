"""
Leaf Store
Holds the current leaf set keyed by digest, plus the comparator-ordered
list of digests that becomes the leaf level of the tree.

Ordering Rules:
1. Every insert appends the digest, even if it is already present
   (the map entry is overwritten, the ordered list is not deduplicated)
2. Every delete removes ALL occurrences of the digest
3. The ordered list is re-sorted with the policy comparator after each batch
"""
from __future__ import annotations

import functools
import logging
from typing import Any, Optional

from hashtree.crypto.hashing import to_bytes
from hashtree.crypto.policy import DigestPolicy
from hashtree.schemas.errors import InvalidValueException

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (bytes, bytearray, memoryview, str)


def _as_batch(items: Any) -> list[Any]:
    """Accept a single value or an iterable of values."""
    if isinstance(items, _SCALAR_TYPES):
        return [items]
    try:
        return list(items)
    except TypeError:
        raise InvalidValueException(
            f"Expected a value or an iterable of values, got {type(items).__name__}",
            value_type=type(items).__name__,
        ) from None


def _as_digest(digest: Any) -> bytes:
    if isinstance(digest, (bytes, bytearray, memoryview)):
        return bytes(digest)
    raise InvalidValueException(
        f"Digest must be bytes-like, got {type(digest).__name__}",
        value_type=type(digest).__name__,
    )


class LeafStore:
    """
    Digest -> value map with a sorted digest list.

    Not thread-safe on its own; MerkleTree serializes access.
    """

    def __init__(self, policy: DigestPolicy) -> None:
        self._policy = policy
        self._leaves: dict[bytes, bytes] = {}
        self._ordered: list[bytes] = []

    def insert(self, values: Any) -> list[bytes]:
        """
        Register one value or a batch of values.

        Args:
            values: bytes-like or str, or an iterable of them

        Returns:
            Digests of the inserted values, in input order
        """
        batch = [to_bytes(value) for value in _as_batch(values)]
        # State is written only after every digest is computed and sorted
        digests = [self._policy.digest(value) for value in batch]
        ordered = self._ordered + digests
        ordered.sort(key=self._sort_key())

        for digest, value in zip(digests, batch):
            self._leaves[digest] = value
        self._ordered = ordered
        logger.debug(f"Inserted {len(digests)} leaves, {len(self._ordered)} total")
        return digests

    def delete(self, digests: Any) -> int:
        """
        Remove one digest or a batch of digests.

        Unknown digests are ignored.

        Returns:
            Number of entries removed from the ordered list
        """
        batch = [_as_digest(d) for d in _as_batch(digests)]
        doomed = set(batch)
        ordered = [d for d in self._ordered if d not in doomed]
        ordered.sort(key=self._sort_key())

        removed = len(self._ordered) - len(ordered)
        for digest in batch:
            self._leaves.pop(digest, None)
        self._ordered = ordered
        logger.debug(f"Deleted {removed} leaf entries for {len(batch)} digests")
        return removed

    def find_one(self, digest: bytes) -> Optional[bytes]:
        """Return the stored value for digest, or None."""
        return self._leaves.get(bytes(digest))

    def contains(self, digest: bytes) -> bool:
        return bytes(digest) in self._leaves

    def sort(self) -> None:
        ordered = list(self._ordered)
        ordered.sort(key=self._sort_key())
        self._ordered = ordered

    def _sort_key(self):
        return functools.cmp_to_key(self._policy.compare)

    def reset(self) -> None:
        self._leaves = {}
        self._ordered = []

    def count(self) -> int:
        """Number of ordered entries (duplicates included)."""
        return len(self._ordered)

    @property
    def ordered_digests(self) -> list[bytes]:
        return list(self._ordered)

    def snapshot(self) -> dict[bytes, bytes]:
        return dict(self._leaves)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, digest: object) -> bool:
        return isinstance(digest, (bytes, bytearray, memoryview)) and self.contains(digest)


__all__ = ["LeafStore"]
