"""
Merkle Tree
Mutable leaf set plus the level hierarchy built from it.

Lifecycle:
- insert / delete mutate the leaf set and mark the tree stale
- build() recomputes every level from the ordered leaf digests
- root_hash / get_proof only answer from a tree that is ready;
  a stale or empty tree yields EMPTY_ROOT / None

All state (leaf map, ordered digests, levels, readiness) belongs to the
instance and is guarded by one reentrant lock, so it changes as a unit.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from hashtree.config.runtime import TreeConfig, get_default_config
from hashtree.crypto.hashing import encode_digest
from hashtree.crypto.policy import CallablePolicy, DigestPolicy
from hashtree.merkle.builder import build_levels
from hashtree.merkle.leaf_store import LeafStore
from hashtree.merkle.proofs import (
    ProofStep,
    generate_proof,
    to_inclusion_proof,
    verify_proof,
)
from hashtree.schemas.proof import InclusionProof

logger = logging.getLogger(__name__)


# Root of a tree that is empty or not built
EMPTY_ROOT: bytes = b""


def _resolve_policy(
    policy: Optional[DigestPolicy],
    hash_function: Any,
    compare_function: Any,
    config: Optional[TreeConfig],
) -> DigestPolicy:
    if policy is not None:
        return policy
    if hash_function is not None or compare_function is not None:
        return CallablePolicy(hash_function=hash_function, compare_function=compare_function)
    return (config or get_default_config()).build_policy()


class MerkleTree:
    """
    Binary Merkle tree over a mutable set of opaque leaves.

    Example:
        >>> tree = MerkleTree()
        >>> digests = tree.insert([b"a", b"b", b"c"])
        >>> tree.build()
        >>> proof = tree.get_proof(digests[0])
        >>> tree.verify(digests[0], proof)
        True
    """

    def __init__(
        self,
        policy: Optional[DigestPolicy] = None,
        *,
        hash_function: Any = None,
        compare_function: Any = None,
        config: Optional[TreeConfig] = None,
    ) -> None:
        """
        Args:
            policy: Digest Policy to use; takes precedence over everything else
            hash_function: bytes -> digest, used when no policy is given
            compare_function: (digest, digest) -> -1/0/1, used when no policy is given
            config: Source of the default policy when neither of the above is set
        """
        self._policy = _resolve_policy(policy, hash_function, compare_function, config)
        self._store = LeafStore(self._policy)
        self._levels: list[list[bytes]] = []
        self._ready = False
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, values: Any) -> list[bytes]:
        """
        Add one value or a batch of values as leaves.

        Returns:
            Digests of the inserted values, in input order
        """
        with self._lock:
            digests = self._store.insert(values)
            self._ready = False
            return digests

    def delete(self, digests: Any) -> int:
        """
        Remove leaves by digest (all occurrences of each).

        Returns:
            Number of leaf entries removed
        """
        with self._lock:
            removed = self._store.delete(digests)
            self._ready = False
            return removed

    def reset(self) -> None:
        """Drop all leaves and levels."""
        with self._lock:
            self._store.reset()
            self._levels = []
            self._ready = False

    reset_tree = reset

    def sort(self) -> None:
        """Re-sort the ordered leaf digests with the policy comparator."""
        with self._lock:
            self._store.sort()

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build(self) -> None:
        """Recompute the level hierarchy from the current leaves."""
        with self._lock:
            self._levels = build_levels(self._store.ordered_digests, self._policy)
            self._ready = True
            logger.debug(
                f"Tree built: {self._store.count()} leaves, {len(self._levels)} levels"
            )

    make_tree = build

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_one(self, digest: bytes) -> Optional[bytes]:
        """Return the stored value for a leaf digest, or None."""
        with self._lock:
            return self._store.find_one(digest)

    def get_proof(self, digest: bytes) -> Optional[list[ProofStep]]:
        """
        Inclusion proof for a leaf digest.

        Returns:
            Proof steps from the leaf level upward, or None if the tree is
            not ready or the digest is not a leaf
        """
        with self._lock:
            if not self._ready:
                logger.debug("Proof requested from a tree that is not built")
                return None
            return generate_proof(self._levels, digest)

    def verify(self, digest: bytes, proof: list[ProofStep]) -> bool:
        """Check a proof for digest against the current root."""
        with self._lock:
            return verify_proof(digest, proof, self.root_hash, self._policy)

    def export_proof(self, digest: bytes) -> Optional[InclusionProof]:
        """Inclusion proof for digest as a portable, text-encoded model."""
        with self._lock:
            proof = self.get_proof(digest)
            if proof is None:
                return None
            return to_inclusion_proof(digest, proof, self.root_hash, self._store.count())

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def policy(self) -> DigestPolicy:
        return self._policy

    @property
    def is_ready(self) -> bool:
        with self._lock:
            return self._ready

    @property
    def root_hash(self) -> bytes:
        """Root digest, or EMPTY_ROOT if the tree is empty or not built."""
        with self._lock:
            if not self._ready or not self._levels or len(self._levels[0]) != 1:
                return EMPTY_ROOT
            return self._levels[0][0]

    @property
    def leaf_count(self) -> int:
        with self._lock:
            return self._store.count()

    @property
    def depth(self) -> int:
        """Number of levels in the last built hierarchy."""
        with self._lock:
            return len(self._levels)

    def leaves(self) -> dict[bytes, bytes]:
        """Snapshot of the digest -> value map."""
        with self._lock:
            return self._store.snapshot()

    def encoded_leaves(self) -> dict[str, bytes]:
        """Snapshot of the leaf map keyed by URL-safe base64 digest text."""
        with self._lock:
            return {encode_digest(d): v for d, v in self._store.snapshot().items()}

    def levels(self) -> list[list[bytes]]:
        """Snapshot of the last built hierarchy, root level first."""
        with self._lock:
            return [list(level) for level in self._levels]

    def __len__(self) -> int:
        return self.leaf_count

    def __contains__(self, digest: object) -> bool:
        with self._lock:
            return digest in self._store

    def __repr__(self) -> str:
        return f"MerkleTree(leaves={self.leaf_count}, ready={self.is_ready}, policy={self._policy!r})"


__all__ = ["EMPTY_ROOT", "MerkleTree"]
