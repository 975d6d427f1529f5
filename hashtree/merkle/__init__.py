"""
Merkle Tree and Inclusion Proofs

This package provides:
- LeafStore: digest -> value map with comparator-ordered digests
- build_levels / next_level: level-by-level reduction to a root
- generate_proof / verify_proof: inclusion proofs with odd-node promotion
- MerkleTree: the stateful tree tying these together

Canonical Commitment Rules:
1. Leaves: policy.digest(value), sorted with policy.compare
2. Parent hashing: policy.digest(left + right)
3. Odd node at any level: promoted unchanged
4. Empty tree: no levels, root is EMPTY_ROOT (b"")
5. Single leaf: root = the leaf digest

Usage:
    from hashtree.merkle import MerkleTree

    tree = MerkleTree()
    digests = tree.insert([b"a", b"b", b"c"])
    tree.build()

    proof = tree.get_proof(digests[1])
    assert tree.verify(digests[1], proof)
"""
from .builder import (
    build_levels,
    compute_tree_depth,
    next_level,
)
from .leaf_store import LeafStore
from .proofs import (
    ProofPosition,
    ProofStep,
    check_proof,
    compute_root_from_proof,
    from_inclusion_proof,
    generate_proof,
    to_inclusion_proof,
    verify_proof,
)
from .tree import EMPTY_ROOT, MerkleTree


__all__ = [
    # Core types
    "MerkleTree",
    "LeafStore",
    "ProofPosition",
    "ProofStep",
    "EMPTY_ROOT",
    # Core functions
    "next_level",
    "build_levels",
    "compute_tree_depth",
    "generate_proof",
    "compute_root_from_proof",
    "verify_proof",
    "check_proof",
    "to_inclusion_proof",
    "from_inclusion_proof",
]
