"""
hashtree - binary Merkle hash trees with inclusion proofs.

Build a tree over a mutable set of opaque leaves, read its root, and
prove that one leaf belongs to the set without revealing the others.
"""
from hashtree.config import TreeConfig, get_default_config, set_default_config
from hashtree.crypto import (
    CallablePolicy,
    DigestPolicy,
    HashlibPolicy,
    decode_digest,
    encode_digest,
)
from hashtree.merkle import (
    EMPTY_ROOT,
    MerkleTree,
    ProofPosition,
    ProofStep,
    verify_proof,
)
from hashtree.schemas import HashTreeException, InclusionProof

__version__ = "0.1.0"

__all__ = [
    "MerkleTree",
    "EMPTY_ROOT",
    "ProofPosition",
    "ProofStep",
    "verify_proof",
    "DigestPolicy",
    "HashlibPolicy",
    "CallablePolicy",
    "encode_digest",
    "decode_digest",
    "TreeConfig",
    "get_default_config",
    "set_default_config",
    "HashTreeException",
    "InclusionProof",
]
