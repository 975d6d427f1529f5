"""
Common test fixtures shared by all test modules.

Provides:
- md5_hash / hex_compare: a fixed, non-default Digest Policy
- DEMO_VALUES / SAMPLE_VALUES: leaf data sets
- make_values / make_tree: factories for populated trees
"""

import hashlib
from typing import Iterable, Optional

from hashtree.crypto.policy import CallablePolicy, DigestPolicy
from hashtree.crypto.policy import compare_hex as hex_compare
from hashtree.merkle.tree import MerkleTree


DEMO_VALUES: list[bytes] = [b"111_data", b"222_data", b"333_data", b"444_data"]

SAMPLE_VALUES: list[bytes] = [
    b"1_ehxfQyRZb5",
    b"2_QuytB3zXsu",
    b"3_FGVLyax30g",
    b"4_0rnIlkfdi8",
    b"5_t0oi1UwuPP",
    b"6_MPL3vyFtWM",
    b"7_Gk4Py5v5ZE",
    b"8_KnOAVZMvtB",
]


def md5_hash(value: bytes) -> bytes:
    """Fixed hash function used by the demo data sets."""
    return hashlib.md5(bytes(value)).digest()


def make_md5_policy() -> DigestPolicy:
    return CallablePolicy(hash_function=md5_hash, compare_function=hex_compare)


def make_values(count: int, prefix: str = "leaf") -> list[bytes]:
    return [f"{prefix}{i}".encode() for i in range(count)]


def make_tree(
    values: Optional[Iterable[bytes]] = None,
    policy: Optional[DigestPolicy] = None,
    build: bool = True,
) -> MerkleTree:
    """
    Create a MerkleTree for testing.

    Args:
        values: Leaf values (defaults to DEMO_VALUES)
        policy: Digest Policy (defaults to md5 + hex comparison)
        build: Whether to build the tree after inserting
    """
    tree = MerkleTree(policy=policy or make_md5_policy())
    tree.insert(list(DEMO_VALUES if values is None else values))
    if build:
        tree.build()
    return tree
