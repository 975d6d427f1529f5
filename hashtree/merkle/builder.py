"""
Merkle Tree Builder
Deterministic level-by-level reduction from ordered leaf digests to a root.

Canonical Commitment Rules:
1. Leaf level: the ordered digest list, unchanged
2. Parent hashing: parent = digest(left + right), no separator
3. Promotion rule: a trailing unpaired node is carried up unchanged
   (no re-hashing, no duplication)
4. Empty leaves: no levels at all
5. Single leaf: the leaf level is also the root level

Level Ordering:
- levels[0] is the root level (one digest)
- levels[-1] is the leaf level
- len(levels[i]) == ceil(len(levels[i + 1]) / 2)
"""
from __future__ import annotations

import logging
from typing import Sequence

from hashtree.crypto.policy import DigestPolicy

logger = logging.getLogger(__name__)


def next_level(level: Sequence[bytes], policy: DigestPolicy) -> list[bytes]:
    """
    Compute the parent level of a level.

    Example: [a, b, c] -> [digest(a + b), c]

    Args:
        level: Non-empty sequence of node digests
        policy: Digest Policy supplying the hash function

    Returns:
        The parent level, ceil(len(level) / 2) digests long
    """
    nodes: list[bytes] = []
    count = len(level)
    for i in range(0, count, 2):
        if i + 1 < count:
            nodes.append(policy.digest(level[i] + level[i + 1]))
        else:
            nodes.append(level[i])
    return nodes


def build_levels(ordered_digests: Sequence[bytes], policy: DigestPolicy) -> list[list[bytes]]:
    """
    Build the full level hierarchy, root level first.

    Args:
        ordered_digests: Leaf digests, already sorted
        policy: Digest Policy supplying the hash function

    Returns:
        List of levels; empty when there are no leaves
    """
    if len(ordered_digests) == 0:
        return []

    levels: list[list[bytes]] = [list(ordered_digests)]
    while len(levels[0]) > 1:
        levels.insert(0, next_level(levels[0], policy))

    logger.debug(f"Built {len(levels)} levels from {len(ordered_digests)} leaves")
    return levels


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels (leaf level and root level inclusive) for a tree
    with num_leaves leaves under the promotion rule.

    Returns:
        0 for an empty tree, 1 for a single leaf
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


__all__ = [
    "next_level",
    "build_levels",
    "compute_tree_depth",
]
