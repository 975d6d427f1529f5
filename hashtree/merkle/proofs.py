"""
Merkle Inclusion Proofs
Proof generation from a built level hierarchy, and proof replay.

A proof is a list of ProofStep, one per level from the leaf level up to
(but excluding) the root level. Each step names a digest and where it
sits relative to the node on the path:

- LEFT:  the digest is the left sibling; parent = digest(sibling + node)
- RIGHT: the digest is the right sibling; parent = digest(node + sibling)
- SELF:  the node had no sibling and was promoted unchanged; the digest
         is the node's own value

The SELF rule applies to every level including the leaf level.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from hashtree.crypto.hashing import decode_digest, encode_digest
from hashtree.crypto.policy import DigestPolicy
from hashtree.schemas.errors import ErrorCodes, ProofError
from hashtree.schemas.proof import InclusionProof, ProofStepModel

logger = logging.getLogger(__name__)


class ProofPosition(str, Enum):
    """Position of a proof step digest relative to the path node."""
    LEFT = "left"
    RIGHT = "right"
    SELF = "self"


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an inclusion proof.

    Attributes:
        digest: Sibling digest (or the promoted node itself for SELF)
        position: Where that digest sits relative to the path node
    """
    digest: bytes
    position: ProofPosition


def generate_proof(levels: Sequence[Sequence[bytes]], digest: bytes) -> Optional[list[ProofStep]]:
    """
    Derive the inclusion proof for a leaf digest.

    Algorithm:
    1. Locate the first exact match of digest on the leaf level
    2. For each level from the leaves up to (excluding) the root level:
       - last node of an odd-sized level -> (node, SELF)
       - odd index -> (level[index - 1], LEFT)
       - even index -> (level[index + 1], RIGHT)
       - index = index // 2
    3. Steps come out leaf level first

    Args:
        levels: Level hierarchy, root level first (as built by build_levels)
        digest: Leaf digest to prove

    Returns:
        List of ProofStep, or None if there are no levels or the digest
        is not a leaf
    """
    if len(levels) == 0:
        return None

    leaf_level = levels[-1]
    target = bytes(digest)
    try:
        index = list(leaf_level).index(target)
    except ValueError:
        logger.debug(f"No leaf {encode_digest(target)} in tree")
        return None

    proof: list[ProofStep] = []
    # Walk from the leaf level (last) up to the level just below the root (index 0)
    for depth in range(len(levels) - 1, 0, -1):
        level = levels[depth]
        count = len(level)
        if count % 2 == 1 and index == count - 1:
            proof.append(ProofStep(digest=level[index], position=ProofPosition.SELF))
        elif index % 2 == 1:
            proof.append(ProofStep(digest=level[index - 1], position=ProofPosition.LEFT))
        else:
            proof.append(ProofStep(digest=level[index + 1], position=ProofPosition.RIGHT))
        index = index // 2

    return proof


def compute_root_from_proof(
    leaf_digest: bytes,
    proof: Sequence[ProofStep],
    policy: DigestPolicy,
) -> bytes:
    """
    Replay a proof from a leaf digest and return the resulting root.

    SELF steps pass the current digest through unchanged.
    """
    current = bytes(leaf_digest)
    for step in proof:
        if step.position == ProofPosition.RIGHT:
            current = policy.digest(current + step.digest)
        elif step.position == ProofPosition.LEFT:
            current = policy.digest(step.digest + current)
    return current


def verify_proof(
    leaf_digest: bytes,
    proof: Sequence[ProofStep],
    root: bytes,
    policy: DigestPolicy,
) -> bool:
    """
    Verify an inclusion proof against a root.

    Returns False (never raises) when the replayed root differs, when the
    root is empty, or when a SELF step does not carry the current digest.
    """
    return check_proof(leaf_digest, proof, root, policy) is None


def check_proof(
    leaf_digest: bytes,
    proof: Sequence[ProofStep],
    root: bytes,
    policy: DigestPolicy,
) -> Optional[ProofError]:
    """
    Verify an inclusion proof, describing the failure if there is one.

    Returns:
        None if the proof reproduces root, otherwise a ProofError
    """
    if not root:
        return ProofError(
            message="Cannot verify against an empty root",
            leaf=encode_digest(bytes(leaf_digest)),
        )

    current = bytes(leaf_digest)
    for level, step in enumerate(proof):
        if step.position == ProofPosition.SELF:
            if step.digest != current:
                return ProofError(
                    message=f"Promoted digest at proof level {level} does not match path node",
                    leaf=encode_digest(bytes(leaf_digest)),
                    details={"level": level},
                )
        elif step.position == ProofPosition.RIGHT:
            current = policy.digest(current + step.digest)
        else:
            current = policy.digest(step.digest + current)

    if current != root:
        return ProofError(
            message="Proof does not reproduce the root",
            code=ErrorCodes.ROOT_MISMATCH,
            leaf=encode_digest(bytes(leaf_digest)),
            expected_root=encode_digest(root),
            computed_root=encode_digest(current),
        )
    return None


def to_inclusion_proof(
    leaf_digest: bytes,
    proof: Sequence[ProofStep],
    root: bytes,
    leaf_count: int,
) -> InclusionProof:
    """Package a proof with its leaf and root as a portable InclusionProof."""
    return InclusionProof(
        leaf=encode_digest(bytes(leaf_digest)),
        root=encode_digest(root),
        leaf_count=leaf_count,
        steps=[
            ProofStepModel(digest=encode_digest(step.digest), position=step.position.value)
            for step in proof
        ],
    )


def from_inclusion_proof(model: InclusionProof) -> tuple[bytes, list[ProofStep], bytes]:
    """
    Unpack an InclusionProof.

    Returns:
        (leaf_digest, steps, root)

    Raises:
        DigestEncodingException: If any encoded digest is malformed
    """
    steps = [
        ProofStep(digest=decode_digest(step.digest), position=ProofPosition(step.position))
        for step in model.steps
    ]
    return decode_digest(model.leaf), steps, decode_digest(model.root)


__all__ = [
    "ProofPosition",
    "ProofStep",
    "generate_proof",
    "compute_root_from_proof",
    "verify_proof",
    "check_proof",
    "to_inclusion_proof",
    "from_inclusion_proof",
]
