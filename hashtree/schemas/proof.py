"""
Schemas
File: proof.py

Purpose: Portable export form of an inclusion proof, with digests as
URL-safe unpadded base64 text.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ProofStepModel(BaseModel):
    """One proof step with a text-encoded digest."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    digest: str = Field(..., description="Encoded sibling (or promoted) digest", min_length=1)
    position: Literal["left", "right", "self"] = Field(
        ...,
        description="Position of the digest relative to the path node",
    )


class InclusionProof(BaseModel):
    """
    Self-contained inclusion proof for one leaf.

    Steps are ordered from the leaf level upward, i.e. in replay order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    leaf: str = Field(..., description="Encoded leaf digest", min_length=1)
    root: str = Field(..., description="Encoded root digest the proof was built against", min_length=1)
    leaf_count: int = Field(..., ge=1)
    steps: list[ProofStepModel] = Field(default_factory=list)

    @property
    def depth(self) -> int:
        """Number of levels below the root covered by this proof."""
        return len(self.steps)
