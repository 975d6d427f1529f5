"""
Merkle Proof Unit Tests
Tests for hashtree/merkle/proofs.py

Covers:
1. Proof shape - sibling positions and SELF promotion entries
2. Round trip - every leaf's proof reproduces the root
3. Tamper detection - modified leaf/sibling/root/position fails
4. Not-found - empty levels or unknown digest return None
5. Export - InclusionProof packing and unpacking
"""
import pytest

from hashtree.crypto.hashing import encode_digest, sha256
from hashtree.crypto.policy import HashlibPolicy
from hashtree.merkle.builder import build_levels
from hashtree.merkle.proofs import (
    ProofPosition,
    ProofStep,
    check_proof,
    compute_root_from_proof,
    from_inclusion_proof,
    generate_proof,
    to_inclusion_proof,
    verify_proof,
)
from hashtree.schemas.errors import DigestEncodingException, ErrorCodes
from hashtree.schemas.proof import InclusionProof


@pytest.fixture
def policy():
    return HashlibPolicy()


def _leaves(n):
    return sorted(sha256(f"leaf{i}".encode()) for i in range(n))


class TestProofShape:
    """Tests for generate_proof() output."""

    def test_two_leaves(self, policy):
        a, b = _leaves(2)
        levels = build_levels([a, b], policy)

        assert generate_proof(levels, a) == [ProofStep(b, ProofPosition.RIGHT)]
        assert generate_proof(levels, b) == [ProofStep(a, ProofPosition.LEFT)]

    def test_three_leaves_promoted_leaf(self, policy):
        d1, d2, d3 = _leaves(3)
        levels = build_levels([d1, d2, d3], policy)
        d12 = sha256(d1 + d2)

        # d3 has no sibling on the leaf level
        assert generate_proof(levels, d3) == [
            ProofStep(d3, ProofPosition.SELF),
            ProofStep(d12, ProofPosition.LEFT),
        ]
        assert generate_proof(levels, d1) == [
            ProofStep(d2, ProofPosition.RIGHT),
            ProofStep(d3, ProofPosition.RIGHT),
        ]

    def test_five_leaves_promoted_interior(self, policy):
        a, b, c, d, e = _leaves(5)
        levels = build_levels([a, b, c, d, e], policy)
        ab, cd = sha256(a + b), sha256(c + d)
        abcd = sha256(ab + cd)

        assert generate_proof(levels, e) == [
            ProofStep(e, ProofPosition.SELF),
            ProofStep(e, ProofPosition.SELF),
            ProofStep(abcd, ProofPosition.LEFT),
        ]
        assert generate_proof(levels, c) == [
            ProofStep(d, ProofPosition.RIGHT),
            ProofStep(ab, ProofPosition.LEFT),
            ProofStep(e, ProofPosition.RIGHT),
        ]

    def test_proof_length_is_depth_minus_one(self, policy):
        leaves = _leaves(6)
        levels = build_levels(leaves, policy)

        for leaf in leaves:
            assert len(generate_proof(levels, leaf)) == len(levels) - 1

    def test_single_leaf_empty_proof(self, policy):
        leaf = sha256(b"only")
        levels = build_levels([leaf], policy)

        assert generate_proof(levels, leaf) == []
        assert verify_proof(leaf, [], leaf, policy)

    def test_duplicate_digest_uses_first_occurrence(self, policy):
        a, b = _leaves(2)
        levels = build_levels([a, a, b], policy)

        assert generate_proof(levels, a)[0] == ProofStep(a, ProofPosition.RIGHT)


class TestNotFound:
    """Tests for absent results."""

    def test_empty_levels(self):
        assert generate_proof([], sha256(b"a")) is None

    def test_unknown_digest(self, policy):
        levels = build_levels(_leaves(4), policy)
        assert generate_proof(levels, sha256(b"missing")) is None

    def test_interior_digest_is_not_a_leaf(self, policy):
        levels = build_levels(_leaves(4), policy)
        assert generate_proof(levels, levels[1][0]) is None


class TestRoundTrip:
    """Every leaf proof reproduces the root."""

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6, 7, 8, 11, 16, 21])
    def test_every_leaf_verifies(self, policy, n):
        leaves = _leaves(n)
        levels = build_levels(leaves, policy)
        root = levels[0][0]

        for leaf in leaves:
            proof = generate_proof(levels, leaf)
            assert compute_root_from_proof(leaf, proof, policy) == root
            assert verify_proof(leaf, proof, root, policy), f"Proof failed for n={n}"


class TestTamperDetection:
    """Invalid proofs fail verification without raising."""

    def _setup(self, policy, n=4, index=1):
        leaves = _leaves(n)
        levels = build_levels(leaves, policy)
        leaf = leaves[index]
        return leaf, generate_proof(levels, leaf), levels[0][0]

    def test_tampered_sibling(self, policy):
        leaf, proof, root = self._setup(policy)
        proof[0] = ProofStep(sha256(b"tampered"), proof[0].position)

        assert not verify_proof(leaf, proof, root, policy)

    def test_tampered_leaf(self, policy):
        _, proof, root = self._setup(policy)
        assert not verify_proof(sha256(b"wrong leaf"), proof, root, policy)

    def test_tampered_root(self, policy):
        leaf, proof, _ = self._setup(policy)
        assert not verify_proof(leaf, proof, sha256(b"wrong root"), policy)

    def test_flipped_position(self, policy):
        leaf, proof, root = self._setup(policy)
        proof[0] = ProofStep(proof[0].digest, ProofPosition.RIGHT)

        assert not verify_proof(leaf, proof, root, policy)

    def test_empty_root(self, policy):
        leaf, proof, _ = self._setup(policy)
        assert not verify_proof(leaf, proof, b"", policy)

    def test_self_step_with_foreign_digest(self, policy):
        leaf, proof, root = self._setup(policy, n=3, index=2)
        assert proof[0].position == ProofPosition.SELF
        proof[0] = ProofStep(sha256(b"other"), ProofPosition.SELF)

        error = check_proof(leaf, proof, root, policy)

        assert error is not None
        assert error.code == ErrorCodes.MERKLE_PROOF_INVALID
        assert error.details == {"level": 0}


class TestCheckProof:
    """Structured failure reporting."""

    def test_valid_proof_returns_none(self, policy):
        leaves = _leaves(5)
        levels = build_levels(leaves, policy)
        proof = generate_proof(levels, leaves[3])

        assert check_proof(leaves[3], proof, levels[0][0], policy) is None

    def test_root_mismatch_reports_roots(self, policy):
        leaves = _leaves(4)
        levels = build_levels(leaves, policy)
        proof = generate_proof(levels, leaves[0])
        wrong_root = sha256(b"wrong root")

        error = check_proof(leaves[0], proof, wrong_root, policy)

        assert error.code == ErrorCodes.ROOT_MISMATCH
        assert error.leaf == encode_digest(leaves[0])
        assert error.expected_root == encode_digest(wrong_root)
        assert error.computed_root == encode_digest(levels[0][0])


class TestInclusionProofExport:
    """Tests for to_inclusion_proof() / from_inclusion_proof()."""

    def test_export_fields(self, policy):
        leaves = _leaves(3)
        levels = build_levels(leaves, policy)
        proof = generate_proof(levels, leaves[2])

        model = to_inclusion_proof(leaves[2], proof, levels[0][0], len(leaves))

        assert model.leaf == encode_digest(leaves[2])
        assert model.root == encode_digest(levels[0][0])
        assert model.leaf_count == 3
        assert [s.position for s in model.steps] == ["self", "left"]
        assert model.depth == 2

    def test_import_restores_verifiable_proof(self, policy):
        leaves = _leaves(6)
        levels = build_levels(leaves, policy)
        proof = generate_proof(levels, leaves[4])
        model = to_inclusion_proof(leaves[4], proof, levels[0][0], len(leaves))

        restored = InclusionProof.model_validate_json(model.model_dump_json())
        leaf, steps, root = from_inclusion_proof(restored)

        assert leaf == leaves[4]
        assert steps == proof
        assert verify_proof(leaf, steps, root, policy)

    def test_import_rejects_bad_encoding(self):
        model = InclusionProof(leaf="a*b", root="AAAA", leaf_count=1, steps=[])

        with pytest.raises(DigestEncodingException):
            from_inclusion_proof(model)
