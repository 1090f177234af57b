"""
Module 03 - Merkle Tree Unit Tests
Tests for core/merkle/merkle_tree.py

Required behavior:
1. Root determinism - same leaves -> same root across runs
2. Odd rule - an unpaired tail is hashed with itself
3. Proof verification - every index of every size verifies
4. Tamper detection - tampered sibling/leaf/root fails verification
5. Empty leaves - EmptyInputException
6. Single leaf - root equals leaf, proof is empty
"""
import pytest

from core.crypto.hashing import hash_pair, keccak256, to_hex
from core.merkle.merkle_tree import (
    MerkleProof,
    merkle_parent,
    build_tree,
    build_merkle_root,
    extract_proof,
    build_merkle_proof,
    compute_root_from_proof,
    verify_merkle_proof,
    compute_tree_height,
)
from core.merkle.merkle_proofs import MerkleProver, MerkleVerifier
from core.schemas.errors import EmptyInputException, IndexOutOfRangeException
from core.whitelist.leaves import build_leaves, hash_leaf

from fixtures import ADDR_1, ADDR_2, ADDR_3, make_addresses, make_tree


def _leaves(n: int) -> list[bytes]:
    return [keccak256(f"leaf-{i}".encode()) for i in range(n)]


class TestEmptyTree:
    """Tests for empty input behavior."""

    def test_build_tree_empty_raises(self):
        with pytest.raises(EmptyInputException):
            build_tree([])

    def test_build_root_empty_raises(self):
        with pytest.raises(EmptyInputException):
            build_merkle_root([])

    def test_empty_is_value_error(self):
        with pytest.raises(ValueError):
            build_tree([])

    def test_tree_height_zero_raises(self):
        with pytest.raises(EmptyInputException):
            compute_tree_height(0)


class TestSingleLeaf:
    """Tests for single leaf tree behavior."""

    def test_single_leaf_root_equals_leaf(self):
        leaf = hash_leaf(ADDR_1)
        tree = build_tree([leaf])

        assert tree.root == leaf
        assert len(tree.levels) == 1
        assert tree.height == 0

    def test_single_leaf_proof_empty(self):
        leaf = hash_leaf(ADDR_1)
        tree = build_tree([leaf])

        assert tree.proof(0) == []
        assert verify_merkle_proof(leaf, [], tree.root)

    def test_single_leaf_other_address_rejected(self):
        tree = build_tree([hash_leaf(ADDR_1)])
        assert not verify_merkle_proof(hash_leaf(ADDR_2), [], tree.root)


class TestTreeShape:
    """Tests for level structure and the odd rule."""

    def test_two_leaves(self):
        a, b = _leaves(2)
        tree = build_tree([a, b])

        assert tree.root == hash_pair(a, b)
        assert tree.proof(0) == [b]
        assert tree.proof(1) == [a]

    def test_three_addresses_odd_tail(self):
        """[a, b, c] -> [P(a,b), P(c,c)] -> root."""
        leaves = build_leaves([ADDR_1, ADDR_2, ADDR_3])
        tree = build_tree(leaves)
        a, b, c = leaves

        assert len(tree.levels) == 3
        assert tree.levels[1] == (hash_pair(a, b), hash_pair(c, c))
        assert tree.root == hash_pair(hash_pair(a, b), hash_pair(c, c))

    def test_three_addresses_pinned_hex(self):
        """Known-answer values for the 0x11.., 0x22.., 0x33.. whitelist."""
        tree = build_tree(build_leaves([ADDR_1, ADDR_2, ADDR_3]))

        assert [to_hex(leaf) for leaf in tree.leaves] == [
            "0xe2c07404b8c1df4c46226425cac68c28d27a766bbddce62309f36724839b22c0",
            "0x2ab0a4443bbea3fbe4d0e1503d11ff1367842fb0c8b28a5c8550f27599a40751",
            "0x37d95e0aa71e34defa88b4c43498bc8b90207e31ad0ef4aa6f5bea78bd25a1ab",
        ]
        assert [to_hex(node) for node in tree.levels[1]] == [
            "0x4beda981c9d34f2dd099131be6049a1d87676d227e63f4a409ee629043314b4f",
            "0x4ad7d722600407a80f307fb43e43824b98744c31669305c08bdb6e0ca8546641",
        ]
        assert to_hex(tree.root) == (
            "0xae1f4c9058acd97e42702c036a2d6dc7f6e03b30b82e64b7b2cbf9a60f6661e2"
        )

    def test_three_addresses_tail_proof_starts_with_itself(self):
        leaves = build_leaves([ADDR_1, ADDR_2, ADDR_3])
        tree = build_tree(leaves)

        proof = tree.proof(2)
        assert len(proof) == 2
        assert proof[0] == leaves[2]
        assert verify_merkle_proof(leaves[2], proof, tree.root)

    @pytest.mark.parametrize("n,expected_levels", [
        (1, 1), (2, 2), (3, 3), (4, 3), (5, 4), (8, 4), (9, 5),
    ])
    def test_level_count(self, n, expected_levels):
        tree = build_tree(_leaves(n))
        assert len(tree.levels) == expected_levels
        assert compute_tree_height(n) == expected_levels - 1

    def test_each_level_halves_rounding_up(self):
        tree = build_tree(_leaves(7))
        for lower, upper in zip(tree.levels, tree.levels[1:]):
            assert len(upper) == (len(lower) + 1) // 2
        assert len(tree.levels[-1]) == 1

    def test_leaf_order_preserved(self):
        leaves = _leaves(5)
        tree = build_tree(leaves)
        assert list(tree.leaves) == leaves
        assert tree.leaf_count == 5

    def test_rejects_non_digest_leaf(self):
        with pytest.raises(ValueError, match="32 bytes"):
            build_tree([b"\x01" * 20])


class TestDeterminism:
    """Same input always gives the same root."""

    def test_same_leaves_same_root(self):
        leaves = _leaves(6)
        assert build_merkle_root(leaves) == build_merkle_root(list(leaves))

    def test_same_addresses_same_root(self):
        addresses = make_addresses(7)
        assert make_tree(addresses).root == make_tree(list(addresses)).root

    def test_order_changes_root(self):
        leaves = _leaves(3)
        assert build_merkle_root(leaves) != build_merkle_root(leaves[::-1])

    def test_swapping_a_pair_keeps_root(self):
        """Sorted-pair hashing: swapping siblings leaves the root unchanged."""
        a, b, c, d = _leaves(4)
        assert build_merkle_root([a, b, c, d]) == build_merkle_root([b, a, c, d])

    def test_merkle_parent_commutative(self):
        a, b = _leaves(2)
        assert merkle_parent(a, b) == merkle_parent(b, a)


class TestProofRoundTrip:
    """Every index of every small tree verifies against its root."""

    @pytest.mark.parametrize("n", range(1, 10))
    def test_all_indices_verify(self, n):
        addresses = make_addresses(n)
        tree = make_tree(addresses)
        for i, address in enumerate(addresses):
            proof = tree.proof(i)
            assert len(proof) == tree.height
            assert verify_merkle_proof(hash_leaf(address), proof, tree.root)

    def test_compute_root_from_proof(self, tree):
        for i in range(tree.leaf_count):
            assert compute_root_from_proof(tree.leaves[i], tree.proof(i)) == tree.root

    def test_build_merkle_proof_dataclass(self, tree):
        proof = build_merkle_proof(tree, 3)

        assert isinstance(proof, MerkleProof)
        assert proof.index == 3
        assert proof.leaf == tree.leaves[3]
        assert proof.root == tree.root
        assert list(proof.siblings) == extract_proof(tree, 3)
        assert proof.verify()

    def test_proof_index_out_of_range(self, tree):
        with pytest.raises(IndexOutOfRangeException):
            extract_proof(tree, tree.leaf_count)
        with pytest.raises(IndexError):
            extract_proof(tree, -1)

    def test_negative_index_proof_rejected(self):
        leaf = keccak256(b"x")
        with pytest.raises(ValueError):
            MerkleProof(leaf=leaf, index=-1, siblings=(), root=leaf)


class TestTamperDetection:
    """Modified inputs are rejected with False, never an exception."""

    def test_tampered_sibling(self, tree):
        proof = tree.proof(1)
        proof[0] = keccak256(b"tampered")
        assert verify_merkle_proof(tree.leaves[1], proof, tree.root) is False

    def test_single_byte_flip_in_any_element(self, tree):
        for index in range(tree.leaf_count):
            proof = tree.proof(index)
            for pos in range(len(proof)):
                mutated = list(proof)
                mutated[pos] = bytes([proof[pos][0] ^ 0x01]) + proof[pos][1:]
                assert not verify_merkle_proof(tree.leaves[index], mutated, tree.root)

    def test_tampered_leaf(self, tree):
        proof = tree.proof(1)
        assert verify_merkle_proof(keccak256(b"other"), proof, tree.root) is False

    def test_tampered_root(self, tree):
        proof = tree.proof(1)
        assert verify_merkle_proof(tree.leaves[1], proof, keccak256(b"root")) is False

    def test_truncated_proof(self, tree):
        proof = tree.proof(1)
        assert verify_merkle_proof(tree.leaves[1], proof[:-1], tree.root) is False

    def test_empty_proof_rejected_when_tree_has_height(self, tree):
        assert tree.height > 0
        assert verify_merkle_proof(tree.leaves[0], [], tree.root) is False

    def test_proof_for_other_index(self, tree):
        assert verify_merkle_proof(tree.leaves[0], tree.proof(2), tree.root) is False


class TestMerkleProverVerifier:
    """Tests for the address-level convenience classes."""

    def test_prove_and_verify(self, addresses):
        proof = MerkleProver.prove_address(addresses, 2)
        assert MerkleVerifier.verify(proof)

    def test_compute_root_matches_tree(self, addresses, tree):
        assert MerkleProver.compute_root(addresses) == tree.root

    def test_verify_address(self, addresses, tree):
        assert MerkleVerifier.verify_address(addresses[4], tree.proof(4), tree.root)
        assert not MerkleVerifier.verify_address(addresses[3], tree.proof(4), tree.root)

    def test_verify_address_case_insensitive(self, addresses, tree):
        assert MerkleVerifier.verify_address(addresses[0].lower(), tree.proof(0), tree.root)

    def test_verify_leaf(self, tree):
        assert MerkleVerifier.verify_leaf(tree.leaves[0], tree.proof(0), tree.root)
