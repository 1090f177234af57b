"""
Module 03 - Merkle Tree and Whitelist Commitments
Deterministic sorted-pair Merkle tree construction + proof extraction/verification.

This module provides:
- MerkleTree: Full level structure (leaves -> root)
- MerkleProof: Dataclass representing an inclusion proof
- build_tree / build_merkle_root: Build from leaf digests
- extract_proof / build_merkle_proof: Sibling list for a leaf index
- verify_merkle_proof: Recompute and compare the root

Canonical Commitment Rules:
1. Leaf hashing: keccak256(20-byte address)
2. Parent hashing: keccak256(min(a, b) + max(a, b))
3. Odd tail: paired with itself at every level
4. Empty input: EmptyInputException
5. Single leaf: root = leaf

Usage:
    from core.merkle import build_tree, verify_merkle_proof
    from core.whitelist import build_leaves

    tree = build_tree(build_leaves(addresses))
    proof = tree.proof(2)
    assert verify_merkle_proof(tree.leaves[2], proof, tree.root)
"""
from .merkle_tree import (
    Level,
    MerkleProof,
    MerkleTree,
    merkle_parent,
    build_tree,
    build_merkle_root,
    extract_proof,
    build_merkle_proof,
    compute_root_from_proof,
    verify_merkle_proof,
    compute_tree_height,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "Level",
    "MerkleProof",
    "MerkleTree",
    # Core functions
    "merkle_parent",
    "build_tree",
    "build_merkle_root",
    "extract_proof",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "compute_tree_height",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
