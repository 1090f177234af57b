"""
Module 03 - Merkle Proofs Convenience Wrappers
Address-level wrappers around the functions in merkle_tree.py.

This module provides class-based interfaces:
- MerkleProver: Build trees and proofs straight from address lists
- MerkleVerifier: Verify proofs for an address or a raw leaf
"""
from __future__ import annotations

from typing import Sequence

from core.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    build_merkle_proof,
    build_tree,
    verify_merkle_proof,
)
from core.whitelist.leaves import build_leaves, hash_leaf


class MerkleProver:
    """
    Convenience class for generating whitelist proofs.

    Example:
        >>> tree = MerkleProver.tree_for_addresses(addresses)
        >>> proof = MerkleProver.prove(tree, index=1)
        >>> proof.verify()
        True
    """

    @staticmethod
    def tree_for_addresses(
        addresses: Sequence[str],
        *,
        enforce_checksum: bool = True,
    ) -> MerkleTree:
        """
        Hash addresses into leaves and build the tree.

        Raises:
            InvalidIdentifierException: If an address is malformed
            EmptyInputException: If addresses is empty
        """
        return build_tree(build_leaves(addresses, enforce_checksum=enforce_checksum))

    @staticmethod
    def prove(tree: MerkleTree, index: int) -> MerkleProof:
        """
        Generate a proof for the leaf at index.

        Raises:
            IndexOutOfRangeException: If index is out of range
        """
        return build_merkle_proof(tree, index)

    @staticmethod
    def prove_address(
        addresses: Sequence[str],
        index: int,
        *,
        enforce_checksum: bool = True,
    ) -> MerkleProof:
        """Build the tree for addresses and prove the one at index."""
        tree = MerkleProver.tree_for_addresses(addresses, enforce_checksum=enforce_checksum)
        return build_merkle_proof(tree, index)

    @staticmethod
    def compute_root(addresses: Sequence[str], *, enforce_checksum: bool = True) -> bytes:
        """32-byte root for an address list."""
        return MerkleProver.tree_for_addresses(
            addresses, enforce_checksum=enforce_checksum
        ).root


class MerkleVerifier:
    """
    Convenience class for verifying whitelist proofs.

    Both methods return a plain bool; a rejection is routine, not an error.
    """

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        return proof.verify()

    @staticmethod
    def verify_leaf(leaf: bytes, siblings: Sequence[bytes], root: bytes) -> bool:
        return verify_merkle_proof(leaf, siblings, root)

    @staticmethod
    def verify_address(
        address: str | bytes,
        siblings: Sequence[bytes],
        root: bytes,
        *,
        enforce_checksum: bool = True,
    ) -> bool:
        """
        Verify an address is included under root.

        The address is hashed into its leaf first.

        Raises:
            InvalidIdentifierException: If address is malformed
        """
        leaf = hash_leaf(address, enforce_checksum=enforce_checksum)
        return verify_merkle_proof(leaf, siblings, root)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
