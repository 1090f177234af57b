"""
Module 03 - Merkle Tree Implementation
Deterministic sorted-pair Merkle tree construction, proof extraction,
and verification.

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(20-byte address)
   - Implemented in core.whitelist.leaves.hash_leaf()
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
   - Byte-wise unsigned comparison, see core.crypto.hashing.hash_pair()
3. Odd rule: the unpaired last node at any level is paired with itself
4. Empty leaves: not a tree, raises EmptyInputException
5. Single leaf: root = leaf, tree has one level, proofs are empty

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf ordering is defined by the caller and never sorted here;
  it decides which index (and so which proof) each address receives
- Verification only needs the sibling list, never a left/right flag
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import DIGEST_SIZE, hash_pair
from core.schemas.errors import EmptyInputException, IndexOutOfRangeException


Level = tuple[bytes, ...]


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf digest being proven (32 bytes)
        index: The 0-based index of the leaf in the original leaf list
        siblings: Sibling digests from bottom to top of the tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: tuple[bytes, ...]
    root: bytes

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    def verify(self) -> bool:
        """Check this proof against its own root."""
        return verify_merkle_proof(self.leaf, self.siblings, self.root)


@dataclass(frozen=True)
class MerkleTree:
    """
    A fully built Merkle tree.

    levels[0] holds the leaves in input order; levels[-1] holds the root.
    Level i+1 always has ceil(len(levels[i]) / 2) nodes.
    """
    levels: tuple[Level, ...]

    @property
    def root(self) -> bytes:
        return self.levels[-1][0]

    @property
    def leaves(self) -> Level:
        return self.levels[0]

    @property
    def leaf_count(self) -> int:
        return len(self.levels[0])

    @property
    def height(self) -> int:
        """Number of levels above the leaves (= proof length)."""
        return len(self.levels) - 1

    def proof(self, index: int) -> list[bytes]:
        """Sibling digests for the leaf at index, bottom-up."""
        return extract_proof(self, index)


def merkle_parent(a: bytes, b: bytes) -> bytes:
    """
    Compute the parent of two child nodes.

    Children are ordered by byte value before hashing, so
    merkle_parent(a, b) == merkle_parent(b, a).
    """
    return hash_pair(a, b)


def _next_level(level: Level) -> Level:
    parents: list[bytes] = []
    for i in range(0, len(level), 2):
        left = level[i]
        # Unpaired tail is combined with itself
        right = level[i + 1] if i + 1 < len(level) else left
        parents.append(merkle_parent(left, right))
    return tuple(parents)


def build_tree(leaves: Sequence[bytes]) -> MerkleTree:
    """
    Build the full level structure from a sequence of leaf digests.

    Algorithm:
    1. If empty: raise EmptyInputException
    2. Level 0 is the leaves as given
    3. While the current level has more than one node:
       - Combine consecutive pairs with merkle_parent()
       - An odd tail is combined with itself
    4. The single node left is the root

    Example: [a, b, c] -> [P(a,b), P(c,c)] -> [P(P(a,b), P(c,c))]

    Args:
        leaves: Sequence of 32-byte leaf digests. Order matters and is preserved.

    Returns:
        MerkleTree holding every level

    Raises:
        EmptyInputException: If leaves is empty
        ValueError: If a leaf is not 32 bytes
    """
    if len(leaves) == 0:
        raise EmptyInputException()

    for i, leaf in enumerate(leaves):
        if len(leaf) != DIGEST_SIZE:
            raise ValueError(
                f"Leaf {i} must be {DIGEST_SIZE} bytes, got {len(leaf)}"
            )

    level: Level = tuple(bytes(leaf) for leaf in leaves)
    levels: list[Level] = [level]

    while len(level) > 1:
        level = _next_level(level)
        levels.append(level)

    return MerkleTree(levels=tuple(levels))


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """Compute only the root for a sequence of leaf digests."""
    return build_tree(leaves).root


def extract_proof(tree: MerkleTree, index: int) -> list[bytes]:
    """
    Collect the sibling digests from the leaf at index up to the root.

    At each level the sibling of position i is i ^ 1. When that position
    does not exist (i is the unpaired tail) the node itself is used,
    mirroring the self-pairing done during construction.

    Raises:
        IndexOutOfRangeException: If index is outside [0, leaf_count)
    """
    if index < 0 or index >= tree.leaf_count:
        raise IndexOutOfRangeException(index, tree.leaf_count)

    siblings: list[bytes] = []
    current = index
    for level in tree.levels[:-1]:
        sibling_index = current ^ 1
        if sibling_index < len(level):
            siblings.append(level[sibling_index])
        else:
            siblings.append(level[current])
        current //= 2

    return siblings


def build_merkle_proof(tree: MerkleTree, index: int) -> MerkleProof:
    """
    Generate a MerkleProof for the leaf at the given index.

    Raises:
        IndexOutOfRangeException: If index is out of range
    """
    siblings = extract_proof(tree, index)
    return MerkleProof(
        leaf=tree.leaves[index],
        index=index,
        siblings=tuple(siblings),
        root=tree.root,
    )


def compute_root_from_proof(leaf: bytes, proof: Sequence[bytes]) -> bytes:
    """Fold merkle_parent() over the proof starting from the leaf."""
    current = leaf
    for sibling in proof:
        current = merkle_parent(current, sibling)
    return current


def verify_merkle_proof(leaf: bytes, proof: Sequence[bytes], root: bytes) -> bool:
    """
    Verify that leaf is included under root.

    Recomputes the root by combining the running digest with each proof
    element in order, then compares against the expected root. A mismatch
    is an ordinary False, never an exception.

    Args:
        leaf: Claimed leaf digest
        proof: Sibling digests, bottom-up
        root: Expected root digest

    Returns:
        True if the proof reconstructs root, False otherwise
    """
    return compute_root_from_proof(leaf, proof) == root


def compute_tree_height(num_leaves: int) -> int:
    """
    Number of levels above the leaves for num_leaves leaves.

    This is also the length of every proof in that tree.
    A single leaf has height 0; an empty list has no tree.
    """
    if num_leaves <= 0:
        raise EmptyInputException()

    height = 0
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        height += 1
    return height


__all__ = [
    "Level",
    "MerkleProof",
    "MerkleTree",
    "merkle_parent",
    "build_tree",
    "build_merkle_root",
    "extract_proof",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "compute_tree_height",
]
