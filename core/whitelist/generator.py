"""
Module 04 - Whitelist Generator
Address list -> root + per-address proofs, with a pre-flight self-check.

Flow:
1. Normalize every input value, collecting invalid rows
2. Hash valid addresses into leaves (input order kept)
3. Build the tree and read the root
4. Extract one proof per leaf index
5. Optionally verify every proof against the root before export
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from core.crypto.hashing import to_hex
from core.merkle.merkle_tree import MerkleTree, build_merkle_root, build_tree, verify_merkle_proof
from core.schemas.errors import EmptyInputException
from core.schemas.proofs import IndexedProof, ProofEntry, WhitelistArtifact
from core.schemas.verification import ChallengeRef, CheckResult, VerificationResult
from core.whitelist.csv_source import AddressColumn
from core.whitelist.leaves import build_leaves, partition_addresses


logger = logging.getLogger(__name__)


def find_duplicates(addresses: Sequence[str]) -> list[str]:
    """Addresses listed more than once, sorted."""
    return sorted(a for a, n in Counter(addresses).items() if n > 1)


def run_self_check(tree: MerkleTree, addresses: Sequence[str]) -> VerificationResult:
    """
    Verify the tree root and every extracted proof before export.

    Checks, in order:
    - root_recomputed: the root rebuilt from the leaves equals tree.root
    - proof_<i>: the proof of leaf i reconstructs tree.root
    - duplicates (warning only): an address occupies more than one leaf

    Any failure means the builder and verifier disagree on the
    hashing/ordering protocol, so the artifact must not be published.
    A wrong root is blamed before any single leaf.
    """
    result = VerificationResult()
    root = tree.root

    expected_root = build_merkle_root(list(tree.leaves))
    if expected_root == root:
        result.add_check(CheckResult.passed(
            "root_recomputed",
            "Root matches the root rebuilt from leaves",
        ))
    else:
        result.add_check(CheckResult.failed(
            "root_recomputed",
            "Root differs from the root rebuilt from leaves",
            details={"root": to_hex(root), "expected_root": to_hex(expected_root)},
        ))
        result.challenge = ChallengeRef.for_root(
            to_hex(expected_root),
            reason="stored root does not match leaves",
        )

    for index, leaf in enumerate(tree.leaves):
        address = addresses[index] if index < len(addresses) else None
        proof = tree.proof(index)
        check_id = f"proof_{index}"
        if verify_merkle_proof(leaf, proof, root):
            result.add_check(CheckResult.passed(
                check_id,
                f"Proof for index {index} reconstructs root",
                details={"address": address},
            ))
        else:
            result.add_check(CheckResult.failed(
                check_id,
                f"Proof for index {index} does not reconstruct root",
                details={"address": address},
            ))
            if result.challenge is None:
                result.challenge = ChallengeRef.for_leaf(
                    leaf_index=index,
                    address=address,
                    reason="self-check root mismatch",
                )

    duplicates = find_duplicates(addresses)
    if duplicates:
        result.add_check(CheckResult.warning(
            "duplicates",
            f"{len(duplicates)} addresses appear more than once",
            details={"addresses": duplicates},
        ))
    return result


def generate_whitelist(
    values: Sequence[str],
    *,
    enforce_checksum: bool = True,
    self_check: bool = True,
    first_row: int = 1,
) -> WhitelistArtifact:
    """
    Build the whitelist artifact for a list of raw address values.

    Invalid values are reported in invalid_rows and skipped; the tree is
    built over the remaining addresses in their original order.

    Raises:
        EmptyInputException: If no value is a valid address
    """
    partition = partition_addresses(
        values,
        first_row=first_row,
        enforce_checksum=enforce_checksum,
    )
    addresses = partition.addresses
    if not addresses:
        raise EmptyInputException("No valid addresses to build tree")

    leaves = build_leaves(addresses, enforce_checksum=enforce_checksum)
    tree = build_tree(leaves)
    logger.info(
        f"Built whitelist tree: {tree.leaf_count} leaves, "
        f"{len(tree.levels)} levels, root={to_hex(tree.root)}"
    )

    duplicates = find_duplicates(addresses)
    if duplicates:
        logger.warning(
            f"{len(duplicates)} duplicated addresses kept as separate leaves: "
            f"{', '.join(duplicates[:5])}{'...' if len(duplicates) > 5 else ''}"
        )

    entries: list[IndexedProof] = []
    proofs: dict[str, ProofEntry] = {}
    for index, address in enumerate(addresses):
        proof = tree.proof(index)
        entry = ProofEntry.from_bytes(tree.leaves[index], proof)
        entries.append(IndexedProof(
            index=index,
            address=address,
            leaf=entry.leaf,
            proof=entry.proof,
        ))
        proofs[address] = entry

    check_result = None
    if self_check:
        check_result = run_self_check(tree, addresses)
        if check_result.ok:
            logger.info(f"Self-check passed: {check_result.passed_count} checks")
        else:
            logger.error(
                f"Self-check failed: {check_result.error_count} checks"
            )

    return WhitelistArtifact(
        root=to_hex(tree.root),
        addresses=list(addresses),
        entries=entries,
        proofs=proofs,
        invalid_rows=partition.invalid,
        duplicates=duplicates,
        height=tree.height,
        self_check=check_result,
    )


def generate_from_column(
    column: AddressColumn,
    *,
    enforce_checksum: bool = True,
    self_check: bool = True,
) -> WhitelistArtifact:
    """generate_whitelist() over a CSV column, keeping its row numbering."""
    return generate_whitelist(
        column.values,
        enforce_checksum=enforce_checksum,
        self_check=self_check,
        first_row=column.first_row,
    )


__all__ = [
    "find_duplicates",
    "run_self_check",
    "generate_whitelist",
    "generate_from_column",
]
