"""
Module 04 - Address Whitelist

Offline tooling that turns an address list into a ballot whitelist:
- leaves: address normalization and leaf hashing
- csv_source: address column extraction from CSV text
- generator: root + per-address proofs with a pre-flight self-check
- lookup: find a voter's proof in proofs.json

Usage:
    from core.whitelist import generate_whitelist

    artifact = generate_whitelist(["0x1111...", "0x2222..."])
    artifact.root                  # "0x..."
    artifact.proofs[address].proof # ["0x...", ...]
"""
from .leaves import (
    ADDRESS_SIZE,
    AddressPartition,
    address_to_bytes,
    build_leaves,
    hash_leaf,
    normalize_address,
    partition_addresses,
)
from .csv_source import (
    AddressColumn,
    AddressSourceError,
    detect_header,
    read_address_column,
    read_address_file,
)
from .generator import (
    find_duplicates,
    generate_from_column,
    generate_whitelist,
    run_self_check,
)
from .lookup import FoundProof, find_proof


__all__ = [
    "ADDRESS_SIZE",
    "AddressPartition",
    "address_to_bytes",
    "build_leaves",
    "hash_leaf",
    "normalize_address",
    "partition_addresses",
    "AddressColumn",
    "AddressSourceError",
    "detect_header",
    "read_address_column",
    "read_address_file",
    "find_duplicates",
    "generate_from_column",
    "generate_whitelist",
    "run_self_check",
    "FoundProof",
    "find_proof",
]
