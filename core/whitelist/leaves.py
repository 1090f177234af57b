"""
Module 04 - Whitelist Leaves
Address normalization and leaf hashing.

Rules:
- Input may omit the 0x prefix
- All-lowercase or all-uppercase hex is accepted as-is
- Mixed-case hex must carry a valid EIP-55 checksum (unless disabled)
- Canonical form is the EIP-55 checksummed, 0x-prefixed string
- leaf = keccak256(20 raw address bytes), same as
  keccak256(abi.encodePacked(address)) in Solidity

Leaves are never deduplicated or sorted: input order decides leaf indices.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from eth_utils import to_canonical_address, to_checksum_address

from core.crypto.hashing import keccak256
from core.schemas.errors import InvalidIdentifierException
from core.schemas.proofs import InvalidRow


logger = logging.getLogger(__name__)

ADDRESS_SIZE = 20

_ADDRESS_RE = re.compile(r"(0x)?[0-9a-fA-F]{40}")


def normalize_address(value: str, *, enforce_checksum: bool = True) -> str:
    """
    Normalize an address string to its EIP-55 checksummed form.

    Args:
        value: Address text, with or without 0x prefix
        enforce_checksum: Reject mixed-case input whose checksum is wrong

    Returns:
        Canonical checksummed address (e.g. "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed")

    Raises:
        InvalidIdentifierException: If the value is not a well-formed address
    """
    if not isinstance(value, str):
        raise InvalidIdentifierException(
            f"Address must be a string, got {type(value).__name__}",
            value=repr(value),
        )

    if not value:
        raise InvalidIdentifierException("Address is empty", value=value)

    if not _ADDRESS_RE.fullmatch(value):
        raise InvalidIdentifierException(
            f"Malformed address: {value!r}",
            value=value,
        )

    body = value[2:] if value.startswith("0x") else value
    checksummed = to_checksum_address("0x" + body.lower())

    mixed_case = body != body.lower() and body != body.upper()
    if mixed_case and enforce_checksum and checksummed[2:] != body:
        raise InvalidIdentifierException(
            f"Bad address checksum: {value!r}",
            value=value,
        )

    return checksummed


def address_to_bytes(value: str, *, enforce_checksum: bool = True) -> bytes:
    """Canonical 20-byte form of an address string."""
    normalized = normalize_address(value, enforce_checksum=enforce_checksum)
    return to_canonical_address(normalized)


def hash_leaf(value: str | bytes, *, enforce_checksum: bool = True) -> bytes:
    """
    Compute the leaf digest for one address.

    Args:
        value: Address string, or its raw 20-byte form

    Returns:
        32-byte keccak256 of the raw address bytes
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != ADDRESS_SIZE:
            raise InvalidIdentifierException(
                f"Address must be {ADDRESS_SIZE} bytes, got {len(value)}",
                value=bytes(value).hex(),
            )
        return keccak256(bytes(value))
    return keccak256(address_to_bytes(value, enforce_checksum=enforce_checksum))


def build_leaves(
    addresses: Sequence[str],
    *,
    enforce_checksum: bool = True,
) -> list[bytes]:
    """
    Build one leaf per address, preserving input order 1:1.

    Raises:
        InvalidIdentifierException: For the first malformed address,
            with its index attached
    """
    leaves: list[bytes] = []
    for index, address in enumerate(addresses):
        try:
            leaves.append(hash_leaf(address, enforce_checksum=enforce_checksum))
        except InvalidIdentifierException as e:
            raise InvalidIdentifierException(e.message, value=e.value, index=index) from e
    return leaves


@dataclass
class AddressPartition:
    """Valid addresses (normalized, input order) and the rows that failed."""
    addresses: list[str] = field(default_factory=list)
    invalid: list[InvalidRow] = field(default_factory=list)

    @property
    def valid_count(self) -> int:
        return len(self.addresses)

    @property
    def invalid_count(self) -> int:
        return len(self.invalid)


def partition_addresses(
    values: Iterable[str | None],
    *,
    first_row: int = 1,
    enforce_checksum: bool = True,
) -> AddressPartition:
    """
    Normalize a batch, collecting every invalid row instead of aborting.

    Values are trimmed before parsing. Row numbers start at first_row
    (use 2 for CSV data under a header line).
    """
    result = AddressPartition()
    for offset, raw in enumerate(values):
        row = first_row + offset
        text = (raw or "").strip()
        if not text:
            result.invalid.append(InvalidRow(row=row, raw=raw or "", reason="empty"))
            continue
        try:
            result.addresses.append(
                normalize_address(text, enforce_checksum=enforce_checksum)
            )
        except InvalidIdentifierException as e:
            result.invalid.append(InvalidRow(row=row, raw=raw or "", reason=e.message))

    if result.invalid:
        logger.warning(
            f"{result.invalid_count} invalid address rows, "
            f"{result.valid_count} valid"
        )
    return result


__all__ = [
    "ADDRESS_SIZE",
    "normalize_address",
    "address_to_bytes",
    "hash_leaf",
    "build_leaves",
    "AddressPartition",
    "partition_addresses",
]
