"""
Module 02 - Hashing Utilities
Keccak-256 hashing and hex helpers shared by the whitelist tree builder,
the offline verifier and the ballot registry.

This module provides:
- keccak256 hashing for raw bytes (Ethereum variant, not NIST SHA3-256)
- Canonical pair ordering + hashing for Merkle parents
- Hex encoding/decoding with 0x prefix
- Strict bytes32 digest parsing

Determinism Notes:
- Pair ordering compares raw bytes (unsigned, lexicographic), never text
- Every node combination in the system goes through hash_pair()
"""
from __future__ import annotations

import re

from eth_utils import keccak

from core.schemas.errors import InvalidDigestException


DIGEST_SIZE = 32

# 32-byte all-zero value: "no whitelist" sentinel for ballot roots
ZERO_DIGEST: bytes = b"\x00" * DIGEST_SIZE

_DIGEST_HEX_RE = re.compile(r"0x[0-9a-fA-F]{64}")


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=bytes(data))


def order_pair(a: bytes, b: bytes) -> tuple[bytes, bytes]:
    """Return (a, b) sorted by unsigned byte comparison, smaller first."""
    if a <= b:
        return a, b
    return b, a


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two digests in canonical order.

    parent = keccak256(min(a, b) + max(a, b))

    The result does not depend on argument order, so verifiers never
    need to know whether a sibling sat on the left or the right.

    Args:
        a: First digest (32 bytes)
        b: Second digest (32 bytes)

    Returns:
        32-byte parent digest
    """
    first, second = order_pair(a, b)
    return keccak256(first + second)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith(("0x", "0X")):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def is_digest_hex(value: str) -> bool:
    """Check whether value is a 0x-prefixed 32-byte hex string (either case)."""
    return isinstance(value, str) and _DIGEST_HEX_RE.fullmatch(value) is not None


def parse_digest(value: str | bytes) -> bytes:
    """
    Parse a bytes32 digest.

    Accepts raw 32-byte values or 0x-prefixed 64-character hex strings in
    lowercase or uppercase. Whitespace anywhere is rejected.

    Raises:
        InvalidDigestException: If the value is not a well-formed digest
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != DIGEST_SIZE:
            raise InvalidDigestException(
                f"Digest must be {DIGEST_SIZE} bytes, got {len(value)}",
                value=value.hex(),
            )
        return bytes(value)

    if not is_digest_hex(value):
        raise InvalidDigestException(
            f"Digest must be a 0x-prefixed 64-character hex string, got {value!r}",
            value=str(value),
        )
    return bytes.fromhex(value[2:])


def is_zero_digest(value: bytes) -> bool:
    """Check for the all-zero sentinel."""
    return value == ZERO_DIGEST


__all__ = [
    "DIGEST_SIZE",
    "ZERO_DIGEST",
    "keccak256",
    "order_pair",
    "hash_pair",
    "to_hex",
    "from_hex",
    "is_digest_hex",
    "parse_digest",
    "is_zero_digest",
]
