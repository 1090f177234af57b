"""
Core cryptographic utilities.

Module 02 provides Keccak-256 hashing and digest helpers.
"""
from .hashing import (
    DIGEST_SIZE,
    ZERO_DIGEST,
    keccak256,
    order_pair,
    hash_pair,
    to_hex,
    from_hex,
    is_digest_hex,
    parse_digest,
    is_zero_digest,
)

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
