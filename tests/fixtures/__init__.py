"""
Test fixtures package for BallotProof tests.

This package provides factory functions for creating test objects:
- common.py: addresses, trees, CSV text, registries with a fake clock

Usage:
    from fixtures import make_addresses, make_ballot, make_registry

    def test_something():
        registry, clock = make_registry()
        ballot_id = make_ballot(registry)
"""

from .common import (
    ADDR_1,
    ADDR_2,
    ADDR_3,
    CHECKSUM_VECTORS,
    END,
    OUTSIDER,
    OWNER,
    START,
    FakeClock,
    make_address,
    make_addresses,
    make_ballot,
    make_csv,
    make_registry,
    make_tree,
)

__all__ = [
    "ADDR_1",
    "ADDR_2",
    "ADDR_3",
    "CHECKSUM_VECTORS",
    "END",
    "OUTSIDER",
    "OWNER",
    "START",
    "FakeClock",
    "make_address",
    "make_addresses",
    "make_ballot",
    "make_csv",
    "make_registry",
    "make_tree",
]
