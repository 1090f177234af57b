"""
Common test fixtures shared by all modules.

Provides factory functions for core BallotProof data structures:
- Addresses (checksummed, deterministic)
- Leaves and trees built from them
- BallotRegistry with a controllable clock
- CSV text for address sources

These are the foundational building blocks used by the unit tests.
"""

from typing import Optional, Sequence

from eth_utils import to_checksum_address

from core.ballots import BallotRegistry
from core.crypto.hashing import ZERO_DIGEST
from core.merkle.merkle_tree import MerkleTree, build_tree
from core.whitelist.leaves import build_leaves


# EIP-55 reference vectors (valid checksums)
CHECKSUM_VECTORS = [
    "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
    "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
    "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
]

# Three addresses made of a single repeated digit
ADDR_1 = "0x" + "1" * 40
ADDR_2 = "0x" + "2" * 40
ADDR_3 = "0x" + "3" * 40

OWNER = "0x" + "a" * 40
OUTSIDER = "0x" + "b" * 40

START = 1_700_000_000
END = START + 3600


# =============================================================================
# Address Factories
# =============================================================================

def make_address(i: int) -> str:
    """Deterministic checksummed address for index i (never the zero address)."""
    return to_checksum_address("0x" + format(i + 1, "040x"))


def make_addresses(n: int, offset: int = 0) -> list[str]:
    """n distinct checksummed addresses."""
    return [make_address(offset + i) for i in range(n)]


def make_tree(addresses: Sequence[str]) -> MerkleTree:
    """Build the whitelist tree for a list of addresses."""
    return build_tree(build_leaves(addresses))


def make_csv(
    addresses: Sequence[str],
    header: Optional[str] = "address",
    extra_columns: bool = False,
) -> str:
    """
    Render addresses as CSV text.

    With extra_columns, each row is "name,<address>,weight" and the header
    is "name,address,weight".
    """
    lines: list[str] = []
    if extra_columns:
        lines.append("name,address,weight")
        for i, a in enumerate(addresses):
            lines.append(f"voter{i},{a},1")
    else:
        if header is not None:
            lines.append(header)
        lines.extend(addresses)
    return "\n".join(lines) + "\n"


# =============================================================================
# Registry Factories
# =============================================================================

class FakeClock:
    """Settable clock returning unix seconds."""

    def __init__(self, now: int = START) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


def make_registry(
    now: int = START,
    owner: Optional[str] = OWNER,
) -> tuple[BallotRegistry, FakeClock]:
    """Registry with a FakeClock set to now."""
    clock = FakeClock(now)
    return BallotRegistry(owner=owner, clock=clock), clock


def make_ballot(
    registry: BallotRegistry,
    merkle_root: bytes = ZERO_DIGEST,
    candidates: Sequence[str] = ("Alice", "Bob"),
    title: str = "Board election",
    start: int = START,
    end: int = END,
) -> int:
    """Create a ballot and return its id."""
    return registry.create_ballot(
        title=title,
        start=start,
        end=end,
        merkle_root=merkle_root,
        candidates=candidates,
    )
