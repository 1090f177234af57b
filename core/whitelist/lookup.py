"""
Module 04 - Proof Lookup
Find a voter's entry in a loaded proofs.json document.
"""
from __future__ import annotations

from dataclasses import dataclass

from core.schemas.proofs import ProofEntry, ProofsFile
from core.whitelist.leaves import normalize_address


@dataclass(frozen=True)
class FoundProof:
    address: str
    entry: ProofEntry


def find_proof(
    proofs: ProofsFile | dict[str, ProofEntry],
    address: str,
    *,
    enforce_checksum: bool = True,
) -> FoundProof | None:
    """
    Look up the proof entry for an address.

    The address is normalized first; the exact checksummed key is tried,
    then a case-insensitive match over the document's keys.

    Raises:
        InvalidIdentifierException: If address is malformed
    """
    mapping = proofs.root if isinstance(proofs, ProofsFile) else proofs
    normalized = normalize_address(address.strip(), enforce_checksum=enforce_checksum)

    entry = mapping.get(normalized)
    if entry is not None:
        return FoundProof(address=normalized, entry=entry)

    wanted = normalized.lower()
    for key, value in mapping.items():
        if key.lower() == wanted:
            return FoundProof(address=key, entry=value)
    return None


__all__ = ["FoundProof", "find_proof"]
