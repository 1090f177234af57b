"""
Module 01 - Schemas
File: proofs.py

Purpose: Transport models for whitelist roots and per-address proofs.

proofs.json layout (address -> entry):
    {
      "0xAbC...": {"leaf": "0x...", "proof": ["0x...", "0x..."]},
      ...
    }

merkle_root.json layout:
    {"root": "0x..."}

Digests are accepted in either hex case and always emitted lowercase.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

from core.crypto.hashing import parse_digest, to_hex
from core.schemas.verification import VerificationResult


def _normalize_digest_hex(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("digest must be a hex string")
    return to_hex(parse_digest(value))


def parse_proof_text(text: str) -> list[bytes]:
    """
    Parse a comma-separated proof as pasted into a vote form.

    Blank input means an empty proof. Entries are trimmed; each must be a
    0x-prefixed bytes32 hex string.

    Raises:
        InvalidDigestException: If any entry is malformed
    """
    if not text or not text.strip():
        return []
    parts = [p.strip() for p in text.split(",")]
    return [parse_digest(p) for p in parts if p]


def format_proof_text(proof: list[bytes]) -> str:
    """Inverse of parse_proof_text()."""
    return ",".join(to_hex(p) for p in proof)


class InvalidRow(BaseModel):
    """An input row that could not be parsed as an address."""

    model_config = ConfigDict(extra="forbid")

    row: int = Field(..., description="Row number in the source (1-based)")
    raw: str = Field(..., description="Raw cell value as read")
    reason: str = Field(default="", description="Why the value was rejected")


class ProofEntry(BaseModel):
    """Leaf and sibling list for one address."""

    model_config = ConfigDict(extra="forbid")

    leaf: str = Field(..., description="Leaf digest (0x-prefixed bytes32)")
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests, bottom-up",
    )

    @field_validator("leaf", mode="before")
    @classmethod
    def _check_leaf(cls, v: Any) -> str:
        return _normalize_digest_hex(v)

    @field_validator("proof", mode="before")
    @classmethod
    def _check_proof(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            raise ValueError("proof must be a list of hex digests")
        return [_normalize_digest_hex(item) for item in v]

    def leaf_bytes(self) -> bytes:
        return parse_digest(self.leaf)

    def proof_bytes(self) -> list[bytes]:
        return [parse_digest(p) for p in self.proof]

    @classmethod
    def from_bytes(cls, leaf: bytes, proof: list[bytes]) -> "ProofEntry":
        return cls(leaf=to_hex(leaf), proof=[to_hex(p) for p in proof])


class ProofsFile(RootModel[dict[str, ProofEntry]]):
    """The address-keyed proofs.json document."""

    def get(self, address: str) -> ProofEntry | None:
        return self.root.get(address)

    def __len__(self) -> int:
        return len(self.root)


class RootFile(BaseModel):
    """The merkle_root.json document."""

    model_config = ConfigDict(extra="forbid")

    root: str = Field(..., description="Whitelist Merkle root")

    @field_validator("root", mode="before")
    @classmethod
    def _check_root(cls, v: Any) -> str:
        return _normalize_digest_hex(v)


class IndexedProof(BaseModel):
    """Proof bound to its leaf index (duplicates keep separate entries)."""

    model_config = ConfigDict(extra="forbid")

    index: int = Field(..., ge=0)
    address: str
    leaf: str
    proof: list[str] = Field(default_factory=list)


class WhitelistArtifact(BaseModel):
    """Everything produced by one whitelist generation run."""

    model_config = ConfigDict(extra="forbid")

    root: str = Field(..., description="Merkle root (0x-prefixed bytes32)")
    addresses: list[str] = Field(
        default_factory=list,
        description="Normalized addresses in leaf order",
    )
    entries: list[IndexedProof] = Field(
        default_factory=list,
        description="One proof per leaf index",
    )
    proofs: dict[str, ProofEntry] = Field(
        default_factory=dict,
        description="Address-keyed proofs (later duplicates replace earlier ones)",
    )
    invalid_rows: list[InvalidRow] = Field(default_factory=list)
    duplicates: list[str] = Field(default_factory=list)
    height: int = Field(default=0, ge=0)
    self_check: VerificationResult | None = Field(default=None)

    def root_file(self) -> RootFile:
        return RootFile(root=self.root)

    def proofs_file(self) -> ProofsFile:
        return ProofsFile(self.proofs)


def load_proofs_file(path: str | Path) -> ProofsFile:
    """Load and validate a proofs.json document."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return ProofsFile.model_validate(data)


def save_proofs_file(proofs: ProofsFile, path: str | Path) -> Path:
    """Write proofs.json with two-space indentation."""
    path = Path(path)
    path.write_text(
        json.dumps(proofs.model_dump(mode="json"), indent=2) + "\n",
        encoding="utf-8",
    )
    return path


def load_root_file(path: str | Path) -> RootFile:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        return RootFile.model_validate(json.load(f))


def save_root_file(root: RootFile, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(json.dumps(root.model_dump(mode="json"), indent=2) + "\n", encoding="utf-8")
    return path


__all__ = [
    "parse_proof_text",
    "format_proof_text",
    "InvalidRow",
    "ProofEntry",
    "ProofsFile",
    "RootFile",
    "IndexedProof",
    "WhitelistArtifact",
    "load_proofs_file",
    "save_proofs_file",
    "load_root_file",
    "save_root_file",
]
