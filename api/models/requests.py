"""
Module 08 - API Request Models

Pydantic models for API request validation.
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator


class GenerateRequest(BaseModel):
    """Request body for POST /whitelist/generate endpoint."""

    addresses: list[str] = Field(
        ...,
        min_length=1,
        description="Raw address values, in leaf order",
    )
    enforce_checksum: bool = Field(
        default=True,
        description="Reject mixed-case addresses whose EIP-55 checksum is wrong",
    )
    self_check: bool = Field(
        default=True,
        description="Verify every proof against the root before returning",
    )
    include_entries: bool = Field(
        default=False,
        description="Include the per-index proof list (keeps duplicates apart)",
    )


class VerifyProofRequest(BaseModel):
    """Request body for POST /whitelist/verify endpoint."""

    root: str = Field(..., description="Whitelist root (0x-prefixed bytes32)")
    address: Optional[str] = Field(default=None, description="Voter address")
    leaf: Optional[str] = Field(default=None, description="Leaf digest (0x-prefixed bytes32)")
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests, bottom-up",
    )

    @model_validator(mode="after")
    def _one_claim(self) -> "VerifyProofRequest":
        if (self.address is None) == (self.leaf is None):
            raise ValueError("Exactly one of 'address' or 'leaf' is required")
        return self


class CreateBallotRequest(BaseModel):
    """Request body for POST /ballots endpoint."""

    title: str = Field(..., min_length=1, max_length=200)
    start: int = Field(..., ge=0, description="Voting opens (unix seconds)")
    end: int = Field(..., ge=0, description="Voting closes (unix seconds, inclusive)")
    candidates: list[str] = Field(..., min_length=1)
    merkle_root: Optional[str] = Field(
        default=None,
        description="Whitelist root; omit or send all zeros for open voting",
    )
    creator: Optional[str] = Field(default=None, description="Creator address")


class VoteRequest(BaseModel):
    """Request body for POST /ballots/{ballot_id}/vote endpoint."""

    voter: str = Field(..., description="Voter address")
    candidate: str = Field(..., description="Candidate name")
    proof: list[str] = Field(
        default_factory=list,
        description="Whitelist proof for the voter (ignored on open ballots)",
    )


class RegistryAdminRequest(BaseModel):
    """Request body for POST /registry/pause and /registry/unpause."""

    caller: str = Field(..., description="Address making the call")
