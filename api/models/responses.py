"""
Module 08 - API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.proofs import IndexedProof, InvalidRow, ProofEntry


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "ballotproof-api"
    version: str = "v1"
    registry_paused: bool = False


class SelfCheckInfo(BaseModel):
    """Summary of the pre-flight proof self-check."""

    ok: bool = Field(..., description="Whether every proof reconstructed the root")
    total_checks: int = Field(default=0)
    passed_checks: int = Field(default=0)
    failed_checks: int = Field(default=0)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    challenge: dict[str, Any] | None = Field(default=None)


class GenerateResponse(BaseModel):
    """Response for POST /whitelist/generate endpoint."""

    ok: bool = Field(..., description="False if the self-check failed")
    root: str = Field(..., description="Whitelist Merkle root")
    leaf_count: int = Field(..., ge=1)
    height: int = Field(..., ge=0)
    proofs: dict[str, ProofEntry] = Field(default_factory=dict)
    entries: list[IndexedProof] | None = Field(default=None)
    invalid_rows: list[InvalidRow] = Field(default_factory=list)
    duplicates: list[str] = Field(default_factory=list)
    self_check: SelfCheckInfo | None = Field(default=None)


class VerifyProofResponse(BaseModel):
    """Response for POST /whitelist/verify endpoint."""

    accepted: bool = Field(..., description="Whether the proof is accepted")
    whitelist_enabled: bool = Field(
        default=True,
        description="False when the root is all zeros (open voting)",
    )
    root: str
    leaf: str
    proof_length: int = 0


class BallotInfo(BaseModel):
    """Public view of a stored ballot."""

    ballot_id: int
    title: str
    start: int
    end: int
    merkle_root: str
    whitelisted: bool
    candidates: list[str]
    creator: str | None = None
    total_votes: int = 0
    finalized: bool = False


class BallotListResponse(BaseModel):
    """Response for GET /ballots endpoint."""

    count: int
    ballots: list[BallotInfo] = Field(default_factory=list)


class VoteResponse(BaseModel):
    """Response for POST /ballots/{ballot_id}/vote endpoint."""

    ok: bool = True
    ballot_id: int
    voter: str
    candidate: str


class CandidateResult(BaseModel):
    candidate: str
    votes: int


class ResultsResponse(BaseModel):
    """Response for GET /ballots/{ballot_id}/results endpoint."""

    ballot_id: int
    finalized: bool
    results: list[CandidateResult] = Field(default_factory=list)
    winners: list[str] = Field(default_factory=list)
    max_votes: int = 0


class RegistryStatusResponse(BaseModel):
    """Response for registry admin endpoints."""

    ok: bool = True
    paused: bool
    ballot_count: int


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
