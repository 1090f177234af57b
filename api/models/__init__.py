"""API request and response models."""

from api.models.requests import (
    GenerateRequest,
    VerifyProofRequest,
    CreateBallotRequest,
    VoteRequest,
    RegistryAdminRequest,
)
from api.models.responses import (
    HealthResponse,
    SelfCheckInfo,
    GenerateResponse,
    VerifyProofResponse,
    BallotInfo,
    BallotListResponse,
    VoteResponse,
    CandidateResult,
    ResultsResponse,
    RegistryStatusResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "GenerateRequest",
    "VerifyProofRequest",
    "CreateBallotRequest",
    "VoteRequest",
    "RegistryAdminRequest",
    "HealthResponse",
    "SelfCheckInfo",
    "GenerateResponse",
    "VerifyProofResponse",
    "BallotInfo",
    "BallotListResponse",
    "VoteResponse",
    "CandidateResult",
    "ResultsResponse",
    "RegistryStatusResponse",
    "ErrorDetail",
    "ErrorResponse",
]
