"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the error taxonomy and self-check report models.
Transport models for proofs live in core.schemas.proofs.
"""

# Error models and exceptions
from .errors import (
    AlreadyVotedException,
    BallotException,
    BallotFinalizedException,
    BallotNotEndedException,
    BallotNotFoundException,
    ContractPausedException,
    EmptyInputException,
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidBallotException,
    InvalidCandidateException,
    InvalidDigestException,
    InvalidIdentifierException,
    NotEligibleException,
    NotOwnerException,
    VotingClosedException,
    WhitelistException,
)

# Verification results
from .verification import (
    ChallengeKind,
    ChallengeRef,
    CheckResult,
    CheckSeverity,
    VerificationResult,
)

__all__ = [
    # Errors
    "AlreadyVotedException",
    "BallotException",
    "BallotFinalizedException",
    "BallotNotEndedException",
    "BallotNotFoundException",
    "ContractPausedException",
    "EmptyInputException",
    "ErrorCodes",
    "IndexOutOfRangeException",
    "InvalidBallotException",
    "InvalidCandidateException",
    "InvalidDigestException",
    "InvalidIdentifierException",
    "NotEligibleException",
    "NotOwnerException",
    "VotingClosedException",
    "WhitelistException",
    # Verification
    "ChallengeKind",
    "ChallengeRef",
    "CheckResult",
    "CheckSeverity",
    "VerificationResult",
]
