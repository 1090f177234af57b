"""
Module 01 - Schemas
File: errors.py

Purpose: Error taxonomy for the whitelist core and ballot registry.
Every failure carries a stable machine-readable code that the CLI and
API layers map onto exit codes and HTTP statuses.
"""

from typing import Any


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input & Validation Errors
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    INVALID_DIGEST = "INVALID_DIGEST"

    # Tree & Proof Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Ballot Errors
    BALLOT_NOT_FOUND = "BALLOT_NOT_FOUND"
    INVALID_BALLOT = "INVALID_BALLOT"
    INVALID_CANDIDATE = "INVALID_CANDIDATE"
    VOTING_CLOSED = "VOTING_CLOSED"
    ALREADY_VOTED = "ALREADY_VOTED"
    NOT_ELIGIBLE = "NOT_ELIGIBLE"
    BALLOT_FINALIZED = "BALLOT_FINALIZED"
    BALLOT_NOT_ENDED = "BALLOT_NOT_ENDED"
    CONTRACT_PAUSED = "CONTRACT_PAUSED"
    NOT_OWNER = "NOT_OWNER"


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class WhitelistException(Exception):
    """Base exception for all whitelist and ballot errors."""

    def __init__(
        self,
        message: str,
        code: str = "WHITELIST_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidIdentifierException(WhitelistException, ValueError):
    """Raised when an address string cannot be parsed into a canonical address."""

    def __init__(
        self,
        message: str,
        value: str | None = None,
        index: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if value is not None:
            details["value"] = value
        if index is not None:
            details["index"] = index
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_IDENTIFIER,
            details=details,
        )
        self.value = value
        self.index = index


class InvalidDigestException(WhitelistException, ValueError):
    """Raised when a value is not a well-formed 32-byte digest."""

    def __init__(self, message: str, value: str | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_DIGEST,
            details={"value": value} if value is not None else None,
        )


class EmptyInputException(WhitelistException, ValueError):
    """Raised when a tree is requested for zero leaves."""

    def __init__(self, message: str = "Cannot build a Merkle tree from zero leaves") -> None:
        super().__init__(message=message, code=ErrorCodes.EMPTY_INPUT)


class IndexOutOfRangeException(WhitelistException, IndexError):
    """Raised when a proof is requested for a leaf index outside the tree."""

    def __init__(self, index: int, leaf_count: int) -> None:
        super().__init__(
            message=f"Leaf index {index} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details={"index": index, "leaf_count": leaf_count},
        )
        self.index = index
        self.leaf_count = leaf_count


# -----------------------------------------------------------------------------
# Ballot registry exceptions
# -----------------------------------------------------------------------------

class BallotException(WhitelistException):
    """Base class for ballot registry failures (contract reverts)."""


class BallotNotFoundException(BallotException):
    def __init__(self, ballot_id: int) -> None:
        super().__init__(
            message="Ballot not found",
            code=ErrorCodes.BALLOT_NOT_FOUND,
            details={"ballot_id": ballot_id},
        )


class InvalidBallotException(BallotException):
    def __init__(self, message: str) -> None:
        super().__init__(message=message, code=ErrorCodes.INVALID_BALLOT)


class InvalidCandidateException(BallotException):
    def __init__(self, candidate: str) -> None:
        super().__init__(
            message="Invalid candidate",
            code=ErrorCodes.INVALID_CANDIDATE,
            details={"candidate": candidate},
        )


class VotingClosedException(BallotException):
    def __init__(self, message: str = "Voting is not open") -> None:
        super().__init__(message=message, code=ErrorCodes.VOTING_CLOSED)


class AlreadyVotedException(BallotException):
    def __init__(self, voter: str) -> None:
        super().__init__(
            message="Already voted",
            code=ErrorCodes.ALREADY_VOTED,
            details={"voter": voter},
        )


class NotEligibleException(BallotException):
    """The voter's proof does not reconstruct the ballot's whitelist root."""

    def __init__(self, voter: str) -> None:
        super().__init__(
            message="Not eligible",
            code=ErrorCodes.NOT_ELIGIBLE,
            details={"voter": voter},
        )


class BallotFinalizedException(BallotException):
    def __init__(self, ballot_id: int) -> None:
        super().__init__(
            message="Ballot already finalized",
            code=ErrorCodes.BALLOT_FINALIZED,
            details={"ballot_id": ballot_id},
        )


class BallotNotEndedException(BallotException):
    def __init__(self, ballot_id: int) -> None:
        super().__init__(
            message="Ballot has not ended",
            code=ErrorCodes.BALLOT_NOT_ENDED,
            details={"ballot_id": ballot_id},
        )


class ContractPausedException(BallotException):
    def __init__(self) -> None:
        super().__init__(message="Pausable: paused", code=ErrorCodes.CONTRACT_PAUSED)


class NotOwnerException(BallotException):
    def __init__(self, caller: str) -> None:
        super().__init__(
            message="Ownable: caller is not the owner",
            code=ErrorCodes.NOT_OWNER,
            details={"caller": caller},
        )
