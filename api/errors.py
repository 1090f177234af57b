"""
Module 08 - API Error Handling

Standardized error handling for the API.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import ErrorCodes, WhitelistException


# Domain error code -> HTTP status (anything unlisted is a 400)
DOMAIN_STATUS: dict[str, int] = {
    ErrorCodes.BALLOT_NOT_FOUND: 404,
    ErrorCodes.NOT_ELIGIBLE: 403,
    ErrorCodes.CONTRACT_PAUSED: 403,
    ErrorCodes.NOT_OWNER: 403,
    ErrorCodes.ALREADY_VOTED: 409,
    ErrorCodes.BALLOT_FINALIZED: 409,
}


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )

    @classmethod
    def from_domain(cls, exc: WhitelistException) -> "APIError":
        """Wrap a whitelist/ballot exception with its HTTP status."""
        return cls(
            code=exc.code,
            message=exc.message,
            status_code=DOMAIN_STATUS.get(exc.code, 400),
            details=exc.details,
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


class SelfCheckFailedError(APIError):
    """Generated proofs did not all reconstruct the root."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="SELF_CHECK_FAILED",
            message=message,
            status_code=500,
            details=details,
        )


class InternalError(APIError):
    """Internal server error."""

    def __init__(self, message: str = "Internal server error", details: dict[str, Any] | None = None):
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
            details=details,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def domain_error_handler(request: Request, exc: WhitelistException) -> JSONResponse:
    """Handle whitelist/ballot exceptions that escaped a route."""
    return await api_error_handler(request, APIError.from_domain(exc))


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
