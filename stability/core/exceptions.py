from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse


class AppError(Exception):
    """Base application error with consistent schema."""

    def __init__(
        self,
        message: str,
        code: str = "ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="UNAUTHORIZED", status_code=status.HTTP_401_UNAUTHORIZED)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN", details: dict[str, Any] | None = None):
        super().__init__(message, code=code, status_code=status.HTTP_403_FORBIDDEN, details=details)


class NotFoundError(AppError):
    def __init__(self, message: str = "Not found"):
        super().__init__(message, code="NOT_FOUND", status_code=status.HTTP_404_NOT_FOUND)


class ConflictError(AppError):
    def __init__(self, message: str = "Conflict", code: str = "CONFLICT", details: dict[str, Any] | None = None):
        super().__init__(message, code=code, status_code=status.HTTP_409_CONFLICT, details=details)


class BadRequestError(AppError):
    def __init__(self, message: str = "Bad request", code: str = "BAD_REQUEST", details: dict[str, Any] | None = None):
        super().__init__(message, code=code, status_code=status.HTTP_400_BAD_REQUEST, details=details)


# Ledger errors. Amounts in details are strings: 256-bit values overflow orjson.


class MustBeMoreThanZero(BadRequestError):
    def __init__(self, message: str = "Amount must be more than zero"):
        super().__init__(message, code="MUST_BE_MORE_THAN_ZERO")


class InvalidAddress(BadRequestError):
    def __init__(self, address: str | None = None):
        super().__init__("Invalid address", code="INVALID_ADDRESS", details={"address": address})


class InsufficientBalance(BadRequestError):
    """Redemption exceeds the caller's recorded USD credit."""

    def __init__(self, requested: int, available: int):
        super().__init__(
            "Insufficient balance",
            code="INSUFFICIENT_BALANCE",
            details={"requested": str(requested), "available": str(available)},
        )


class TransferFailed(BadRequestError):
    def __init__(self, message: str = "Transfer failed", details: dict[str, Any] | None = None):
        super().__init__(message, code="TRANSFER_FAILED", details=details)


class TokenError(BadRequestError):
    """Failure raised by the collateral token's own transfer semantics."""


class InsufficientAllowance(TokenError):
    def __init__(self, spender: str, allowance: int, needed: int):
        super().__init__(
            "Insufficient allowance",
            code="INSUFFICIENT_ALLOWANCE",
            details={"spender": spender, "allowance": str(allowance), "needed": str(needed)},
        )


class InsufficientTokenBalance(TokenError):
    def __init__(self, account: str, balance: int, needed: int):
        super().__init__(
            "Insufficient token balance",
            code="INSUFFICIENT_TOKEN_BALANCE",
            details={"account": account, "balance": str(balance), "needed": str(needed)},
        )


class NotController(ForbiddenError):
    def __init__(self, caller: str):
        super().__init__("Caller is not the token controller", code="NOT_CONTROLLER", details={"caller": caller})


class NotOwner(ForbiddenError):
    def __init__(self, caller: str):
        super().__init__("Caller is not the engine owner", code="NOT_OWNER", details={"caller": caller})


class EnforcedPause(ConflictError):
    def __init__(self):
        super().__init__("Token is paused", code="ENFORCED_PAUSE")


class ExpectedPause(ConflictError):
    def __init__(self):
        super().__init__("Token is not paused", code="EXPECTED_PAUSE")


class ReentrantCall(ConflictError):
    def __init__(self):
        super().__init__("Reentrant call", code="REENTRANT_CALL")


class UnsupportedFeed(AppError):
    def __init__(self, decimals: int):
        super().__init__(
            f"Price feed decimals {decimals} exceed internal precision",
            code="UNSUPPORTED_FEED",
            details={"decimals": decimals},
        )


def error_response(request: Request, exc: AppError) -> ORJSONResponse:
    body = {
        "error": {
            "message": exc.message,
            "code": exc.code,
            "details": exc.details,
        }
    }
    if hasattr(request.state, "request_id"):
        body["request_id"] = request.state.request_id
    return ORJSONResponse(status_code=exc.status_code, content=body)


async def app_exception_handler(request: Request, exc: AppError) -> ORJSONResponse:
    return error_response(request, exc)


def _validation_entries(exc: RequestValidationError) -> list[dict[str, Any]]:
    # raw input and ctx may hold ints wider than 64 bits or exception objects
    return [{k: v for k, v in e.items() if k not in ("input", "ctx")} for e in exc.errors()]


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> ORJSONResponse:
    body = {
        "error": {
            "message": "Validation error",
            "code": "VALIDATION_ERROR",
            "details": {"errors": _validation_entries(exc)},
        }
    }
    if hasattr(request.state, "request_id"):
        body["request_id"] = request.state.request_id
    return ORJSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=body,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    from stability.core.logging import get_logger
    get_logger(__name__).exception("unhandled_exception", exc_info=exc)
    body = {
        "error": {
            "message": "Internal server error",
            "code": "INTERNAL_ERROR",
            "details": {},
        }
    }
    if hasattr(request.state, "request_id"):
        body["request_id"] = request.state.request_id
    return ORJSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body,
    )
