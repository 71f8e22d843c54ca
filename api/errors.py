"""Error taxonomy and JSON error rendering for the admin API."""

import enum

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

import config


class ErrorCode(str, enum.Enum):
    """Machine-readable error codes returned alongside the error message."""

    MISSING_TOKEN = "MISSING_TOKEN"
    MALFORMED = "MALFORMED"
    EXPIRED = "EXPIRED"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    ACCOUNT_INACTIVE_OR_MISSING = "ACCOUNT_INACTIVE_OR_MISSING"
    SCOPE_MISMATCH = "SCOPE_MISMATCH"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORE_ERROR = "STORE_ERROR"
    INTERNAL = "INTERNAL"


class AdminApiError(HTTPException):
    """HTTP error carrying an ErrorCode."""

    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    code_default = ErrorCode.INTERNAL

    def __init__(self, detail: str, code: ErrorCode | None = None):
        super().__init__(status_code=self.status_code_default, detail=detail)
        self.code = code or self.code_default


class AuthenticationError(AdminApiError):
    status_code_default = status.HTTP_401_UNAUTHORIZED
    code_default = ErrorCode.MALFORMED


class AccountInactiveError(AdminApiError):
    status_code_default = status.HTTP_401_UNAUTHORIZED
    code_default = ErrorCode.ACCOUNT_INACTIVE_OR_MISSING


class ScopeMismatchError(AdminApiError):
    status_code_default = status.HTTP_403_FORBIDDEN
    code_default = ErrorCode.SCOPE_MISMATCH


class ValidationFailedError(AdminApiError):
    status_code_default = status.HTTP_400_BAD_REQUEST
    code_default = ErrorCode.VALIDATION_ERROR


class NotFoundError(AdminApiError):
    status_code_default = status.HTTP_404_NOT_FOUND
    code_default = ErrorCode.NOT_FOUND


class ConflictError(AdminApiError):
    status_code_default = status.HTTP_409_CONFLICT
    code_default = ErrorCode.CONFLICT


class StoreError(AdminApiError):
    """A data operation failed; the store's message is passed through."""

    status_code_default = status.HTTP_400_BAD_REQUEST
    code_default = ErrorCode.STORE_ERROR


class InternalError(AdminApiError):
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    code_default = ErrorCode.INTERNAL


def describe_validation_error(exc: ValidationError | RequestValidationError) -> str:
    """
    Summarize the first validation error as ``"<field>: <message>"``.

    Args:
        exc: Pydantic or FastAPI validation error

    Returns:
        Human-readable message
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # FastAPI prefixes locations with "body"/"query"/"path"
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path", "header")]
    message = first.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {message}" if loc else message


def error_response(status_code: int, message: str, code: ErrorCode | None = None, headers: dict | None = None) -> JSONResponse:
    """Build the JSON error body used by every endpoint."""
    body = {"error": message}
    if code is not None:
        body["code"] = code.value
    return JSONResponse(
        status_code=status_code,
        content=body,
        headers={**config.CORS_HEADERS, **(headers or {})},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(
        exc.status_code,
        str(exc.detail),
        getattr(exc, "code", None),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        describe_validation_error(exc),
        ErrorCode.VALIDATION_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render HTTP and request validation errors as ``{"error": ..., "code": ...}``."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
