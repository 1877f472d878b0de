"""Domain errors and the handlers that turn them into JSON responses.

Services raise one of the :class:`AccountsError` subclasses below; the
handlers registered by :func:`register_exception_handlers` map each
:class:`ErrorCode` to its HTTP status through a single table, so routers
never inspect error messages.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    VALIDATION_FAILED = "validation_failed"
    DUPLICATE_EMAIL = "duplicate_email"
    USER_NOT_FOUND = "user_not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    AUTHENTICATION_REQUIRED = "authentication_required"
    INVALID_TOKEN = "invalid_token"
    FORBIDDEN = "forbidden"


STATUS_BY_CODE: Dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_EMAIL: status.HTTP_409_CONFLICT,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTHENTICATION_REQUIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
}


class AccountsError(Exception):
    code: ErrorCode
    title: str
    default_message: str

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_CODE[self.code]

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.title, "code": self.code.value, "message": self.message}


class DuplicateEmail(AccountsError):
    code = ErrorCode.DUPLICATE_EMAIL
    title = "User with this email already exists"
    default_message = "A user with this email address is already registered"


class UserNotFound(AccountsError):
    code = ErrorCode.USER_NOT_FOUND
    title = "User not found"
    default_message = "User with the specified ID does not exist"


class InvalidCredentials(AccountsError):
    code = ErrorCode.INVALID_CREDENTIALS
    title = "Invalid credentials"
    default_message = "Email or password is incorrect"


class AuthenticationRequired(AccountsError):
    code = ErrorCode.AUTHENTICATION_REQUIRED
    title = "Access denied"
    default_message = "No authentication token provided"


class InvalidToken(AccountsError):
    code = ErrorCode.INVALID_TOKEN
    title = "Invalid token"
    default_message = "Authentication token is invalid or expired"


class Forbidden(AccountsError):
    code = ErrorCode.FORBIDDEN
    title = "Access denied"
    default_message = "User does not have required permissions"


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    details = []
    for err in errors:
        # drop the "body"/"path"/"query" prefix pydantic puts in front of the field name
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in ("body", "path", "query", "cookie", "header"):
            loc = loc[1:]
        # whole-body errors (model-level checks, unparsable JSON) have no field name
        if not loc or err.get("type") == "json_invalid":
            loc = ["body"]
        details.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return details


async def _accounts_error_handler(request: Request, exc: AccountsError) -> JSONResponse:
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.code.value, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_CODE[ErrorCode.VALIDATION_FAILED],
        content={
            "error": "Validation failed",
            "code": ErrorCode.VALIDATION_FAILED.value,
            "details": format_validation_errors(exc.errors()),
        },
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AccountsError, _accounts_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
