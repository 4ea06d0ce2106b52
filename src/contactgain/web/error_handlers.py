import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from contactgain.errors import (
    AccessDeniedError,
    DuplicateNameError,
    InvalidPhoneError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
    WindowClosedError,
)

logger = logging.getLogger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    # InvalidPhoneError is a ValidationError, so it must be checked first
    if isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, AccessDeniedError):
        status_code = 403
        error_type = "access_denied"
    elif isinstance(exc, WindowClosedError):
        status_code = 409
        error_type = "window_closed"
    elif isinstance(exc, InvalidPhoneError):
        status_code = 400
        error_type = "invalid_phone"
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    elif isinstance(exc, DuplicateNameError):
        status_code = 409
        error_type = "duplicate_name"
    elif isinstance(exc, StoreUnavailableError):
        status_code = 503
        error_type = "store_unavailable"
    else:
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def store_error_handler(_: Request, exc: Exception) -> Response:
    """Handle MongoDB connectivity failures (503)."""
    logger.warning("Store unavailable: %s", exc)
    return create_json_error_response(
        status_code=503, message=str(StoreUnavailableError()), error_type="store_unavailable"
    )


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
