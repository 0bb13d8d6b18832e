import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base for errors carrying a message meant for the end user."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class RequestValidationFailed(GatewayError):
    """Form input rejected locally; nothing was sent to the backend."""

    status_code = 400


class BackendError(GatewayError):
    """Non-2xx answer from the external backend."""

    status_code = 502


class BackendAuthError(BackendError):
    status_code = 401


class BackendUnavailable(BackendError):
    """Timeout or transport failure talking to the backend."""

    status_code = 503


def create_error_response(error_message: str) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }

async def gateway_exception_handler(request: Request, exc: GatewayError) -> JSONResponse:
    if isinstance(exc, BackendError):
        logger.warning(f"Backend error on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.message)
    )

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    if exc.status_code == 403 and "Not authenticated" in str(exc.detail):
        return JSONResponse(
            status_code=401,
            content=create_error_response("Authentication required")
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail)
    )
