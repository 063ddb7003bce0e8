"""
Custom exceptions and error handlers for consistent error responses.

Every failure reaches the client as ``{"message": ...}``. Error codes stay
server-side and only appear in logs.
"""

import logging

from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from typing import Any, Dict

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class AuthenticationError(AppException):
    """Raised when a protected route is called without a bearer token."""

    def __init__(self, message: str = "unauthorized access"):
        super().__init__(
            message=message,
            error_code="ERR_AUTH_001",
            status_code=status.HTTP_401_UNAUTHORIZED
        )


class ForbiddenError(AppException):
    """Raised when a token fails verification or does not grant access."""

    def __init__(self, message: str = "forbidden access", details: Dict[str, Any] = None):
        super().__init__(
            message=message,
            error_code="ERR_PERM_001",
            status_code=status.HTTP_403_FORBIDDEN,
            details=details
        )


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found."""

    def __init__(self, resource: str, resource_id: Any = None):
        super().__init__(
            message=f"{resource} not found",
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id}
        )


class PaymentConflictError(AppException):
    """
    Raised when a payment targets a parcel that is already paid.

    Reported as 404 to keep the status existing clients already handle.
    """

    def __init__(self, parcel_id: str):
        super().__init__(
            message="Parcel already paid",
            error_code="ERR_PAYMENT_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"parcel_id": parcel_id}
        )


class PaymentGatewayError(AppException):
    """Raised when the payment gateway rejects a request or cannot be reached."""

    def __init__(self, message: str, upstream_status: int = None):
        super().__init__(
            message=message,
            error_code="ERR_GATEWAY_001",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"upstream_status": upstream_status}
        )


class InternalError(AppException):
    """Raised for document store failures and other unclassified errors."""

    def __init__(self, operation: str, message: str = "Internal Server Error"):
        super().__init__(
            message=message,
            error_code="ERR_INTERNAL_001",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"operation": operation}
        )


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    log_level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(
        log_level,
        "%s %s failed: %s (%s) %s",
        request.method,
        request.url.path,
        exc.message,
        exc.error_code,
        exc.details,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message}
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for FastAPI HTTPException."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "message": "Validation error",
            "details": jsonable_encoder(exc.errors())
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error"}
    )
