"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from billbook.application.dto.responses import ErrorResponse
from billbook.config import get_logger
from billbook.core.exceptions import (
    AuthenticationError,
    BillingError,
    ConfigurationError,
    ConflictError,
    InsufficientStockError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InsufficientStockError: status.HTTP_409_CONFLICT,
    ConflictError: status.HTTP_409_CONFLICT,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "VALIDATION_ERROR": "Check the request fields. Quantities must be positive whole numbers.",
    "PRODUCT_NOT_FOUND": "Check the product name and try GET /api/products to list products.",
    "CUSTOMER_NOT_FOUND": "Check the customer ID and try GET /api/customers to list customers.",
    "INVOICE_NOT_FOUND": "Check the invoice ID and try GET /api/invoices to list invoices.",
    "INSUFFICIENT_STOCK": "Reduce the quantity or restock the product. Nothing was saved.",
    "DUPLICATE_PRODUCT": "A product with this name already exists. Update it instead.",
    "DUPLICATE_CUSTOMER": "A customer with this phone number already exists.",
    "DUPLICATE_INVOICE_NUMBER": "Use a new invoice number.",
    "UNAUTHORIZED": "Send a valid bearer token in the Authorization header.",
    "PERSISTENCE_ERROR": "A database operation failed and was rolled back. Retry the request.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Authentication is required.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current state.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert an exception to a standardized JSON response."""
    status_code = status_for(exc)

    # Prefer BillingError.code, fall back to class name
    if isinstance(exc, BillingError):
        error_code = exc.code
        message = exc.message
    else:
        error_code = exc.__class__.__name__
        message = str(exc) if status_code < 500 else "Internal server error"

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        path=request.url.path,
        error_type=error_code,
        error=str(exc),
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error_code=error_code,
            message=message,
            hint=_get_hint(error_code, status_code),
            path=request.url.path,
        ).model_dump(mode="json"),
        headers=headers,
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts anything that escaped the exception handlers to a JSON 500.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(BillingError)
    async def billing_exception_handler(
        request: Request,
        exc: BillingError,
    ) -> JSONResponse:
        """Handle domain errors raised by use cases."""
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="REQUEST_VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)
        detail = str(exc.detail) if exc.detail else "An error occurred"

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=detail,
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
            headers=getattr(exc, "headers", None),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTP status."""
    return {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        422: "UNPROCESSABLE_ENTITY",
    }.get(status_code, "HTTP_ERROR")
