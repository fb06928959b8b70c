"""API middleware."""

from billbook.api.middleware.error_handler import ErrorHandlerMiddleware
from billbook.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
