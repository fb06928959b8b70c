"""
Domain exceptions for billbook.

Every failure a caller can observe is one of these types. Messages are meant
to be shown to the user as-is and only ever name the caller's own records.
"""

from typing import Any


class BillingError(Exception):
    """Base exception for all billbook errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(BillingError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Not Found Exceptions
class NotFoundError(BillingError):
    """Referenced record does not exist for this owner."""

    pass


class ProductNotFoundError(NotFoundError):
    """Product not found by name or id."""

    def __init__(self, product: str | int):
        super().__init__(
            f"Product not found: {product}",
            code="PRODUCT_NOT_FOUND",
            details={"product": product},
        )


class CustomerNotFoundError(NotFoundError):
    """Customer not found."""

    def __init__(self, customer_id: int):
        super().__init__(
            f"Customer not found: {customer_id}",
            code="CUSTOMER_NOT_FOUND",
            details={"customer_id": customer_id},
        )


class InvoiceNotFoundError(NotFoundError):
    """Invoice not found."""

    def __init__(self, invoice_id: int):
        super().__init__(
            f"Invoice not found: {invoice_id}",
            code="INVOICE_NOT_FOUND",
            details={"invoice_id": invoice_id},
        )


# Stock Exceptions
class InsufficientStockError(BillingError):
    """Requested quantity exceeds the product's current stock."""

    def __init__(self, product_name: str, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for {product_name}. Available: {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_name": product_name,
                "available": available,
                "requested": requested,
            },
        )


# Conflict Exceptions
class ConflictError(BillingError):
    """Record clashes with an existing one owned by the same user."""

    pass


class DuplicateProductError(ConflictError):
    """Product name already used by this owner."""

    def __init__(self, name: str):
        super().__init__(
            f"Product already exists: {name}",
            code="DUPLICATE_PRODUCT",
            details={"name": name},
        )


class DuplicateCustomerError(ConflictError):
    """Customer phone already used by this owner."""

    def __init__(self, phone: str):
        super().__init__(
            "Customer already exists",
            code="DUPLICATE_CUSTOMER",
            details={"phone": phone},
        )


class DuplicateInvoiceNumberError(ConflictError):
    """Invoice number already used by this owner."""

    def __init__(self, invoice_number: str):
        super().__init__(
            f"Invoice number already exists: {invoice_number}",
            code="DUPLICATE_INVOICE_NUMBER",
            details={"invoice_number": invoice_number},
        )


# Storage Exceptions
class PersistenceError(BillingError):
    """Database operation failed; the enclosing transaction was rolled back."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="PERSISTENCE_ERROR",
            details={"operation": operation, "error": error},
        )


# Auth Exceptions
class AuthenticationError(BillingError):
    """Bearer token missing, malformed, or expired."""

    def __init__(self, reason: str = "Token missing or invalid"):
        super().__init__(reason, code="UNAUTHORIZED")


class ConfigurationError(BillingError):
    """The service cannot run with its current settings or schema."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)
