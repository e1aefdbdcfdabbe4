"""
Custom exceptions for loyalty business logic.

These exceptions provide more specific error handling than generic Exception,
allowing for better error messages and appropriate HTTP status codes. The
request layer renders them through ``utils.errors.error_response``.
"""


class LoyaltyError(Exception):
    """Base exception for all loyalty business logic errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "LOYALTY_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(LoyaltyError):
    """Resource not found."""

    status_code = 404

    def __init__(self, resource: str, identifier=None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} not found with ID: {identifier}"
        super().__init__(message, f"{resource.upper()}_NOT_FOUND")


class CustomerNotFoundError(NotFoundError):
    """Customer absent or soft-deleted."""

    def __init__(self, identifier=None):
        super().__init__("Customer", identifier)


class ValidationError(LoyaltyError):
    """Invalid input data."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"INVALID_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)


class ConflictError(LoyaltyError):
    """Request conflicts with the current state of a resource."""

    def __init__(self, message: str, code: str = "STATE_CONFLICT"):
        super().__init__(message, code)


class DuplicateCustomerError(ConflictError):
    """An active customer with this ID already exists."""

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__(
            f"Customer ID '{customer_id}' already exists (and is active).",
            "DUPLICATE_ENTRY"
        )


class CustomerAlreadyDeletedError(ConflictError):
    """Soft delete requested for a customer that is already deleted."""

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__("Customer is already deleted.", "ALREADY_DELETED")


class InsufficientBalanceError(LoyaltyError):
    """Not enough balance for the operation."""

    def __init__(self, available: int, requested: int, currency: str = "points"):
        self.available = available
        self.requested = requested
        message = (
            f"Insufficient {currency}. Customer has {available} "
            f"but tried to redeem {requested}."
        )
        super().__init__(message, "INSUFFICIENT_BALANCE")


class InsufficientPointsError(InsufficientBalanceError):
    """Not enough points for a redemption."""

    def __init__(self, available: int, requested: int):
        super().__init__(available, requested, "points")
        self.code = "INSUFFICIENT_POINTS"
