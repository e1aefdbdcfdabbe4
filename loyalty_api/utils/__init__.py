"""
Utility modules for the Loyalty Points API.
"""
from .logging_config import setup_logging
from .errors import (
    ErrorCode,
    error_response,
    bad_request,
    not_found,
    service_unavailable,
    internal_error
)
from .exceptions import (
    LoyaltyError,
    NotFoundError,
    CustomerNotFoundError,
    ValidationError,
    ConflictError,
    DuplicateCustomerError,
    CustomerAlreadyDeletedError,
    InsufficientBalanceError,
    InsufficientPointsError
)
