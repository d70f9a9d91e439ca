"""
Error taxonomy shared by the CRUD, service and API layers.

Every error carries a human readable `message` and the HTTP status it maps to;
the API layer renders them as `{"message": ...}` (plus `errors` for
validation failures).
"""

from typing import Dict, List, Optional


class SelfPressError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationRequired(SelfPressError):
    status_code = 401
    default_message = "Authentication required"


class Forbidden(SelfPressError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(SelfPressError):
    status_code = 404
    default_message = "Not found"


class Conflict(SelfPressError):
    status_code = 409
    default_message = "Conflict"


class ValidationError(SelfPressError):
    """Malformed or out-of-range input. `errors` maps field names to messages."""
    status_code = 400
    default_message = "Invalid data"
    field: Optional[str] = None

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        if errors is None and self.field:
            errors = {self.field: [self.message]}
        self.errors = errors or {}


class InvalidAmount(ValidationError):
    default_message = "Valid amount is required"
    field = "amount"


class InvalidBookIds(ValidationError):
    default_message = "Book IDs are required"
    field = "bookIds"


class InvalidTotal(ValidationError):
    default_message = "Valid total amount is required"
    field = "total"


class InvalidRating(ValidationError):
    default_message = "Rating must be between 1 and 5"
    field = "rating"


class InvalidStatus(ValidationError):
    default_message = "Invalid status"
    field = "status"


class PaymentProviderError(SelfPressError):
    status_code = 502
    default_message = "Payment provider error"


class DuplicateOrder(SelfPressError):
    status_code = 409
    default_message = "An order has already been completed for this payment"
