# backend/utils/errors.py
from typing import List, Optional


# Base class for every failure the API reports deliberately
class AppError(Exception):
    code = "Internal"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[List[dict]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class DuplicateEmail(AppError):
    code = "DuplicateEmail"
    status_code = 400
    default_message = "User already exists with this email"


class InvalidCredentials(AppError):
    code = "InvalidCredentials"
    status_code = 401
    default_message = "Invalid credentials"


class Unauthorized(AppError):
    code = "Unauthorized"
    status_code = 401
    default_message = "Could not validate credentials"


class NotFound(AppError):
    code = "NotFound"
    status_code = 404
    default_message = "Resource not found"


class DuplicateSku(AppError):
    code = "DuplicateSku"
    status_code = 400
    default_message = "SKU already exists"


class DuplicateOrderNumber(AppError):
    code = "DuplicateOrderNumber"
    status_code = 400
    default_message = "Order number already exists"


class DuplicatePoNumber(AppError):
    code = "DuplicatePoNumber"
    status_code = 400
    default_message = "PO number already exists"


class DuplicateName(AppError):
    code = "DuplicateName"
    status_code = 400
    default_message = "A record with this name already exists"


class InvalidStatus(AppError):
    code = "InvalidStatus"
    status_code = 400
    default_message = "Invalid status"


class ValidationFailed(AppError):
    code = "ValidationError"
    status_code = 400
    default_message = "Validation failed"


class InsufficientStock(AppError):
    code = "InsufficientStock"
    status_code = 400
    default_message = "Insufficient stock"


class InventoryInUse(AppError):
    code = "InventoryInUse"
    status_code = 400
    default_message = "Inventory item is referenced by existing orders"


def is_unique_violation(exc: Exception) -> bool:
    """True when a DB IntegrityError was raised by a unique constraint/index."""
    text = str(getattr(exc, "orig", exc)).lower()
    return "unique" in text or "duplicate key" in text
