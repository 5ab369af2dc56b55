"""
Checkout failure taxonomy.

Every failure the order path can report to a caller is a CheckoutError. The
app-level exception handler turns one into a JSON body via `to_dict()` and
the matching HTTP status; nothing else about the underlying cause is exposed.
"""
from typing import Any, Iterable


class CheckoutError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}


class ValidationError(CheckoutError):
    """Client input is malformed or missing."""


class NotFoundError(CheckoutError):

    def __init__(self, missing_item_ids: Iterable[int]):
        super().__init__("some items not found")
        self.missing_item_ids = list(missing_item_ids)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "missing_item_ids": self.missing_item_ids}


class OutOfStockError(CheckoutError):

    def __init__(self, item_id: int, requested: int, available: int):
        super().__init__("out of stock")
        self.item_id = item_id
        self.requested = requested
        self.available = available

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "item_id": self.item_id,
            "requested": self.requested,
            "available": self.available,
        }


class TransientError(CheckoutError):
    """Storage timeout, deadlock or lost connection. Nothing was committed."""

    status_code = 500
    retryable = True

    def __init__(self, message: str = "Order could not be placed right now, please retry"):
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "retryable": True}


class FatalError(CheckoutError):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
