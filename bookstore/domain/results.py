# bookstore/domain/results.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class OrderError(str, Enum):
    """Stable business error kinds of the order workflow."""

    BOOK_NOT_FOUND = "BookNotFound"
    INSUFFICIENT_STOCK = "InsufficientStock"
    ADDRESS_NOT_FOUND = "AddressNotFound"
    EMPTY_CART = "EmptyCart"
    CHECKOUT_CONFLICT = "CheckoutConflict"
    INVALID_QUANTITY = "InvalidQuantity"


@dataclass(frozen=True)
class OrderResult:
    value: Dict[str, Any] | None = None
    error: OrderError | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Dict[str, Any]) -> "OrderResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: OrderError, message: str) -> "OrderResult":
        return cls(error=error, message=message)
