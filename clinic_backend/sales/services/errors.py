# sales/services/errors.py

"""
CHECKOUT DOMAIN ERRORS

Every failure of an order commit is one of these. They are raised inside the
commit engine and converted into a CommitFailure at its boundary; callers of
commit_order() never see them as exceptions.

Retry policy:
- TransactionConflictError / StorageUnavailableError: retryable=True
- OrderDataRejectedError: not retryable, the same input fails again
- everything else: the user must revise the cart
"""

from __future__ import annotations


class CheckoutError(Exception):
    """Base checkout exception"""

    kind = "checkout_error"
    code = "CHECKOUT_FAILED"
    retryable = False

    def __init__(self, message: str, *, offending_items=None):
        super().__init__(message)
        self.message = message
        self.offending_items = list(offending_items or [])

    @property
    def offending_item_ids(self) -> list:
        return [item["medicine_id"] for item in self.offending_items]


class EmptyCartError(CheckoutError):
    kind = "empty_cart"
    code = "EMPTY_CART"


class InvalidQuantityError(CheckoutError):
    kind = "invalid_quantity"
    code = "INVALID_QUANTITY"


class UnknownMedicineError(CheckoutError):
    """Medicine id not found, or soft-deleted (inactive) at commit time."""

    kind = "unknown_medicine"
    code = "UNKNOWN_MEDICINE"


class InsufficientStockError(CheckoutError):
    """
    offending_items entries carry:
        medicine_id, name, requested, available
    """

    kind = "insufficient_stock"
    code = "INSUFFICIENT_STOCK"


class TransactionConflictError(CheckoutError):
    """The database aborted the transaction (deadlock, serialization, lock timeout)."""

    kind = "transaction_conflict"
    code = "TRANSACTION_CONFLICT"
    retryable = True


class StorageUnavailableError(CheckoutError):
    """Transport / infrastructure failure talking to the database."""

    kind = "storage_unavailable"
    code = "STORAGE_UNAVAILABLE"
    retryable = True


class OrderDataRejectedError(CheckoutError):
    """
    The database refused the data itself (numeric overflow, check violation).
    Nothing was written; resubmitting the same cart fails the same way.
    """

    kind = "order_data_rejected"
    code = "ORDER_DATA_REJECTED"
