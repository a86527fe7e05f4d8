# sales/services/__init__.py

from .errors import (
    CheckoutError,
    EmptyCartError,
    InsufficientStockError,
    InvalidQuantityError,
    OrderDataRejectedError,
    StorageUnavailableError,
    TransactionConflictError,
    UnknownMedicineError,
)
from .order_commit import commit_order
from .results import CommitFailure, CommitLine, CommitState, CommitSuccess

__all__ = [
    "commit_order",
    "CommitLine",
    "CommitSuccess",
    "CommitFailure",
    "CommitState",
    "CheckoutError",
    "EmptyCartError",
    "InvalidQuantityError",
    "InsufficientStockError",
    "UnknownMedicineError",
    "OrderDataRejectedError",
    "TransactionConflictError",
    "StorageUnavailableError",
]
