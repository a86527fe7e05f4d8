# sales/services/results.py

"""
COMMIT RESULTS

The order commit engine answers with exactly one of:
- CommitSuccess(order_id, invoice_no, total_amount)
- CommitFailure(kind, code, message, offending_item_ids, offending_items, retryable)

Both carry `success` so callers can branch without isinstance checks, and
`state` (COMMITTED / REJECTED), the terminal state of the invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from sales.services.errors import CheckoutError


class CommitState(str, Enum):
    PENDING = "pending"
    VALIDATING = "validating"
    COMMITTED = "committed"
    REJECTED = "rejected"


@dataclass(frozen=True)
class CommitLine:
    """One cart line as handed to the engine: no price, no stock snapshot."""

    medicine_id: int
    requested_quantity: int


@dataclass(frozen=True)
class CommitSuccess:
    order_id: str
    invoice_no: str
    total_amount: Decimal
    success: bool = field(default=True, init=False)
    state: CommitState = field(default=CommitState.COMMITTED, init=False)

    def as_dict(self) -> dict:
        return {
            "success": True,
            "order_id": self.order_id,
            "invoice_no": self.invoice_no,
            "total_amount": str(self.total_amount),
        }


@dataclass(frozen=True)
class CommitFailure:
    kind: str
    code: str
    message: str
    offending_item_ids: tuple = ()
    offending_items: tuple = ()
    retryable: bool = False
    success: bool = field(default=False, init=False)
    state: CommitState = field(default=CommitState.REJECTED, init=False)

    @classmethod
    def from_error(cls, exc: CheckoutError) -> "CommitFailure":
        return cls(
            kind=exc.kind,
            code=exc.code,
            message=exc.message,
            offending_item_ids=tuple(exc.offending_item_ids),
            offending_items=tuple(dict(item) for item in exc.offending_items),
            retryable=exc.retryable,
        )

    def as_dict(self) -> dict:
        return {
            "success": False,
            "error": {
                "code": self.code,
                "kind": self.kind,
                "message": self.message,
                "offending_item_ids": list(self.offending_item_ids),
                "offending_items": [dict(item) for item in self.offending_items],
                "retryable": self.retryable,
            },
        }
