# sales/services/order_commit.py

"""
ORDER COMMIT ENGINE (APPLICATION SERVICE)

Purpose:
- Turn a submitted cart into a recorded Order, atomically:
  re-read stock + price, check, decrement, record. All or nothing.

Hard rules:
- The cart's captured price/stock are NEVER used here. Input is only
  (medicine_id, requested_quantity); everything else is read under lock.
- Quantities are whole integer units >= 1.
- Duplicate medicine ids are combined: demand per medicine is the sum of its lines.
- Money values are computed server-side; the client never supplies totals.
- No idempotency: every successful call creates a new Order and a new decrement.

Concurrency:
- Medicine rows are locked with SELECT ... FOR UPDATE in primary key order
  (consistent lock order, no deadlock between two multi-line carts).
- The decrement itself is a guarded UPDATE (quantity >= demand). On backends
  without row locks (SQLite) this is the compare-and-swap that keeps a second
  writer from overselling.
- No in-process locks; the engine holds no state between calls.

Failure handling:
- Every failure is a CheckoutError subclass, converted to CommitFailure at the boundary.
- Database aborts (deadlock / serialization / lock timeout / unique or FK race)
  become TransactionConflictError and are retried up to
  settings.ORDER_COMMIT_CONFLICT_RETRIES times: the aborted attempt applied nothing.
- Data the database refuses (numeric overflow, check violation, bad SQL) becomes
  OrderDataRejectedError: nothing was written and a retry cannot succeed.
- Transport failures become StorageUnavailableError and are NOT retried here:
  a lost connection can hide a commit that already landed.
"""

from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.db import (
    DatabaseError,
    DataError,
    IntegrityError,
    InterfaceError,
    ProgrammingError,
    transaction,
)
from django.db.models import F
from django.utils import timezone

from inventory.models import Medicine
from sales.models import Order, OrderLine
from sales.services.errors import (
    CheckoutError,
    EmptyCartError,
    InsufficientStockError,
    InvalidQuantityError,
    OrderDataRejectedError,
    StorageUnavailableError,
    TransactionConflictError,
    UnknownMedicineError,
)
from sales.services.results import CommitFailure, CommitState, CommitSuccess

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")

# Largest value a BigAutoField primary key can hold.
MAX_MEDICINE_ID = 2**63 - 1

# SQLSTATEs for serialization_failure, deadlock_detected, lock_not_available.
_CONFLICT_SQLSTATES = frozenset({"40001", "40P01", "55P03"})
_CONFLICT_MARKERS = (
    "deadlock",
    "could not serialize",
    "database is locked",
    "lock wait timeout",
    "could not obtain lock",
)

# unique_violation, foreign_key_violation: another writer got there first.
_CONFLICT_INTEGRITY_SQLSTATES = frozenset({"23505", "23503"})
_CONFLICT_INTEGRITY_MARKERS = ("unique", "duplicate key", "foreign key")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _to_int_qty(value) -> int:
    if value is None or value == "":
        return 0

    if isinstance(value, bool):
        raise ValueError("quantity must be a whole integer unit")

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        s = value.strip()
        if s.isdigit():
            return int(s)

    raise ValueError("quantity must be a whole integer unit")


def _to_medicine_id(value):
    """Integer primary key in 1..MAX_MEDICINE_ID, or None when the value cannot be one."""
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())

    if not isinstance(value, int):
        return None

    if not 1 <= value <= MAX_MEDICINE_ID:
        return None

    return value


def _line_fields(line):
    if isinstance(line, dict):
        raw_id = line.get("medicine_id", line.get("id"))
        raw_qty = line.get("requested_quantity", line.get("quantity"))
        return raw_id, raw_qty

    return getattr(line, "medicine_id", None), getattr(line, "requested_quantity", None)


def _resolve_user(user):
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return user


def _describe(medicine_id, names=None) -> str:
    name = (names or {}).get(medicine_id)
    return f"{name} (id={medicine_id})" if name else f"medicine {medicine_id}"


# ============================================================
# VALIDATION (no database access)
# ============================================================

def aggregate_demand(lines) -> dict:
    """
    Validate the submitted lines and combine them into {medicine_id: total_quantity},
    preserving first-seen order.
    """
    lines = list(lines or [])
    if not lines:
        raise EmptyCartError("Cart is empty. Add at least one medicine before checkout.")

    invalid = []
    unparseable = []
    demand = {}

    for line in lines:
        raw_id, raw_qty = _line_fields(line)
        medicine_id = _to_medicine_id(raw_id)

        try:
            qty = _to_int_qty(raw_qty)
        except ValueError:
            qty = None

        if qty is None or qty <= 0:
            invalid.append(
                {
                    "medicine_id": medicine_id if medicine_id is not None else raw_id,
                    "requested": raw_qty,
                }
            )
            continue

        if medicine_id is None:
            unparseable.append({"medicine_id": raw_id, "requested": qty})
            continue

        demand[medicine_id] = demand.get(medicine_id, 0) + qty

    if invalid:
        detail = ", ".join(
            f"{_describe(item['medicine_id'])}: {item['requested']!r}" for item in invalid
        )
        raise InvalidQuantityError(
            f"Invalid quantity for {detail}. Quantity must be a whole number of at least 1.",
            offending_items=invalid,
        )

    if unparseable:
        detail = ", ".join(repr(item["medicine_id"]) for item in unparseable)
        raise UnknownMedicineError(
            f"Unknown medicine id(s): {detail}.",
            offending_items=unparseable,
        )

    return demand


# ============================================================
# ATOMIC UNIT
# ============================================================

def _sqlstate(exc: Exception):
    cause = exc.__cause__
    return getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)


def _classify_db_error(exc: Exception) -> CheckoutError:
    sqlstate = _sqlstate(exc)
    text = str(exc).lower()

    if isinstance(exc, IntegrityError):
        if sqlstate in _CONFLICT_INTEGRITY_SQLSTATES or any(
            marker in text for marker in _CONFLICT_INTEGRITY_MARKERS
        ):
            return _conflict()
        return _rejected()

    if sqlstate in _CONFLICT_SQLSTATES or any(marker in text for marker in _CONFLICT_MARKERS):
        return _conflict()

    if isinstance(exc, (DataError, ProgrammingError)):
        return _rejected()

    return StorageUnavailableError(
        "The inventory database is unavailable. The checkout may not have been "
        "recorded; check order history before submitting again."
    )


def _conflict() -> TransactionConflictError:
    return TransactionConflictError(
        "Checkout conflicted with another transaction and was rolled back. "
        "No stock was changed; it is safe to retry."
    )


def _rejected() -> OrderDataRejectedError:
    return OrderDataRejectedError(
        "The database rejected this order (a value is out of range or violates a "
        "constraint). No stock was changed; revise the cart before submitting again."
    )


def _apply(demand: dict, *, user) -> Order:
    """Check, decrement and record. Must run inside transaction.atomic()."""
    ids = sorted(demand)

    locked = {
        m.pk: m
        for m in Medicine.objects.select_for_update().filter(pk__in=ids).order_by("pk")
    }
    names = {pk: m.name for pk, m in locked.items()}

    unknown = [
        {"medicine_id": mid, "requested": qty}
        for mid, qty in demand.items()
        if mid not in locked or not locked[mid].active
    ]
    if unknown:
        detail = ", ".join(
            f"{_describe(item['medicine_id'], names)}"
            + (" is no longer available" if item["medicine_id"] in locked else " does not exist")
            for item in unknown
        )
        raise UnknownMedicineError(f"Cannot sell: {detail}.", offending_items=unknown)

    short = [
        {
            "medicine_id": mid,
            "name": locked[mid].name,
            "requested": qty,
            "available": int(locked[mid].quantity),
        }
        for mid, qty in demand.items()
        if int(locked[mid].quantity) < qty
    ]
    if short:
        raise InsufficientStockError(_insufficient_message(short), offending_items=short)

    now = timezone.now()
    order_lines = []
    total = Decimal("0.00")

    for position, (mid, qty) in enumerate(demand.items(), start=1):
        medicine = locked[mid]

        updated = Medicine.objects.filter(pk=mid, active=True, quantity__gte=qty).update(
            quantity=F("quantity") - qty,
            updated_at=now,
        )
        if updated != 1:
            # Another writer took the stock between our read and our write.
            current = Medicine.objects.filter(pk=mid).values_list("quantity", flat=True).first()
            item = {
                "medicine_id": mid,
                "name": medicine.name,
                "requested": qty,
                "available": int(current or 0),
            }
            raise InsufficientStockError(_insufficient_message([item]), offending_items=[item])

        unit_price = _money(medicine.price)
        line_total = _money(unit_price * Decimal(qty))
        total += line_total

        order_lines.append(
            OrderLine(
                position=position,
                medicine_id=mid,
                quantity=qty,
                unit_price=unit_price,
                line_total=line_total,
            )
        )

    order = Order.objects.create(created_by=user, total_amount=_money(total))

    for line in order_lines:
        line.order = order
    OrderLine.objects.bulk_create(order_lines)

    return order


def _insufficient_message(items) -> str:
    detail = "; ".join(
        f"{item['name']} (id={item['medicine_id']}): "
        f"requested {item['requested']}, available {item['available']}"
        for item in items
    )
    return f"Insufficient stock for {detail}."


def _commit_once(demand: dict, *, user) -> Order:
    try:
        with transaction.atomic():
            return _apply(demand, user=user)
    except CheckoutError:
        raise
    except (DatabaseError, InterfaceError) as exc:
        error = _classify_db_error(exc)
        if isinstance(error, StorageUnavailableError):
            logger.exception("Order commit storage failure")
        elif isinstance(error, OrderDataRejectedError):
            logger.exception("Order commit rejected by the database")
        raise error from exc


# ============================================================
# PUBLIC ENTRY POINT
# ============================================================

def commit_order(lines, *, user=None):
    """
    Commit a cart: sequence of {medicine_id, requested_quantity}
    (dicts or objects with those attributes, e.g. CommitLine).

    Returns CommitSuccess or CommitFailure. Never raises CheckoutError.
    """
    state = CommitState.PENDING
    user = _resolve_user(user)
    max_attempts = 1 + max(0, int(getattr(settings, "ORDER_COMMIT_CONFLICT_RETRIES", 0)))

    try:
        state = CommitState.VALIDATING
        demand = aggregate_demand(lines)

        attempt = 1
        while True:
            try:
                order = _commit_once(demand, user=user)
                break
            except TransactionConflictError:
                if attempt >= max_attempts:
                    raise
                logger.warning(
                    "Order commit conflict, retrying",
                    extra={"attempt": attempt, "medicine_ids": list(demand)},
                )
                attempt += 1

    except CheckoutError as exc:
        failure = CommitFailure.from_error(exc)
        logger.warning(
            "Order commit rejected: %s",
            failure.message,
            extra={
                "kind": failure.kind,
                "from_state": state.value,
                "offending_item_ids": list(failure.offending_item_ids),
            },
        )
        return failure

    logger.info(
        "Order committed",
        extra={
            "order_id": str(order.id),
            "invoice_no": order.invoice_no,
            "total_amount": str(order.total_amount),
            "line_count": len(demand),
        },
    )
    return CommitSuccess(
        order_id=str(order.id),
        invoice_no=order.invoice_no,
        total_amount=order.total_amount,
    )
