# pos/cart.py

"""
POS CART BUILDER

Purpose:
- Accumulate a doctor's selected medicines for ONE session, in memory.
- Give immediate stock feedback using the last-known stock of each medicine.
- Hand the cart once, by value, to the order commit engine.

Rules:
- Never persisted, never shared: create one CartBuilder per session.
- Stock bounds here are advisory (UX only). The commit engine re-reads
  authoritative stock and price; nothing captured here is trusted at commit.
- Mutations never raise for stock problems: they return a CartNotice
  (warning = request adjusted or ignored, error = nothing added).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

NOTICE_WARNING = "warning"
NOTICE_ERROR = "error"


@dataclass(frozen=True)
class CartNotice:
    level: str
    message: str
    medicine_id: int | None = None


@dataclass(frozen=True)
class CartLine:
    medicine_id: int
    name: str
    unit: str
    unit_price_snapshot: Decimal
    stock_snapshot: int
    requested_quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.unit_price_snapshot * Decimal(self.requested_quantity)


def _stock_of(medicine) -> int:
    return max(0, int(getattr(medicine, "quantity", 0) or 0))


def _only_left(line_or_medicine, stock: int) -> str:
    unit = getattr(line_or_medicine, "unit", "") or "unit(s)"
    return f"Only {stock} {unit} of {line_or_medicine.name} left in stock."


class CartBuilder:
    """
    Session-scoped cart.

    `medicine` arguments are anything exposing id, name, unit, price, quantity
    (an inventory.Medicine row or a search-result payload object).
    """

    def __init__(self):
        self._lines: dict[int, CartLine] = {}

    # -----------------------------
    # READ
    # -----------------------------
    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, medicine_id) -> bool:
        return medicine_id in self._lines

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get(self, medicine_id) -> CartLine | None:
        return self._lines.get(medicine_id)

    def total(self) -> Decimal:
        """Informational only; billing uses prices read at commit."""
        return sum((line.line_total for line in self._lines.values()), Decimal("0.00"))

    # -----------------------------
    # MUTATIONS
    # -----------------------------
    def add_line(self, medicine, qty: int = 1) -> CartNotice | None:
        if isinstance(qty, bool) or not isinstance(qty, int) or qty < 1:
            raise ValueError("qty must be a whole number of at least 1")

        stock = _stock_of(medicine)
        existing = self._lines.get(medicine.id)

        if existing is not None:
            # Refresh last-known stock from the newer observation.
            existing = replace(existing, stock_snapshot=stock)
            self._lines[medicine.id] = existing

            if existing.requested_quantity + qty > stock:
                return CartNotice(NOTICE_WARNING, _only_left(existing, stock), medicine.id)

            self._lines[medicine.id] = replace(
                existing, requested_quantity=existing.requested_quantity + qty
            )
            return None

        if stock <= 0:
            return CartNotice(
                NOTICE_ERROR,
                f"{medicine.name} is out of stock.",
                medicine.id,
            )

        requested = min(qty, stock)
        self._lines[medicine.id] = CartLine(
            medicine_id=medicine.id,
            name=medicine.name,
            unit=getattr(medicine, "unit", "") or "",
            unit_price_snapshot=Decimal(str(getattr(medicine, "price", 0) or 0)),
            stock_snapshot=stock,
            requested_quantity=requested,
        )

        if requested < qty:
            return CartNotice(NOTICE_WARNING, _only_left(medicine, stock), medicine.id)
        return None

    def set_quantity(self, medicine_id, qty: int) -> CartNotice | None:
        if isinstance(qty, bool) or not isinstance(qty, int):
            raise ValueError("qty must be a whole number")

        line = self._lines.get(medicine_id)
        if line is None:
            return None

        if qty <= 0:
            self.remove_line(medicine_id)
            return None

        if line.stock_snapshot <= 0:
            self.remove_line(medicine_id)
            return CartNotice(NOTICE_ERROR, f"{line.name} is out of stock.", medicine_id)

        if qty > line.stock_snapshot:
            self._lines[medicine_id] = replace(line, requested_quantity=line.stock_snapshot)
            return CartNotice(NOTICE_WARNING, _only_left(line, line.stock_snapshot), medicine_id)

        self._lines[medicine_id] = replace(line, requested_quantity=qty)
        return None

    def remove_line(self, medicine_id) -> None:
        self._lines.pop(medicine_id, None)

    def clear(self) -> None:
        self._lines.clear()

    # -----------------------------
    # HAND-OFF
    # -----------------------------
    def payload(self):
        """Immutable (medicine_id, requested_quantity) lines, in insertion order."""
        from sales.services.results import CommitLine

        return tuple(
            CommitLine(medicine_id=line.medicine_id, requested_quantity=line.requested_quantity)
            for line in self._lines.values()
        )

    def submit(self, *, commit=None, user=None):
        """
        Submit the cart once. Clears the cart only when the engine reports success;
        on failure the lines stay so the user can revise them.
        """
        if commit is None:
            from sales.services.order_commit import commit_order as commit

        result = commit(self.payload(), user=user)
        if result.success:
            self.clear()
        return result
