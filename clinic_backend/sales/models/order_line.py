# sales/models/order_line.py

"""
ORDER LINE (IMMUTABLE SNAPSHOT)

Represents one medicine on a committed order.

Notes:
- One line per medicine per order; duplicate cart lines are combined at commit.
- unit_price is the medicine price read inside the commit transaction,
  never the price the cart displayed.
- Rows are written once (bulk insert at commit) and never updated.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from inventory.models import Medicine

from .order import Order, OrderImmutableError


class OrderLine(models.Model):
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="lines",
    )

    position = models.PositiveIntegerField(
        help_text="1-based position of the line as first seen in the cart",
    )

    medicine = models.ForeignKey(
        Medicine,
        on_delete=models.PROTECT,
        related_name="order_lines",
    )

    quantity = models.PositiveIntegerField()

    unit_price = models.DecimalField(max_digits=12, decimal_places=2)

    line_total = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta:
        ordering = ["order", "position"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "medicine"],
                name="unique_medicine_per_order",
            ),
            models.UniqueConstraint(
                fields=["order", "position"],
                name="unique_position_per_order",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_line_quantity_positive",
            ),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise OrderImmutableError("Order lines are immutable once recorded.")
        self.line_total = (self.unit_price or Decimal("0.00")) * Decimal(int(self.quantity or 0))
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{getattr(self.medicine, 'name', 'Medicine')} x {self.quantity}"
