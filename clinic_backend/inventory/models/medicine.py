# inventory/models/medicine.py

"""
MEDICINE MODEL

Purpose:
- A sellable medicine with its current price and on-hand stock.

STOCK MODEL (IMPORTANT):
- Medicine.quantity IS the stock (single row, no batches).
- quantity >= 0 always (DB check constraint + checkout engine guard).
- Only two writers: inventory edits and sales.services.order_commit.

Soft delete:
- active=False hides the medicine from search/listing for sale,
  but the row is kept so historical order lines still resolve.
"""

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class MedicineQuerySet(models.QuerySet):
    def active(self):
        return self.filter(active=True)

    def search(self, query: str):
        return self.active().filter(name__icontains=query)


class Medicine(models.Model):
    name = models.CharField(max_length=255, db_index=True)
    unit = models.CharField(
        max_length=32,
        help_text="Display unit of sale (box, strip, bottle, ...)",
    )

    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Current selling price per unit. Read at checkout time.",
    )

    quantity = models.PositiveIntegerField(
        default=0,
        help_text="Current stock on hand.",
    )

    active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = MedicineQuerySet.as_manager()

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["active", "name"], name="medicine_active_name_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name="medicine_quantity_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="medicine_price_non_negative",
            ),
        ]

    def clean(self):
        if self.price is None or Decimal(self.price) < Decimal("0.00"):
            raise ValidationError({"price": "Price must be non-negative"})

        if self.quantity is None or int(self.quantity) < 0:
            raise ValidationError({"quantity": "Quantity must be non-negative"})

        if not (self.name or "").strip():
            raise ValidationError({"name": "Name is required"})

    @property
    def is_low_stock(self) -> bool:
        return int(self.quantity or 0) <= int(settings.LOW_STOCK_THRESHOLD)

    def __str__(self):
        return f"{self.name} ({self.unit})"
