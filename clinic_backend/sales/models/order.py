# sales/models/order.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class OrderImmutableError(Exception):
    pass


def generate_invoice_no() -> str:
    prefix = timezone.now().strftime("ORD%Y%m%d")
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


class Order(models.Model):
    """
    Represents a committed checkout (one per successful commit).

    GUARANTEES:
    - Created only by sales.services.order_commit.commit_order()
    - total_amount is computed server-side from prices read under lock
    - Immutable once recorded (no updates, no deletes)
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    invoice_no = models.CharField(
        max_length=64,
        unique=True,
        default=generate_invoice_no,
        editable=False,
        help_text="System-generated order / receipt number",
    )

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
        help_text="Doctor / staff who submitted the cart (when authenticated)",
    )

    total_amount = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["created_at"], name="order_created_at_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise OrderImmutableError(f"Order {self.invoice_no} is immutable once recorded.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise OrderImmutableError(f"Order {self.invoice_no} cannot be deleted.")

    @property
    def item_count(self) -> int:
        return sum(int(line.quantity) for line in self.lines.all())

    def __str__(self):
        return f"{self.invoice_no} | {self.total_amount}"
