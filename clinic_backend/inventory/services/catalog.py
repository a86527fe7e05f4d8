# inventory/services/catalog.py

"""
MEDICINE CATALOG SERVICE

Purpose:
- Search active medicines by name (POS picker, debounced on the client).
- Soft delete / restore medicines.

Rules:
- Search never returns inactive medicines.
- Soft delete keeps the row so order lines keep their reference.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from inventory.models import Medicine

logger = logging.getLogger(__name__)

MAX_SEARCH_LIMIT = 50


def _resolve_limit(limit) -> int:
    default = int(settings.MEDICINE_SEARCH_LIMIT)
    if limit is None or limit == "":
        return default

    if isinstance(limit, bool):
        raise ValueError("limit must be a whole number")

    try:
        value = int(limit)
    except (TypeError, ValueError) as exc:
        raise ValueError("limit must be a whole number") from exc

    if value <= 0:
        raise ValueError("limit must be at least 1")

    return min(value, MAX_SEARCH_LIMIT)


def search_active_medicines(query, *, limit=None) -> list[Medicine]:
    """
    Case-insensitive substring match on name, active medicines only.
    A blank query returns an empty list rather than the whole catalog.
    """
    q = (query or "").strip()
    if not q:
        return []

    return list(Medicine.objects.search(q).order_by("name", "id")[: _resolve_limit(limit)])


@transaction.atomic
def set_medicine_active(*, medicine: Medicine, active: bool) -> Medicine:
    medicine = Medicine.objects.select_for_update().get(pk=medicine.pk)
    if medicine.active == active:
        return medicine

    medicine.active = active
    medicine.updated_at = timezone.now()
    medicine.save(update_fields=["active", "updated_at"])

    logger.info(
        "Medicine %s",
        "restored" if active else "soft-deleted",
        extra={"medicine_id": medicine.pk},
    )
    return medicine


def soft_delete_medicine(medicine: Medicine) -> Medicine:
    return set_medicine_active(medicine=medicine, active=False)


def restore_medicine(medicine: Medicine) -> Medicine:
    return set_medicine_active(medicine=medicine, active=True)
