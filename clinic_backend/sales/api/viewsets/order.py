# sales/api/viewsets/order.py

"""
ORDER VIEWSET (READ-ONLY)

Purpose:
- Order history for the clinic UI (list + retrieve with lines).
- Orders are immutable: there is no create/update/delete here.
  Orders are created only by POST /api/sales/checkout/.

Filters:
- ?date=YYYY-MM-DD  (orders created on that day, server timezone)
- ?medicine_id=<id> (orders containing that medicine)
"""

from __future__ import annotations

from datetime import datetime

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import serializers, viewsets

from sales.models import Order
from sales.serializers import OrderSerializer


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = OrderSerializer

    def get_queryset(self):
        qs = (
            Order.objects.select_related("created_by")
            .prefetch_related("lines__medicine")
            .order_by("-created_at")
        )

        raw_date = (self.request.query_params.get("date") or "").strip()
        if raw_date:
            try:
                day = datetime.strptime(raw_date, "%Y-%m-%d").date()
            except ValueError:
                raise serializers.ValidationError({"date": "Use YYYY-MM-DD."})
            qs = qs.filter(created_at__date=day)

        raw_medicine = (self.request.query_params.get("medicine_id") or "").strip()
        if raw_medicine:
            if not raw_medicine.isdigit():
                raise serializers.ValidationError({"medicine_id": "Must be an integer id."})
            qs = qs.filter(lines__medicine_id=int(raw_medicine)).distinct()

        return qs

    @extend_schema(
        parameters=[
            OpenApiParameter("date", str, description="YYYY-MM-DD"),
            OpenApiParameter("medicine_id", int),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)
