# inventory/views/medicine.py

"""
MEDICINE VIEWSET

Purpose:
- Inventory maintenance endpoints (list/create/update/soft delete/restore)
- POS picker search endpoint (active medicines only)

Key rules:
- List is ordered by id ascending and includes inactive rows (filter with ?active=).
- DELETE never removes the row: it sets active=False.
- Stock changes made here are plain inventory edits; sales go through checkout.
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from inventory.models import Medicine
from inventory.serializers import MedicineSearchQuerySerializer, MedicineSerializer
from inventory.services.catalog import (
    restore_medicine,
    search_active_medicines,
    soft_delete_medicine,
)


class MedicineViewSet(viewsets.ModelViewSet):
    """
    Medicine endpoints.

    - GET    /api/inventory/medicines/?active=true|false
    - POST   /api/inventory/medicines/
    - PATCH  /api/inventory/medicines/<id>/
    - DELETE /api/inventory/medicines/<id>/            (soft delete)
    - POST   /api/inventory/medicines/<id>/restore/
    - GET    /api/inventory/medicines/search/?q=<text>&limit=<n>
    """

    serializer_class = MedicineSerializer
    queryset = Medicine.objects.all().order_by("id")
    filterset_fields = ["active"]

    def perform_destroy(self, instance):
        soft_delete_medicine(instance)

    @extend_schema(
        responses={200: MedicineSerializer},
        description="Re-activate a soft-deleted medicine",
    )
    @action(detail=True, methods=["post"], url_path="restore")
    def restore(self, request, pk=None):
        medicine = restore_medicine(self.get_object())
        return Response(MedicineSerializer(medicine).data, status=status.HTTP_200_OK)

    @extend_schema(
        parameters=[MedicineSearchQuerySerializer],
        responses={
            200: MedicineSerializer(many=True),
            400: OpenApiResponse(description="Invalid limit"),
        },
        description="Search active medicines by name (case-insensitive substring)",
    )
    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request):
        params = MedicineSearchQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        medicines = search_active_medicines(
            params.validated_data.get("q"),
            limit=params.validated_data.get("limit"),
        )
        return Response(MedicineSerializer(medicines, many=True).data)
