"""
INVENTORY URLS

Purpose:
- Register medicine routes under /api/inventory/
- Includes viewset actions like:
    /inventory/medicines/search/
    /inventory/medicines/<id>/restore/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from inventory.views import MedicineViewSet

router = DefaultRouter()

router.register(r"medicines", MedicineViewSet, basename="medicines")

urlpatterns = [
    path("", include(router.urls)),
]
