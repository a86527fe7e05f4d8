# sales/api/urls.py

"""
SALES API URLS

Rules:
- Explicit non-PK routes (like "checkout") MUST be registered BEFORE router URLs.

Provides:
- POST /api/sales/checkout/
- GET  /api/sales/orders/
- GET  /api/sales/orders/<uuid>/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from sales.api.viewsets.order import OrderViewSet
from sales.views.checkout import CheckoutView

router = DefaultRouter()
router.register(r"orders", OrderViewSet, basename="orders")

urlpatterns = [
    path("checkout/", CheckoutView.as_view(), name="sales-checkout"),
    path("", include(router.urls)),
]
