# sales/views/checkout.py

"""
CHECKOUT VIEW

Purpose:
- Single HTTP entry point to the order commit engine.
- The client submits the whole cart once; the server answers with a
  discriminated result the UI turns into a toast.

Hard rules:
- No transaction here: the engine owns the atomic unit (and its retries).
- Failure codes map to HTTP statuses in one place (FAILURE_STATUS).
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from sales.serializers import CheckoutInputSerializer
from sales.services import commit_order
from sales.services.errors import (
    EmptyCartError,
    InsufficientStockError,
    InvalidQuantityError,
    OrderDataRejectedError,
    StorageUnavailableError,
    TransactionConflictError,
    UnknownMedicineError,
)

FAILURE_STATUS = {
    EmptyCartError.code: status.HTTP_400_BAD_REQUEST,
    InvalidQuantityError.code: status.HTTP_400_BAD_REQUEST,
    UnknownMedicineError.code: status.HTTP_400_BAD_REQUEST,
    OrderDataRejectedError.code: status.HTTP_400_BAD_REQUEST,
    InsufficientStockError.code: status.HTTP_409_CONFLICT,
    TransactionConflictError.code: status.HTTP_409_CONFLICT,
    StorageUnavailableError.code: status.HTTP_503_SERVICE_UNAVAILABLE,
}


# =====================================================
# API ERROR NORMALIZATION
# =====================================================

def error_response(failure):
    http_status = FAILURE_STATUS.get(failure.code, status.HTTP_400_BAD_REQUEST)
    response = Response(failure.as_dict(), status=http_status)
    if failure.retryable:
        response["Retry-After"] = "1"
    return response


class CheckoutView(APIView):
    """
    POST /api/sales/checkout/

    Calls:
    - sales.services.order_commit.commit_order()
    """

    serializer_class = CheckoutInputSerializer

    @extend_schema(
        request=CheckoutInputSerializer,
        responses={
            201: OpenApiResponse(description="Order committed"),
            400: OpenApiResponse(
                description="Empty cart, invalid quantity, unknown medicine or rejected order data"
            ),
            409: OpenApiResponse(description="Insufficient stock or transaction conflict"),
            503: OpenApiResponse(description="Storage unavailable"),
        },
        description="Atomically validate stock, decrement inventory and record an order.",
        examples=[
            OpenApiExample(
                "Two medicines",
                value={
                    "items": [
                        {"medicine_id": 1, "requested_quantity": 3},
                        {"medicine_id": 4, "requested_quantity": 1},
                    ]
                },
                request_only=True,
            ),
        ],
    )
    def post(self, request):
        serializer = CheckoutInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = commit_order(serializer.validated_data["items"], user=request.user)

        if not result.success:
            return error_response(result)

        return Response(result.as_dict(), status=status.HTTP_201_CREATED)
