from .checkout import CheckoutInputSerializer, CheckoutLineInputSerializer
from .order import OrderLineSerializer, OrderSerializer

__all__ = [
    "CheckoutInputSerializer",
    "CheckoutLineInputSerializer",
    "OrderSerializer",
    "OrderLineSerializer",
]
