# sales/models/__init__.py

"""
SALES MODELS PACKAGE EXPORTS

Purpose:
- Central export surface for sales app models.
"""

from .order import Order, OrderImmutableError
from .order_line import OrderLine

__all__ = [
    "Order",
    "OrderLine",
    "OrderImmutableError",
]
