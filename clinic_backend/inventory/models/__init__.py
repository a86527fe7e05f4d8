# inventory/models/__init__.py

"""
INVENTORY MODELS PACKAGE EXPORTS
"""

from .medicine import Medicine

__all__ = ["Medicine"]
