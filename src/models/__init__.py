"""Data models module."""

from src.models.product import MUTABLE_FIELDS, Number, Product, ProductFields

__all__ = ["MUTABLE_FIELDS", "Number", "Product", "ProductFields"]
