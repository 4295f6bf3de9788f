"""Service modules."""

from src.services.product_service import ProductService

__all__ = ["ProductService"]
