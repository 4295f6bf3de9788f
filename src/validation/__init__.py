"""Product schema validation."""

from src.validation.product_validator import (
    ALLOWED_TITLES,
    PHONE_PATTERN,
    PRICE_MAX,
    PRICE_MIN,
    to_number,
    validate_description,
    validate_phone,
    validate_price,
    validate_product,
    validate_rating,
    validate_title,
)

__all__ = [
    "ALLOWED_TITLES",
    "PHONE_PATTERN",
    "PRICE_MAX",
    "PRICE_MIN",
    "to_number",
    "validate_description",
    "validate_phone",
    "validate_price",
    "validate_product",
    "validate_rating",
    "validate_title",
]
