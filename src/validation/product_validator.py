"""Schema validation for product records.

Each field has its own validator returning None when the value is accepted or
a FieldViolation describing the broken rule. Validators never look at other
fields. validate_product runs all of them and collects the violations.
"""

import math
import re
from typing import Any, Callable, Mapping, Optional, Tuple

from ..errors import FieldViolation, ProductValidationError
from ..models.product import MUTABLE_FIELDS, Number, ProductFields

ALLOWED_TITLES = ("iPhone", "Samsung", "Redmi")
TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
PRICE_MIN = 25
PRICE_MAX = 500
PHONE_PATTERN = re.compile(r"\d{2}-\d{10}", re.ASCII)
NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)

# (violation, cleaned value)
FieldResult = Tuple[Optional[FieldViolation], Any]


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _required(field: str, value: Any, message: Optional[str] = None) -> FieldViolation:
    return FieldViolation(
        field=field,
        value=value,
        rule="required",
        message=message or f"Path `{field}` is required.",
    )


def _cast_failed(field: str, value: Any, type_name: str) -> FieldViolation:
    return FieldViolation(
        field=field,
        value=value,
        rule="cast",
        message=f'Cast to {type_name} failed for value "{value}" at path "{field}"',
    )


def to_number(value: Any) -> Optional[Number]:
    """Cast a JSON number or numeric string to a number, None if not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not NUMBER_PATTERN.fullmatch(text):
            return None
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None
    else:
        return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return number


def _validate_number(field: str, value: Any) -> FieldResult:
    if _is_missing(value):
        return _required(field, value), None
    number = to_number(value)
    if number is None:
        return _cast_failed(field, value, "Number"), None
    return None, number


def validate_title(value: Any) -> FieldResult:
    if _is_missing(value):
        return _required("title", value, "product title is required"), None
    if not isinstance(value, str):
        return _cast_failed("title", value, "string"), None

    title = value.strip()
    if not title:
        return _required("title", value, "product title is required"), None
    if len(title) < TITLE_MIN_LENGTH:
        return FieldViolation(
            "title", title, "minlength",
            f"minimum length of product title should be {TITLE_MIN_LENGTH}",
        ), None
    if len(title) > TITLE_MAX_LENGTH:
        return FieldViolation(
            "title", title, "maxlength",
            f"maximum length of product title should be {TITLE_MAX_LENGTH}",
        ), None
    if title not in ALLOWED_TITLES:
        return FieldViolation("title", title, "enum", f"{title} is not supported"), None
    return None, title


def validate_price(value: Any) -> FieldResult:
    violation, price = _validate_number("price", value)
    if violation:
        return violation, None
    if price < PRICE_MIN:
        return FieldViolation(
            "price", price, "min", f"minimum price of product should be {PRICE_MIN}"
        ), None
    if price > PRICE_MAX:
        return FieldViolation(
            "price", price, "max", f"maximum price of products should be {PRICE_MAX}"
        ), None
    return None, price


def validate_rating(value: Any) -> FieldResult:
    return _validate_number("rating", value)


def validate_description(value: Any) -> FieldResult:
    if _is_missing(value):
        return _required("description", value), None
    if not isinstance(value, str):
        return _cast_failed("description", value, "string"), None
    return None, value


def validate_phone(value: Any) -> FieldResult:
    if _is_missing(value):
        return _required("phone", value, "phone number is required"), None
    if not isinstance(value, str):
        return _cast_failed("phone", value, "string"), None
    if not PHONE_PATTERN.fullmatch(value):
        return FieldViolation(
            "phone", value, "pattern", f"{value} is not a valid phone number!"
        ), None
    return None, value


FIELD_VALIDATORS: dict[str, Callable[[Any], FieldResult]] = {
    "title": validate_title,
    "price": validate_price,
    "rating": validate_rating,
    "description": validate_description,
    "phone": validate_phone,
}


def validate_product(candidate: Mapping[str, Any]) -> ProductFields:
    """Validate a candidate product and return its cleaned fields.

    Args:
        candidate: Raw request fields. Keys other than the five mutable
            product fields are ignored.

    Returns:
        ProductFields with title trimmed and price/rating cast to numbers.

    Raises:
        ProductValidationError: If any field breaks its constraints.
    """
    cleaned = {}
    violations = []
    for field in MUTABLE_FIELDS:
        violation, value = FIELD_VALIDATORS[field](candidate.get(field))
        if violation:
            violations.append(violation)
        else:
            cleaned[field] = value

    if violations:
        raise ProductValidationError(violations)

    return ProductFields(**cleaned)
