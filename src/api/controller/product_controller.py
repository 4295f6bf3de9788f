"""HTTP controller for the products resource."""

import json
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from src.api.responses import envelope, not_found
from src.errors import MalformedRequestError
from src.models import Number
from src.services import ProductService
from src.validation import to_number, validate_product

router = APIRouter(prefix="/products", tags=["products"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_product_service(request: Request) -> ProductService:
    """Product service created at startup and stored on the app state."""
    return request.app.state.product_service


async def read_product_fields(request: Request) -> dict[str, Any]:
    """Read the request body as a JSON object or a form.

    Raises:
        MalformedRequestError: If a form body cannot be parsed, or a
            non-form body is not a JSON object.
    """
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith(FORM_CONTENT_TYPES):
        try:
            form = await request.form()
        except HTTPException as e:
            raise MalformedRequestError(f"Malformed form body: {e.detail}") from e
        except MultiPartException as e:
            raise MalformedRequestError(f"Malformed form body: {e.message}") from e
        return {key: form.get(key) for key in form.keys()}

    body = await request.body()
    if not body.strip():
        return {}

    try:
        payload = json.loads(body)
    except ValueError as e:
        raise MalformedRequestError(f"Malformed JSON body: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedRequestError("Request body must be a JSON object")
    return payload


def _parse_threshold(name: str, value: str) -> Number:
    number = to_number(value)
    if number is None:
        raise MalformedRequestError(
            f'Cast to Number failed for value "{value}" at path "{name}"'
        )
    return number


@router.post("")
async def create_product(
    request: Request,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """Create a product and return the stored record as is."""
    fields = validate_product(await read_product_fields(request))
    product = await service.create(fields)
    return JSONResponse(content=product.to_document())


@router.get("")
async def list_products(
    price: Optional[str] = None,
    rating: Optional[str] = None,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """List products, filtered by price AND rating when both are given."""
    if price and rating:
        products = await service.find_all(
            price=_parse_threshold("price", price),
            rating=_parse_threshold("rating", rating),
        )
    else:
        products = await service.find_all()

    return envelope("Return all products", [p.to_document() for p in products])


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    product = await service.find_by_id(product_id)
    if product is None:
        return not_found("Products not found")
    return envelope("Return single product", product.to_document())


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    request: Request,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """Replace the five mutable fields of a product."""
    fields = validate_product(await read_product_fields(request))
    product = await service.update_by_id(product_id, fields)
    if product is None:
        return not_found("product was not update with this id")
    return envelope("updated single product", product.to_document())


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    product = await service.delete_by_id(product_id)
    if product is None:
        return not_found("product was not deleted with this id")
    return envelope("deleted single product", product.to_document())
