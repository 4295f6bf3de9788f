"""Global exception handlers.

Every failure, whatever its cause, is rendered as 500 {"message": "..."}.
Only a missing product gets a distinct status, and that is decided by the
route handlers, not here.
"""

import logging

from fastapi import FastAPI, Request

from src.api.responses import error
from src.errors import ProductServiceError, ProductValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ProductValidationError)
    async def product_validation_error_handler(request: Request, exc: ProductValidationError):
        logger.warning(f"Rejected product on {request.method} {request.url.path}: {exc}")
        return error(str(exc))

    @app.exception_handler(ProductServiceError)
    async def product_service_error_handler(request: Request, exc: ProductServiceError):
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
        return error(str(exc))

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return error(str(exc))
