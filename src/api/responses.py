"""Response bodies for the products API."""

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class Envelope(BaseModel):
    """Successful read, list, update or delete."""

    success: bool = True
    message: str
    data: Any


class NotFoundResponse(BaseModel):
    """No product matched the requested id."""

    message: str
    success: bool = False


class ErrorResponse(BaseModel):
    """Any failure surfaced to the caller."""

    message: str


def envelope(message: str, data: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=Envelope(message=message, data=data).model_dump(),
    )


def not_found(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=NotFoundResponse(message=message).model_dump(),
    )


def error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(message=message).model_dump(),
    )
