"""Shared fixtures for product service tests."""

from typing import Any, Optional

import pytest
from azure.cosmos.exceptions import CosmosResourceExistsError, CosmosResourceNotFoundError
from fastapi.testclient import TestClient

from src.api import create_app
from src.services import ProductService


class InMemoryCosmosDBClient:
    """Stand-in for CosmosDBClient keeping documents in a dict.

    Raises the same azure.cosmos exceptions as the real container. Set
    `error` to make every operation fail with that exception.
    """

    def __init__(self):
        self.items: dict[str, dict[str, Any]] = {}
        self.queries: list[tuple[str, dict[str, Any]]] = []
        self.error: Optional[Exception] = None
        self.connected = False
        self._ts = 1_700_000_000

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.connected = False

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    def _with_system_properties(self, item: dict[str, Any]) -> dict[str, Any]:
        self._ts += 1
        return {**item, "_rid": "rid", "_etag": f'"{self._ts}"', "_ts": self._ts}

    async def create_item(self, item: dict[str, Any]) -> dict[str, Any]:
        self._check()
        if item["id"] in self.items:
            raise CosmosResourceExistsError(
                status_code=409, message="Entity with the specified id already exists"
            )
        self.items[item["id"]] = self._with_system_properties(item)
        return dict(self.items[item["id"]])

    async def replace_item(self, item_id: str, item: dict[str, Any]) -> dict[str, Any]:
        self._check()
        if item_id not in self.items:
            raise CosmosResourceNotFoundError(status_code=404, message="Entity not found")
        self.items[item_id] = self._with_system_properties(item)
        return dict(self.items[item_id])

    async def query_items(
        self,
        query: str,
        parameters: Optional[list[dict[str, Any]]] = None,
    ) -> list[dict[str, Any]]:
        self._check()
        params = {p["name"]: p["value"] for p in parameters or []}
        self.queries.append((query, params))

        items = list(self.items.values())
        if "@price" in params and "@rating" in params:
            items = [
                i for i in items
                if i["price"] > params["@price"] and i["rating"] > params["@rating"]
            ]
        return [dict(i) for i in items]

    async def read_item(self, item_id: str, partition_key: str) -> dict[str, Any]:
        self._check()
        if item_id not in self.items:
            raise CosmosResourceNotFoundError(status_code=404, message="Entity not found")
        return dict(self.items[item_id])

    async def delete_item(self, item_id: str, partition_key: str) -> None:
        self._check()
        if item_id not in self.items:
            raise CosmosResourceNotFoundError(status_code=404, message="Entity not found")
        del self.items[item_id]


def make_payload(**overrides: Any) -> dict[str, Any]:
    """A valid product payload with optional field overrides."""
    payload = {
        "title": "iPhone",
        "price": 300,
        "rating": 4.5,
        "description": "this is great phone",
        "phone": "88-0171234567",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def cosmos_client() -> InMemoryCosmosDBClient:
    return InMemoryCosmosDBClient()


@pytest.fixture
def product_service(cosmos_client) -> ProductService:
    return ProductService(cosmos_client)


@pytest.fixture
def api_client(product_service):
    """HTTP client for an app wired to the in-memory store."""
    with TestClient(create_app(product_service)) as client:
        yield client


@pytest.fixture
def payload():
    """Factory for valid product payloads: payload(price=450)."""
    return make_payload
