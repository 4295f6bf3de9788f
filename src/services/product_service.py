"""Product storage service.

Stores products as documents in a Cosmos DB container partitioned on /id:
- Create with a generated UUID and creation timestamp
- List, optionally filtered by price AND rating thresholds
- Read, replace and delete by id, returning None when no document matches
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from azure.core.exceptions import AzureError
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from ..clients import CosmosDBClient
from ..errors import StorageError
from ..models import Number, Product, ProductFields

logger = logging.getLogger(__name__)

LIST_ALL_QUERY = "SELECT * FROM c"
LIST_ABOVE_THRESHOLDS_QUERY = (
    "SELECT * FROM c WHERE c.price > @price AND c.rating > @rating"
)


def _check_product_id(product_id: str) -> str:
    """Reject ids that could never have been generated by create()."""
    try:
        uuid.UUID(product_id)
    except (ValueError, TypeError, AttributeError) as e:
        raise StorageError(
            f'Cast to UUID failed for value "{product_id}" at path "id"'
        ) from e
    return product_id


class ProductService:
    """Service for storing and retrieving products in the document store."""

    def __init__(self, client: CosmosDBClient):
        """Initialize the product service.

        Args:
            client: Cosmos DB client for the products container. The caller
                owns its connection lifecycle.
        """
        self._client = client

    async def create(self, fields: ProductFields) -> Product:
        """Insert a new product.

        Args:
            fields: Validated product fields.

        Returns:
            The stored Product with its generated id and createdAt.

        Raises:
            StorageError: If the store rejects the insert or is unreachable.
        """
        product = Product(
            id=str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc),
            **fields.to_dict(),
        )

        try:
            stored = await self._client.create_item(product.to_document())
        except AzureError as e:
            raise StorageError(f"Failed to create product: {e}") from e

        logger.info(f"Created product {product.id} ({product.title})")
        return Product.from_document(stored)

    async def find_all(
        self,
        price: Optional[Number] = None,
        rating: Optional[Number] = None,
    ) -> List[Product]:
        """List products.

        Args:
            price: Exclusive lower bound on price.
            rating: Exclusive lower bound on rating.

        Returns:
            Products with price above the price threshold AND rating above
            the rating threshold when both are given; otherwise every product.

        Raises:
            StorageError: If the query fails.
        """
        if price is not None and rating is not None:
            query = LIST_ABOVE_THRESHOLDS_QUERY
            parameters = [
                {"name": "@price", "value": price},
                {"name": "@rating", "value": rating},
            ]
        else:
            query = LIST_ALL_QUERY
            parameters = None

        try:
            items = await self._client.query_items(query=query, parameters=parameters)
        except AzureError as e:
            raise StorageError(f"Failed to list products: {e}") from e

        logger.debug(f"Listed {len(items)} products (price>{price}, rating>{rating})")
        return [Product.from_document(item) for item in items]

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        """Get a product by its id.

        Returns:
            The Product if found, None otherwise.

        Raises:
            StorageError: If the id is malformed or the read fails.
        """
        _check_product_id(product_id)

        try:
            item = await self._client.read_item(product_id, partition_key=product_id)
        except CosmosResourceNotFoundError:
            return None
        except AzureError as e:
            raise StorageError(f"Failed to read product {product_id}: {e}") from e

        return Product.from_document(item)

    async def update_by_id(
        self, product_id: str, fields: ProductFields
    ) -> Optional[Product]:
        """Replace the mutable fields of an existing product.

        id and createdAt are carried over from the stored document.

        Returns:
            The updated Product, or None if no product has this id.

        Raises:
            StorageError: If the id is malformed or the write fails.
        """
        existing = await self.find_by_id(product_id)
        if existing is None:
            return None

        updated = Product(
            id=existing.id,
            created_at=existing.created_at,
            **fields.to_dict(),
        )

        try:
            stored = await self._client.replace_item(product_id, updated.to_document())
        except CosmosResourceNotFoundError:
            # Deleted between the read and the replace
            return None
        except AzureError as e:
            raise StorageError(f"Failed to update product {product_id}: {e}") from e

        logger.info(f"Updated product {product_id}")
        return Product.from_document(stored)

    async def delete_by_id(self, product_id: str) -> Optional[Product]:
        """Delete a product.

        Returns:
            The removed Product, or None if no product has this id.

        Raises:
            StorageError: If the id is malformed or the delete fails.
        """
        existing = await self.find_by_id(product_id)
        if existing is None:
            return None

        try:
            await self._client.delete_item(product_id, partition_key=product_id)
        except CosmosResourceNotFoundError:
            return None
        except AzureError as e:
            raise StorageError(f"Failed to delete product {product_id}: {e}") from e

        logger.info(f"Deleted product {product_id}")
        return existing
