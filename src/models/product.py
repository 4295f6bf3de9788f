"""Product models for document storage."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Union

Number = Union[int, float]

# Fields the client may set; id and createdAt are owned by the store
MUTABLE_FIELDS = ("title", "price", "rating", "description", "phone")


@dataclass(frozen=True)
class ProductFields:
    """The five mutable product fields after validation."""

    title: str
    price: Number
    rating: Number
    description: str
    phone: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "price": self.price,
            "rating": self.rating,
            "description": self.description,
            "phone": self.phone,
        }


@dataclass(frozen=True)
class Product:
    """A stored product document."""

    id: str  # UUID4 assigned at creation
    title: str
    price: Number
    rating: Number
    description: str
    phone: str
    created_at: datetime  # Set once at creation, stored as "createdAt"

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Product":
        """Build a Product from a Cosmos DB item, ignoring system properties."""
        return cls(
            id=document["id"],
            title=document["title"],
            price=document["price"],
            rating=document["rating"],
            description=document["description"],
            phone=document["phone"],
            created_at=datetime.fromisoformat(document["createdAt"]),
        )

    def to_document(self) -> dict[str, Any]:
        """Serialize to the stored document shape (also the JSON wire shape)."""
        return {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "rating": self.rating,
            "description": self.description,
            "phone": self.phone,
            "createdAt": self.created_at.isoformat(),
        }

    def fields(self) -> ProductFields:
        return ProductFields(
            title=self.title,
            price=self.price,
            rating=self.rating,
            description=self.description,
            phone=self.phone,
        )
