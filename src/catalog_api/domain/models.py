from __future__ import annotations

import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# Nil UUID: "no identity yet" on new products, never a valid lookup key.
EMPTY_PRODUCT_ID = uuid.UUID(int=0)

# Prices are stored as NUMERIC(12, 2): whole cents, at most 10 integer digits.
PRICE_QUANTUM = Decimal("0.01")
MAX_PRICE = Decimal("9999999999.99")


# ---------------------------------------------------------------------------
# Aggregate: Product
# ---------------------------------------------------------------------------


class Product(BaseModel):
    """
    The catalog's only entity.

    `id` stays EMPTY_PRODUCT_ID until the store assigns one on insert and is
    never changed afterwards. Content rules (non-blank name, positive price)
    are enforced by ProductService, not here, so that rejected payloads can be
    logged and reported uniformly.
    """

    id: uuid.UUID = Field(default=EMPTY_PRODUCT_ID)
    name: str
    description: str = ""
    price: Decimal


# ---------------------------------------------------------------------------
# API Request/Response Schemas
# ---------------------------------------------------------------------------


class ProductInfo(BaseModel):
    """Request body for create and update."""

    name: str = Field(max_length=512)
    description: str = Field(default="", max_length=4096)
    price: Decimal

    def to_product(self, product_id: uuid.UUID = EMPTY_PRODUCT_ID) -> Product:
        return Product(
            id=product_id,
            name=self.name,
            description=self.description,
            price=self.price,
        )


class ProductRead(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    price: Decimal

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @classmethod
    def from_domain(cls, product: Product) -> ProductRead:
        return cls.model_validate(product)
