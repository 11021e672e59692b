from __future__ import annotations

import logging
import uuid
from typing import NoReturn

from catalog_api.core.metrics import PRODUCT_WRITES, VALIDATION_ERRORS
from catalog_api.domain.models import EMPTY_PRODUCT_ID, MAX_PRICE, PRICE_QUANTUM, Product
from catalog_api.domain.ports import (
    InvalidArgumentError,
    MissingArgumentError,
    ProductNotFoundError,
    ProductServiceError,
    ProductStorePort,
)


class ProductService:
    """
    Validates input and orchestrates product queries and writes against the store.

    Every rejection is logged as a warning and counted before it is raised; the
    store is never touched for a rejected call. Store failures propagate as-is.
    """

    def __init__(
        self,
        repository: ProductStorePort,
        max_page_size: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repo = repository
        self._max_page_size = max_page_size
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    async def get_products(
        self, search_term: str | None, page: int, page_size: int
    ) -> list[Product]:
        if page < 0:
            self._reject("get_products", InvalidArgumentError("page", "Page cannot be less than 0"))
        if page_size <= 0:
            self._reject(
                "get_products",
                InvalidArgumentError("page_size", "Page size must be greater than 0"),
            )
        if self._max_page_size is not None and page_size > self._max_page_size:
            self._reject(
                "get_products",
                InvalidArgumentError(
                    "page_size", f"Page size cannot exceed {self._max_page_size}"
                ),
            )

        # Whitespace only decides blankness; a non-blank term is matched as given
        term = search_term if search_term and search_term.strip() else None
        return await self._repo.list_products(
            search_term=term, skip=page * page_size, take=page_size
        )

    async def get_product_by_id(self, product_id: uuid.UUID) -> Product | None:
        """Returns None for an unknown id; only the nil id is an error."""
        self._require_id("get_product_by_id", product_id)
        return await self._repo.find_by_id(product_id)

    async def create_product(self, product: Product | None) -> Product:
        product = self._require_product("create_product", product)
        self._validate_content("create_product", product)

        await self._repo.add(product)
        await self._repo.commit()
        PRODUCT_WRITES.labels(operation="create").inc()
        return product

    async def update_product(self, product: Product | None) -> None:
        product = self._require_product("update_product", product)
        self._require_id("update_product", product.id)
        self._validate_content("update_product", product)

        if await self._repo.find_by_id(product.id) is None:
            self._reject("update_product", ProductNotFoundError(product.id))

        await self._repo.update(product)
        await self._repo.commit()
        PRODUCT_WRITES.labels(operation="update").inc()

    async def delete_product(self, product_id: uuid.UUID) -> None:
        self._require_id("delete_product", product_id)

        product = await self._repo.find_by_id(product_id)
        if product is None:
            self._reject("delete_product", ProductNotFoundError(product_id))

        await self._repo.remove(product)
        await self._repo.commit()
        PRODUCT_WRITES.labels(operation="delete").inc()

    # -----------------------------------------------------------------------
    # Validation helpers
    # -----------------------------------------------------------------------

    def _require_id(self, operation: str, product_id: uuid.UUID) -> None:
        if product_id == EMPTY_PRODUCT_ID:
            self._reject(operation, InvalidArgumentError("id", "Id cannot be empty"))

    def _require_product(self, operation: str, product: Product | None) -> Product:
        if product is None:
            self._reject(operation, MissingArgumentError("product", "Product cannot be null"))
        return product

    def _validate_content(self, operation: str, product: Product) -> None:
        if not product.name or not product.name.strip():
            self._reject(operation, InvalidArgumentError("name", "Name cannot be blank"))
        price = product.price
        if not price.is_finite() or price <= 0:
            self._reject(
                operation, InvalidArgumentError("price", "Price must be greater than 0")
            )
        if price > MAX_PRICE:
            self._reject(
                operation, InvalidArgumentError("price", f"Price cannot exceed {MAX_PRICE}")
            )
        if price != price.quantize(PRICE_QUANTUM):
            self._reject(
                operation,
                InvalidArgumentError("price", "Price cannot have more than 2 decimal places"),
            )

    def _reject(self, operation: str, error: ProductServiceError) -> NoReturn:
        self._logger.warning("%s rejected: %s", operation, error)
        VALIDATION_ERRORS.labels(operation=operation, argument=error.argument).inc()
        raise error
