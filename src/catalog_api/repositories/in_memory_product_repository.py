from __future__ import annotations

import uuid
from collections.abc import Callable

from catalog_api.domain.models import Product
from catalog_api.domain.ports import ProductStorePort


class InMemoryProductRepository(ProductStorePort):
    """
    Dict-backed product store, used for tests and throwaway instances.

    Products are kept in insertion order and stored as copies, so a caller
    mutating a returned Product changes nothing until update() + commit().
    Reads only see committed state.
    """

    def __init__(self, products: list[Product] | None = None) -> None:
        self._products: dict[uuid.UUID, Product] = {}
        self._pending: list[Callable[[], None]] = []
        for p in products or []:
            self._products[p.id] = p.model_copy()

    async def find_by_id(self, product_id: uuid.UUID) -> Product | None:
        product = self._products.get(product_id)
        return product.model_copy() if product else None

    async def list_products(
        self, search_term: str | None, skip: int, take: int
    ) -> list[Product]:
        products = list(self._products.values())
        if search_term:
            term = search_term.casefold()
            products = [p for p in products if term in p.name.casefold()]
        return [p.model_copy() for p in products[skip : skip + take]]

    async def add(self, product: Product) -> Product:
        product.id = uuid.uuid4()
        staged = product.model_copy()
        self._pending.append(lambda: self._products.__setitem__(staged.id, staged))
        return product

    async def update(self, product: Product) -> None:
        staged = product.model_copy()

        def apply() -> None:
            if staged.id in self._products:
                self._products[staged.id] = staged

        self._pending.append(apply)

    async def remove(self, product: Product) -> None:
        product_id = product.id
        self._pending.append(lambda: self._products.pop(product_id, None))

    async def commit(self) -> None:
        pending, self._pending = self._pending, []
        for apply in pending:
            apply()

    @property
    def pending_changes(self) -> int:
        return len(self._pending)
