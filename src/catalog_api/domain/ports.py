import uuid
from abc import ABC, abstractmethod

from catalog_api.domain.models import Product


class ProductStorePort(ABC):
    """
    Abstract interface for product persistence.
    ProductService only knows this interface.

    Mutating calls (add, update, remove) are staged; nothing is durable
    until commit() is awaited.
    """

    @abstractmethod
    async def find_by_id(self, product_id: uuid.UUID) -> Product | None:
        """Returns the product with the given id, or None."""
        ...

    @abstractmethod
    async def list_products(
        self, search_term: str | None, skip: int, take: int
    ) -> list[Product]:
        """
        Returns up to `take` products after skipping `skip`, in insertion order.
        A non-empty `search_term` restricts the scan to products whose name
        contains it, ignoring case.
        """
        ...

    @abstractmethod
    async def add(self, product: Product) -> Product:
        """Stages a new product and assigns its id on the given object."""
        ...

    @abstractmethod
    async def update(self, product: Product) -> None:
        """Stages replacement of name, description and price for product.id."""
        ...

    @abstractmethod
    async def remove(self, product: Product) -> None:
        """Stages removal of the product."""
        ...

    @abstractmethod
    async def commit(self) -> None:
        """Makes all staged changes durable."""
        ...


# ---------------------------------------------------------------------------
# Custom Domain Exceptions
# ---------------------------------------------------------------------------


class ProductServiceError(Exception):
    def __init__(self, argument: str, message: str):
        super().__init__(message)
        self.argument = argument


class InvalidArgumentError(ProductServiceError):
    """An argument is outside its accepted range (paging, nil id, content)."""


class MissingArgumentError(ProductServiceError):
    """A required payload is absent."""


class ProductNotFoundError(InvalidArgumentError):
    def __init__(self, product_id: uuid.UUID):
        super().__init__("id", f"Product '{product_id}' does not exist")
        self.product_id = product_id
