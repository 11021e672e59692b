from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import ColumnElement, Integer, Numeric, String, Text, Uuid, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from catalog_api.domain.models import Product
from catalog_api.domain.ports import ProductStorePort
from catalog_api.repositories.database import Base

# SQL integers are signed 64-bit; no table can hold more rows than this.
MAX_SQL_INTEGER = 2**63 - 1


class ProductORM(Base):
    __tablename__ = "products"

    # Surrogate key; its ascending order is the catalog's natural order.
    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    def to_domain(self) -> Product:
        return Product(id=self.id, name=self.name, description=self.description, price=self.price)


class SQLAlchemyProductRepository(ProductStorePort):
    """
    Product store over a single AsyncSession.

    Staged changes live in the session until commit(); the session itself is
    owned and closed by whoever created it.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _find_row(self, product_id: uuid.UUID) -> ProductORM | None:
        result = await self._session.execute(
            select(ProductORM).where(ProductORM.id == product_id)
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, product_id: uuid.UUID) -> Product | None:
        row = await self._find_row(product_id)
        if row:
            return row.to_domain()
        return None

    async def list_products(
        self, search_term: str | None, skip: int, take: int
    ) -> list[Product]:
        if skip > MAX_SQL_INTEGER:
            return []

        stmt = select(ProductORM)
        if search_term:
            stmt = stmt.where(self._name_contains(search_term))
        stmt = stmt.order_by(ProductORM.pk).offset(skip).limit(min(take, MAX_SQL_INTEGER))

        result = await self._session.execute(stmt)
        return [row.to_domain() for row in result.scalars()]

    def _name_contains(self, search_term: str) -> ColumnElement[bool]:
        if self._session.get_bind().dialect.name == "sqlite":
            # SQLite's lower() only folds ASCII; use the casefold function
            # registered on every connection by Database.
            folded = func.casefold(ProductORM.name, type_=String)
            return folded.contains(search_term.casefold(), autoescape=True)
        return ProductORM.name.icontains(search_term, autoescape=True)

    async def add(self, product: Product) -> Product:
        product.id = uuid.uuid4()
        self._session.add(
            ProductORM(
                id=product.id,
                name=product.name,
                description=product.description,
                price=product.price,
            )
        )
        return product

    async def update(self, product: Product) -> None:
        row = await self._find_row(product.id)
        if row is None:
            return
        row.name = product.name
        row.description = product.description
        row.price = product.price

    async def remove(self, product: Product) -> None:
        row = await self._find_row(product.id)
        if row is not None:
            await self._session.delete(row)

    async def commit(self) -> None:
        await self._session.commit()
