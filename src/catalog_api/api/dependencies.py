import asyncio
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.config import Settings, get_settings
from catalog_api.domain.ports import ProductStorePort
from catalog_api.repositories.database import Database
from catalog_api.repositories.sqlalchemy_product_repository import SQLAlchemyProductRepository
from catalog_api.services.product_service import ProductService

# Singleton Database (initialized on first access)
_database: Database | None = None
_database_lock = asyncio.Lock()


async def get_database(
    settings: Settings = Depends(get_settings),
) -> Database:
    global _database
    if _database is None:
        async with _database_lock:
            # Concurrent first requests must not build a second engine
            if _database is None:
                database = Database(database_url=settings.database_url)
                await database.initialize()
                _database = database
    return _database


async def get_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session


def get_product_repository(
    session: AsyncSession = Depends(get_session),
) -> ProductStorePort:
    return SQLAlchemyProductRepository(session=session)


def get_product_service(
    repository: ProductStorePort = Depends(get_product_repository),
    settings: Settings = Depends(get_settings),
) -> ProductService:
    return ProductService(repository=repository, max_page_size=settings.max_page_size)


async def close_database() -> None:
    global _database
    if _database is not None:
        await _database.dispose()
        _database = None


SettingsDep = Annotated[Settings, Depends(get_settings)]
