from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


def _register_sqlite_functions(dbapi_connection: Any, connection_record: Any) -> None:
    dbapi_connection.create_function("casefold", 1, _casefold)


class Database:
    """Owns the async engine and hands out sessions, one per unit of work."""

    def __init__(self, database_url: str) -> None:
        self.engine = create_async_engine(database_url)
        self.async_session_maker = async_sessionmaker(self.engine, expire_on_commit=False)
        if self.engine.dialect.name == "sqlite":
            # Unicode-aware case folding for name search
            event.listen(self.engine.sync_engine, "connect", _register_sqlite_functions)

    async def initialize(self) -> None:
        # Import registers the ORM tables on Base.metadata
        from catalog_api.repositories import sqlalchemy_product_repository  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    def session(self) -> AsyncSession:
        return self.async_session_maker()

    async def dispose(self) -> None:
        await self.engine.dispose()
