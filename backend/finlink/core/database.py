"""Async SQLAlchemy store handle and the per-request session dependency."""
from typing import AsyncIterator

import structlog
from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
)
from sqlalchemy.orm import DeclarativeBase

log = structlog.get_logger()


class Base(DeclarativeBase):
    pass


class Store:
    """Owns the engine for one SQLite file. Created and disposed by the app lifespan."""

    def __init__(self, url: str):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url)
        self.sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)

    async def init_schema(self):
        # create_all only issues CREATE TABLE for tables that are missing
        from finlink.models import db_models  # noqa: F401  registers the tables

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        log.info("Database schema ready", url=self.url)

    def session(self) -> AsyncSession:
        return self.sessionmaker()

    async def dispose(self):
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    store: Store = request.app.state.store
    async with store.session() as session:
        yield session
