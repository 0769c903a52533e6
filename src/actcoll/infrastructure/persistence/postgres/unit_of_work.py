"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from actcoll.infrastructure.persistence.postgres.action_collection_repository import (
    PostgresActionCollectionRepository,
)
from actcoll.infrastructure.persistence.postgres.action_repository import (
    PostgresActionRepository,
)
from actcoll.infrastructure.persistence.postgres.page_repository import (
    PostgresPageRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._action_collections = PostgresActionCollectionRepository(self._conn)
        self._actions = PostgresActionRepository(self._conn)
        self._pages = PostgresPageRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def action_collections(self) -> PostgresActionCollectionRepository:
        return self._action_collections

    @property
    def actions(self) -> PostgresActionRepository:
        return self._actions

    @property
    def pages(self) -> PostgresPageRepository:
        return self._pages

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager)."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
