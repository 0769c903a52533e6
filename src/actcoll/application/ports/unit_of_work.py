"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from actcoll.application.ports.repositories.action_collection_repository import (
    ActionCollectionRepository,
)
from actcoll.application.ports.repositories.action_repository import ActionRepository
from actcoll.application.ports.repositories.page_repository import PageRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def action_collections(self) -> ActionCollectionRepository: ...

    @property
    def actions(self) -> ActionRepository: ...

    @property
    def pages(self) -> PageRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
