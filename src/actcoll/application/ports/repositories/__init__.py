"""Repository ports."""

from actcoll.application.ports.repositories.action_collection_repository import (
    ActionCollectionRepository,
)
from actcoll.application.ports.repositories.action_repository import ActionRepository
from actcoll.application.ports.repositories.page_repository import PageRepository

__all__ = [
    "ActionCollectionRepository",
    "ActionRepository",
    "PageRepository",
]
