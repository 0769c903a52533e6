"""Action collection repository port."""

from typing import Protocol

from actcoll.application.dto.action_collection_dto import BatchResult, CollectionFilter
from actcoll.domain.entities import ActionCollection
from actcoll.domain.value_objects import AclPermission, AuthContext, SortOrder, ViewMode


class ActionCollectionRepository(Protocol):
    """Port for permission-scoped action collection persistence.

    Lookups return None (or omit documents) when the caller's subjects are not
    granted `permission` by the collection's policies.
    """

    async def find_by_id(
        self, collection_id: str, auth: AuthContext, permission: AclPermission
    ) -> ActionCollection | None: ...

    async def find_all_by_application(
        self,
        application_id: str,
        view_mode: ViewMode,
        auth: AuthContext,
        permission: AclPermission,
        sort: SortOrder | None = None,
    ) -> list[ActionCollection]: ...

    async def find_by_page_id(
        self, page_id: str, auth: AuthContext, permission: AclPermission
    ) -> list[ActionCollection]: ...

    async def find(
        self,
        collection_filter: CollectionFilter,
        auth: AuthContext,
        permission: AclPermission,
    ) -> list[ActionCollection]: ...

    async def save(self, collection: ActionCollection) -> ActionCollection: ...

    async def save_all(self, collections: list[ActionCollection]) -> BatchResult: ...

    async def delete(self, collection_id: str) -> None: ...

    async def delete_all(self, collection_ids: list[str]) -> BatchResult: ...