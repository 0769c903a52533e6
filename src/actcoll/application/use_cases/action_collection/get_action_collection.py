"""Get single action collection use case."""

from actcoll.application.dto.action_collection_dto import ActionCollectionDTO
from actcoll.application.view_resolver import populate
from actcoll.domain.exceptions import NotFound
from actcoll.domain.value_objects import AclPermission, AuthContext, ViewMode


class GetActionCollectionUseCase:
    """Get one collection in the requested view mode."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, auth: AuthContext, collection_id: str, view_mode: ViewMode
    ) -> ActionCollectionDTO:
        """Get collection by id. Raises VersionUnavailable if never published."""
        async with self._uow_factory() as uow:
            collection = await uow.action_collections.find_by_id(
                collection_id, auth, AclPermission.READ_ACTIONS
            )
            if not collection:
                raise NotFound("ActionCollection", collection_id)
            if view_mode is ViewMode.DRAFT and collection.unpublished.is_deleted:
                raise NotFound("ActionCollection", collection_id)

            page_actions = await uow.actions.list_by_page_id(collection.page_id)

        return populate(collection, page_actions, view_mode)
