"""List action collections by view mode use case."""

from actcoll.application.dto.action_collection_dto import (
    ActionCollectionDTO,
    CollectionFilter,
)
from actcoll.application.view_resolver import populate
from actcoll.domain.exceptions import ValidationError
from actcoll.domain.value_objects import AclPermission, AuthContext


class GetActionCollectionsUseCase:
    """Resolve a filter to collections and return them populated for one view."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, auth: AuthContext, collection_filter: CollectionFilter
    ) -> list[ActionCollectionDTO]:
        """List collections of an application or page, in repository sort order."""
        if not collection_filter.application_id and not collection_filter.page_id:
            raise ValidationError("applicationId or pageId is required")

        view_mode = collection_filter.view_mode
        async with self._uow_factory() as uow:
            repo = uow.action_collections
            if collection_filter.page_id or collection_filter.name:
                collections = await repo.find(
                    collection_filter, auth, AclPermission.READ_ACTIONS
                )
            else:
                collections = await repo.find_all_by_application(
                    collection_filter.application_id,
                    view_mode,
                    auth,
                    AclPermission.READ_ACTIONS,
                    collection_filter.sort,
                )

            actions_by_page: dict[str, list] = {}
            results = []
            for collection in collections:
                if collection.page_id not in actions_by_page:
                    actions_by_page[collection.page_id] = await uow.actions.list_by_page_id(
                        collection.page_id
                    )
                results.append(
                    populate(collection, actions_by_page[collection.page_id], view_mode)
                )

        return results
