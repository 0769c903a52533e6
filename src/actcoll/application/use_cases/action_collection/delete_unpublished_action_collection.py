"""Delete draft of action collection use case."""

import logging
from dataclasses import replace
from datetime import UTC, datetime

from actcoll.application.dto.action_collection_dto import ActionCollectionDTO
from actcoll.application.view_resolver import project
from actcoll.domain.exceptions import NotFound
from actcoll.domain.value_objects import AclPermission, AuthContext, ViewMode

logger = logging.getLogger(__name__)


class DeleteUnpublishedActionCollectionUseCase:
    """Delete the draft of a collection.

    A collection that was never published is removed from the store. One with
    a published version only gets its draft marked deleted; the document stays
    until the next publish removes the published half too.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, auth: AuthContext, collection_id: str) -> ActionCollectionDTO:
        async with self._uow_factory() as uow:
            collection = await uow.action_collections.find_by_id(
                collection_id, auth, AclPermission.DELETE_ACTIONS
            )
            if not collection or collection.unpublished.is_deleted:
                raise NotFound("ActionCollection", collection_id)

            now = datetime.now(UTC)
            if collection.published is None:
                await uow.action_collections.delete(collection.id)
                logger.info("Deleted action collection %s", collection.id)
            else:
                collection.unpublished = replace(collection.unpublished, deleted_at=now)
                collection.updated_at = now
                collection = await uow.action_collections.save(collection)
                logger.info("Marked draft of action collection %s as deleted", collection.id)

        return project(collection, ViewMode.DRAFT)
