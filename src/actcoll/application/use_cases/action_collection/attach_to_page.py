"""Attach action collection to page use case - refreshes inherited policies."""

import logging
from datetime import UTC, datetime

from actcoll.domain.entities import ActionCollection
from actcoll.domain.exceptions import NotFound, ValidationError
from actcoll.domain.policy import derive_policies
from actcoll.domain.value_objects import AclPermission, AuthContext

logger = logging.getLogger(__name__)


class AttachActionCollectionToPageUseCase:
    """Re-derive a collection's policies from its page and persist them.

    Propagation is not automatic: callers invoke this whenever the page's
    policies change.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, auth: AuthContext, collection_id: str, page_id: str
    ) -> ActionCollection:
        async with self._uow_factory() as uow:
            collection = await uow.action_collections.find_by_id(
                collection_id, auth, AclPermission.MANAGE_ACTIONS
            )
            if not collection:
                raise NotFound("ActionCollection", collection_id)

            page = await uow.pages.get_by_id(page_id)
            if not page:
                raise NotFound("Page", page_id)
            if page.id != collection.page_id:
                raise ValidationError("Action collections cannot be moved to another page")

            collection.policies = derive_policies(page.policies)
            collection.updated_at = datetime.now(UTC)
            collection = await uow.action_collections.save(collection)

        logger.info("Propagated policies of page %s to action collection %s", page.id, collection.id)
        return collection
