"""Create action collection use case."""

import logging
from datetime import UTC, datetime

from actcoll.application.dto.action_collection_dto import (
    ActionCollectionDTO,
    ActionCollectionInput,
)
from actcoll.application.use_cases.action_collection.draft_builder import build_draft
from actcoll.application.view_resolver import populate
from actcoll.domain.entities import ActionCollection
from actcoll.domain.exceptions import NotFound, ValidationError
from actcoll.domain.policy import derive_policies, is_granted
from actcoll.domain.value_objects import AclPermission, AuthContext, ViewMode

logger = logging.getLogger(__name__)


class CreateActionCollectionUseCase:
    """Create a collection draft on a page, inheriting the page's policies."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, auth: AuthContext, input_data: ActionCollectionInput
    ) -> ActionCollectionDTO:
        """Create collection. Caller must be able to manage the page."""
        if not input_data.page_id:
            raise ValidationError("pageId is required")

        async with self._uow_factory() as uow:
            page = await uow.pages.get_by_id(input_data.page_id)
            if not page or not is_granted(
                page.policies, auth.subjects, AclPermission.MANAGE_PAGES
            ):
                raise NotFound("Page", input_data.page_id)

            draft = await build_draft(uow, auth, page.id, input_data)
            now = datetime.now(UTC)
            collection = ActionCollection(
                id=None,
                application_id=page.application_id,
                page_id=page.id,
                unpublished=draft,
                published=None,
                policies=derive_policies(page.policies),
                created_at=now,
                updated_at=now,
            )
            collection = await uow.action_collections.save(collection)
            page_actions = await uow.actions.list_by_page_id(page.id)

        logger.info(
            "Created action collection %s (%r) on page %s",
            collection.id,
            draft.name,
            page.id,
        )
        return populate(collection, page_actions, ViewMode.DRAFT)
