"""Update action collection draft use case."""

import logging
from dataclasses import replace
from datetime import UTC, datetime

from actcoll.application.dto.action_collection_dto import (
    ActionCollectionDTO,
    ActionCollectionInput,
)
from actcoll.application.use_cases.action_collection.draft_builder import build_draft
from actcoll.application.view_resolver import populate
from actcoll.domain.exceptions import NotFound, ValidationError
from actcoll.domain.value_objects import AclPermission, AuthContext, ViewMode

logger = logging.getLogger(__name__)


class UpdateActionCollectionUseCase:
    """Merge edits into the draft version. The published version is never touched."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        auth: AuthContext,
        collection_id: str,
        input_data: ActionCollectionInput,
    ) -> ActionCollectionDTO:
        """Merge the provided fields into the draft. References dropped by the edit are archived."""
        async with self._uow_factory() as uow:
            collection = await uow.action_collections.find_by_id(
                collection_id, auth, AclPermission.MANAGE_ACTIONS
            )
            if not collection or collection.unpublished.is_deleted:
                raise NotFound("ActionCollection", collection_id)
            if input_data.page_id and input_data.page_id != collection.page_id:
                raise ValidationError("Action collections cannot be moved to another page")

            previous = collection.unpublished
            draft = await build_draft(
                uow,
                auth,
                collection.page_id,
                input_data,
                base=previous,
                exclude_id=collection.id,
            )
            kept = set(draft.action_ids)
            removed = [a for a in previous.action_ids if a not in kept]
            archived = tuple(
                dict.fromkeys(
                    [a for a in previous.archived_action_ids if a not in kept] + removed
                )
            )
            collection.unpublished = replace(draft, archived_action_ids=archived)
            collection.updated_at = datetime.now(UTC)
            collection = await uow.action_collections.save(collection)
            page_actions = await uow.actions.list_by_page_id(collection.page_id)

        logger.info("Updated draft of action collection %s", collection.id)
        return populate(collection, page_actions, ViewMode.DRAFT)
