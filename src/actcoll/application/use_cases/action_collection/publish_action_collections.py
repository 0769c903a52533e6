"""Publish action collections of an application use case."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from actcoll.application.dto.action_collection_dto import CollectionFilter
from actcoll.domain.exceptions import PartialBatchFailure
from actcoll.domain.value_objects import AclPermission, AuthContext, ViewMode

logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    """Collections published and collections removed by a publish."""

    published_ids: list[str] = field(default_factory=list)
    removed_ids: list[str] = field(default_factory=list)


class PublishActionCollectionsUseCase:
    """Copy every draft of an application over its published version.

    Collections whose draft was deleted are removed entirely. Saves and
    removals are best effort: successful ones are committed even when others
    fail, and the failures are reported with PartialBatchFailure.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, auth: AuthContext, application_id: str) -> PublishResult:
        result = PublishResult()
        async with self._uow_factory() as uow:
            repo = uow.action_collections
            collections = await repo.find(
                CollectionFilter(
                    application_id=application_id,
                    view_mode=ViewMode.DRAFT,
                    include_deleted=True,
                ),
                auth,
                AclPermission.MANAGE_ACTIONS,
            )

            now = datetime.now(UTC)
            to_save = []
            to_remove = []
            for collection in collections:
                if collection.unpublished.is_deleted:
                    to_remove.append(collection.id)
                    continue
                collection.publish()
                collection.updated_at = now
                to_save.append(collection)

            removed = await repo.delete_all(to_remove)
            saved = await repo.save_all(to_save)
            result.removed_ids = removed.succeeded_ids
            result.published_ids = saved.succeeded_ids
            failures = removed.failures + saved.failures

        logger.info(
            "Published %d action collections of application %s, removed %d",
            len(result.published_ids),
            application_id,
            len(result.removed_ids),
        )
        if failures:
            logger.warning(
                "Failed to publish %d action collections of application %s",
                len(failures),
                application_id,
            )
            raise PartialBatchFailure(result.published_ids, failures, result.removed_ids)
        return result
