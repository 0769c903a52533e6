"""View resolver - shapes stored collections into per-view DTOs."""

from collections.abc import Iterable
from dataclasses import replace

from actcoll.application.dto.action_collection_dto import ActionCollectionDTO, ActionSummary
from actcoll.domain.entities import Action, ActionCollection
from actcoll.domain.exceptions import VersionUnavailable
from actcoll.domain.value_objects import ViewMode


def project(collection: ActionCollection, view_mode: ViewMode) -> ActionCollectionDTO:
    """Project one version of `collection` into a DTO.

    Raises VersionUnavailable when the published view is requested for a
    collection that was never published. There is no fallback to the draft.
    """
    version = collection.version_for(view_mode)
    if version is None:
        raise VersionUnavailable(str(collection.id), view_mode.value)
    return ActionCollectionDTO(
        id=str(collection.id),
        application_id=collection.application_id,
        page_id=collection.page_id,
        view_mode=view_mode,
        name=version.name,
        body=version.body,
        variables=[{"name": v.name, "value": v.value} for v in version.variables],
        default_action_id=version.default_action_id,
        action_ids=list(version.action_ids),
        archived_action_ids=list(version.archived_action_ids),
        deleted_at=version.deleted_at,
    )


def split_actions_by_view_mode(
    dto: ActionCollectionDTO,
    page_actions: Iterable[Action],
    view_mode: ViewMode,
) -> ActionCollectionDTO:
    """Return a copy of `dto` holding the actions valid for `view_mode`.

    Valid actions are those referenced by the DTO that live on the DTO's page
    and have a live version for the view. In the draft view, archived
    references that still resolve are returned in `archived_actions`.
    References that do not resolve are dropped without error.
    """
    by_id = {a.id: a for a in page_actions if a.page_id == dto.page_id}

    actions = []
    for action_id in dict.fromkeys(dto.action_ids):
        action = by_id.get(action_id)
        version = action.version_for(view_mode) if action else None
        if version is not None and version.is_live:
            actions.append(ActionSummary(id=action.id, name=version.name, page_id=action.page_id))

    archived = []
    if view_mode is ViewMode.DRAFT:
        for action_id in dict.fromkeys(dto.archived_action_ids):
            action = by_id.get(action_id)
            version = action.unpublished if action else None
            if version is not None and version.deleted_at is None:
                archived.append(
                    ActionSummary(id=action.id, name=version.name, page_id=action.page_id)
                )

    return replace(
        dto,
        variables=[dict(v) for v in dto.variables],
        action_ids=list(dto.action_ids),
        archived_action_ids=list(dto.archived_action_ids),
        actions=actions,
        archived_actions=archived,
    )


def populate(
    collection: ActionCollection,
    page_actions: Iterable[Action],
    view_mode: ViewMode,
) -> ActionCollectionDTO:
    """Project and split in one step."""
    return split_actions_by_view_mode(project(collection, view_mode), page_actions, view_mode)
