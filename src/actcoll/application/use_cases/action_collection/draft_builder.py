"""Validation of draft edits shared by create and update."""

from dataclasses import replace

from actcoll.application.dto.action_collection_dto import ActionCollectionInput
from actcoll.domain.entities import CollectionVariable, CollectionVersion
from actcoll.domain.exceptions import ValidationError
from actcoll.domain.value_objects import AclPermission, AuthContext


def merge_draft(
    base: CollectionVersion | None, input_data: ActionCollectionInput
) -> CollectionVersion:
    """Overlay the provided input fields onto `base` (or an empty draft)."""
    merged = base or CollectionVersion(name="")
    changes = {}
    if input_data.name is not None:
        changes["name"] = input_data.name.strip()
    if input_data.action_ids is not None:
        changes["action_ids"] = tuple(dict.fromkeys(input_data.action_ids))
    if input_data.default_action_id is not None:
        changes["default_action_id"] = input_data.default_action_id or None
    if input_data.body is not None:
        changes["body"] = input_data.body
    if input_data.variables is not None:
        changes["variables"] = tuple(
            CollectionVariable(name=n, value=v) for n, v in input_data.variables
        )
    return replace(merged, **changes)


async def build_draft(
    uow,
    auth: AuthContext,
    page_id: str,
    input_data: ActionCollectionInput,
    base: CollectionVersion | None = None,
    exclude_id: str | None = None,
) -> CollectionVersion:
    """Merge input into `base`, validate the result against the page.

    Every referenced action must exist and live on `page_id`, and the name
    must not clash with another live draft on the same page.
    """
    draft = merge_draft(base, input_data)
    if not draft.name:
        raise ValidationError("Action collection name is required")

    if draft.default_action_id and draft.default_action_id not in draft.action_ids:
        raise ValidationError(
            f"Default action {draft.default_action_id} is not part of the collection"
        )

    if input_data.action_ids:
        actions = await uow.actions.get_by_ids(list(draft.action_ids))
        found = {a.id: a for a in actions}
        missing = [a for a in draft.action_ids if a not in found]
        if missing:
            raise ValidationError(f"Unknown actions: {', '.join(missing)}")
        pages = sorted({a.page_id for a in actions})
        if pages != [page_id]:
            raise ValidationError(
                f"Actions must all belong to page {page_id}, got pages: {', '.join(pages)}"
            )

    siblings = await uow.action_collections.find_by_page_id(
        page_id, auth, AclPermission.READ_ACTIONS
    )
    for sibling in siblings:
        if sibling.id != exclude_id and sibling.unpublished.name == draft.name:
            raise ValidationError(
                f"Action collection {draft.name!r} already exists on page {page_id}"
            )

    return draft
