"""Action collection entity - draft and published versions in one document."""

from dataclasses import dataclass, field, replace
from datetime import datetime

from actcoll.domain.policy import PolicySet
from actcoll.domain.value_objects import ViewMode


@dataclass(frozen=True)
class CollectionVariable:
    """Named variable declared by a collection body."""

    name: str
    value: str = ""


@dataclass(frozen=True)
class CollectionVersion:
    """One version of a collection: name, default action and action references."""

    name: str
    action_ids: tuple[str, ...] = ()
    archived_action_ids: tuple[str, ...] = ()
    default_action_id: str | None = None
    body: str = ""
    variables: tuple[CollectionVariable, ...] = ()
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass
class ActionCollection:
    """Action collection with an editable draft and an optional published version.

    `unpublished` is always present; `published` stays None until the owning
    application is published for the first time.
    """

    id: str | None
    application_id: str
    page_id: str
    unpublished: CollectionVersion
    published: CollectionVersion | None = None
    policies: PolicySet = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def version_for(self, view_mode: ViewMode) -> CollectionVersion | None:
        """Version served for `view_mode`, or None when it does not exist."""
        if view_mode is ViewMode.PUBLISHED:
            return self.published
        return self.unpublished

    def has_version(self, view_mode: ViewMode) -> bool:
        return self.version_for(view_mode) is not None

    def publish(self) -> None:
        """Overwrite the published version with the current draft."""
        self.published = replace(self.unpublished)
