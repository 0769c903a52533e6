"""Action entity - owned by the action service, consumed read-only."""

from dataclasses import dataclass
from datetime import datetime

from actcoll.domain.value_objects import ViewMode


@dataclass(frozen=True)
class ActionVersion:
    """One version (draft or published) of an action."""

    name: str
    deleted_at: datetime | None = None
    archived_at: datetime | None = None

    @property
    def is_live(self) -> bool:
        return self.deleted_at is None and self.archived_at is None


@dataclass
class Action:
    """Executable action on a page, with its own draft/published duality."""

    id: str
    application_id: str
    page_id: str
    unpublished: ActionVersion | None = None
    published: ActionVersion | None = None

    def version_for(self, view_mode: ViewMode) -> ActionVersion | None:
        if view_mode is ViewMode.PUBLISHED:
            return self.published
        return self.unpublished
