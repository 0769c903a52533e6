"""Action collection DTOs."""

from dataclasses import dataclass, field
from datetime import datetime

from actcoll.domain.value_objects import SortOrder, ViewMode


@dataclass(frozen=True)
class ActionSummary:
    """One action as seen in one view of a collection."""

    id: str
    name: str
    page_id: str


@dataclass
class ActionCollectionDTO:
    """Flattened view of exactly one version of an action collection."""

    id: str
    application_id: str
    page_id: str
    view_mode: ViewMode
    name: str
    body: str
    variables: list[dict[str, str]]
    default_action_id: str | None
    action_ids: list[str]
    archived_action_ids: list[str]
    deleted_at: datetime | None = None
    actions: list[ActionSummary] = field(default_factory=list)
    archived_actions: list[ActionSummary] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "applicationId": self.application_id,
            "pageId": self.page_id,
            "viewMode": self.view_mode.value,
            "name": self.name,
            "body": self.body,
            "variables": [dict(v) for v in self.variables],
            "defaultActionId": self.default_action_id,
            "actionIds": list(self.action_ids),
            "archivedActionIds": list(self.archived_action_ids),
            "deletedAt": self.deleted_at.isoformat() if self.deleted_at else None,
            "actions": [{"id": a.id, "name": a.name, "pageId": a.page_id} for a in self.actions],
            "archivedActions": [
                {"id": a.id, "name": a.name, "pageId": a.page_id} for a in self.archived_actions
            ],
        }


@dataclass
class ActionCollectionInput:
    """Input for creating or editing the draft of a collection.

    `None` means the field was not provided; an update keeps the current
    draft value for it. An empty `default_action_id` clears the default.
    """

    name: str | None = None
    page_id: str | None = None
    action_ids: list[str] | None = None
    default_action_id: str | None = None
    body: str | None = None
    variables: list[tuple[str, str]] | None = None


@dataclass
class CollectionFilter:
    """Filter for listing collections in one view mode."""

    application_id: str | None = None
    page_id: str | None = None
    name: str | None = None
    view_mode: ViewMode = ViewMode.DRAFT
    sort: SortOrder = field(default_factory=SortOrder)
    include_deleted: bool = False


@dataclass(frozen=True)
class BatchFailure:
    """A document that failed to save or delete in a batch."""

    id: str | None
    reason: str


@dataclass
class BatchResult:
    """Outcome of a best-effort batch write (save or delete)."""

    succeeded_ids: list[str] = field(default_factory=list)
    failures: list[BatchFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
