"""Domain exceptions."""


class ActCollError(Exception):
    """Base exception for actcoll."""

    pass


class NotFound(ActCollError):
    """Requested resource does not exist or is not visible to the caller."""

    def __init__(self, entity: str, identifier: str) -> None:
        super().__init__(f"{entity} not found: {identifier}")
        self.entity = entity
        self.identifier = identifier


class VersionUnavailable(ActCollError):
    """Requested view of a collection has no version (e.g. never published)."""

    def __init__(self, collection_id: str, view_mode: str) -> None:
        super().__init__(f"No {view_mode} version of action collection {collection_id}")
        self.collection_id = collection_id
        self.view_mode = view_mode


class ValidationError(ActCollError):
    """Validation failed for input data."""

    pass


class PartialBatchFailure(ActCollError):
    """Bulk write where some documents were stored or removed and others failed."""

    def __init__(
        self, saved_ids: list[str], failures: list, removed_ids: list[str] | None = None
    ) -> None:
        removed_ids = list(removed_ids or [])
        total = len(saved_ids) + len(removed_ids) + len(failures)
        super().__init__(f"{len(failures)} of {total} action collections failed to save")
        self.saved_ids = saved_ids
        self.removed_ids = removed_ids
        self.failures = failures
