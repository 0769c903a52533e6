"""View mode - which version of a collection an operation targets."""

from enum import StrEnum


class ViewMode(StrEnum):
    """Draft (unpublished, editor) or published (live, runtime) view."""

    DRAFT = "draft"
    PUBLISHED = "published"

    @classmethod
    def from_flag(cls, view_mode: bool) -> "ViewMode":
        """Map the `viewMode=true|false` request flag onto a view mode."""
        return cls.PUBLISHED if view_mode else cls.DRAFT
