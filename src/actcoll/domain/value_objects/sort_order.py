"""Sort order for collection listings."""

from dataclasses import dataclass

from actcoll.domain.exceptions import ValidationError

SORTABLE_FIELDS = ("name", "created_at", "updated_at", "id")


@dataclass(frozen=True)
class SortOrder:
    """Single sort key. Identifier order is always appended as tie-breaker."""

    field: str = "id"
    descending: bool = False

    def __post_init__(self) -> None:
        if self.field not in SORTABLE_FIELDS:
            raise ValidationError(f"Cannot sort by {self.field!r}")

    @classmethod
    def parse(cls, value: str | None) -> "SortOrder":
        """Parse `field` or `-field` (descending)."""
        if not value:
            return cls()
        value = value.strip()
        if value.startswith("-"):
            return cls(field=value[1:], descending=True)
        return cls(field=value)
