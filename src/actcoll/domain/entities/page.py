"""Page entity - owner of action collections (read-only here)."""

from dataclasses import dataclass, field

from actcoll.domain.policy import PolicySet


@dataclass
class Page:
    """Page of an application, with the policies its collections inherit."""

    id: str
    application_id: str
    name: str = ""
    policies: PolicySet = field(default_factory=dict)
