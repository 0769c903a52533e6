"""Authorization context passed explicitly to every operation."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AuthContext:
    """Caller identity: user id plus group/role subjects."""

    user_id: str
    groups: frozenset[str] = field(default_factory=frozenset)

    @property
    def subjects(self) -> frozenset[str]:
        """All subject identifiers a policy may name for this caller."""
        return frozenset({self.user_id}) | self.groups
