"""Permission kinds for pages and action collections."""

from enum import StrEnum


class AclPermission(StrEnum):
    """Permission kinds a policy can grant."""

    READ_PAGES = "read:pages"
    MANAGE_PAGES = "manage:pages"
    DELETE_PAGES = "delete:pages"

    READ_ACTIONS = "read:actions"
    MANAGE_ACTIONS = "manage:actions"
    DELETE_ACTIONS = "delete:actions"


# Kinds that also satisfy a check for the key kind.
IMPLIED_BY: dict[AclPermission, frozenset[AclPermission]] = {
    AclPermission.READ_PAGES: frozenset({AclPermission.MANAGE_PAGES}),
    AclPermission.READ_ACTIONS: frozenset({AclPermission.MANAGE_ACTIONS}),
}


def granting_permissions(permission: AclPermission) -> frozenset[AclPermission]:
    """Return the permission itself plus every kind that implies it."""
    return frozenset({permission}) | IMPLIED_BY.get(permission, frozenset())
