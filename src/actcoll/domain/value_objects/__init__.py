"""Domain value objects."""

from actcoll.domain.value_objects.acl_permission import AclPermission
from actcoll.domain.value_objects.auth_context import AuthContext
from actcoll.domain.value_objects.sort_order import SortOrder
from actcoll.domain.value_objects.view_mode import ViewMode

__all__ = [
    "AclPermission",
    "AuthContext",
    "SortOrder",
    "ViewMode",
]
