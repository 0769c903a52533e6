"""Access-control policies and page to collection propagation."""

from collections.abc import Iterable, Mapping

from actcoll.domain.value_objects.acl_permission import AclPermission, granting_permissions

PolicySet = Mapping[str, frozenset[str]]

PAGE_TO_COLLECTION: dict[AclPermission, AclPermission] = {
    AclPermission.READ_PAGES: AclPermission.READ_ACTIONS,
    AclPermission.MANAGE_PAGES: AclPermission.MANAGE_ACTIONS,
    AclPermission.DELETE_PAGES: AclPermission.DELETE_ACTIONS,
}


def derive_policies(page_policies: PolicySet) -> dict[str, frozenset[str]]:
    """Derive a collection's policy set from its page's policy set.

    Each page permission kind is mapped to its collection analog with the
    same subjects. Kinds without an analog are dropped; kinds mapping to the
    same collection kind are merged. The input is left untouched.
    """
    derived: dict[str, frozenset[str]] = {}
    for kind, subjects in page_policies.items():
        try:
            target = PAGE_TO_COLLECTION[AclPermission(kind)]
        except (KeyError, ValueError):
            continue
        derived[target.value] = derived.get(target.value, frozenset()) | frozenset(subjects)
    return derived


def is_granted(
    policies: PolicySet, subjects: Iterable[str], permission: AclPermission
) -> bool:
    """Check whether any subject holds `permission` (or a kind implying it)."""
    subjects = frozenset(subjects)
    return any(
        subjects & frozenset(policies.get(kind.value, ()))
        for kind in granting_permissions(permission)
    )


def policies_to_document(policies: PolicySet) -> dict[str, list[str]]:
    """Serialize a policy set for storage (sorted subject lists)."""
    return {kind: sorted(subjects) for kind, subjects in sorted(policies.items())}


def policies_from_document(document: Mapping[str, Iterable[str]] | None) -> dict[str, frozenset[str]]:
    """Inverse of policies_to_document."""
    return {kind: frozenset(subjects) for kind, subjects in (document or {}).items()}
